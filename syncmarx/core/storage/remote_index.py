from typing import List, Optional, Sequence

import requests

from .endpoints import APP_DATA_FOLDER, FILES_URL
from .exceptions import ProtocolError
from .models import RemoteFileRecord
from .transport import bearer_headers, send_request
from syncmarx.utils.logger import get_logger

logger = get_logger(__name__)


class RemoteFileIndex:
    """
    Lists the objects in the adapter's application folder.

    Every call goes to the remote API; results are never cached, so two
    consecutive calls may see different remote states. Only the first page
    of results is read.
    """

    def __init__(self, session: requests.Session, files_url: str = FILES_URL):
        self.session = session
        self.files_url = files_url

    def list_files(self, access_token: str) -> List[RemoteFileRecord]:
        response = send_request(
            self.session, 'GET', self.files_url,
            params={'spaces': APP_DATA_FOLDER},
            headers=bearer_headers(access_token),
        )
        try:
            body = response.json()
        except ValueError as e:
            raise ProtocolError(f"File listing response is not valid JSON: {e}") from e

        try:
            records = [RemoteFileRecord(id=entry['id'], name=entry['name'])
                       for entry in body.get('files', [])]
        except (AttributeError, KeyError, TypeError) as e:
            logger.error(f"Malformed file listing response: {e!r}")
            raise ProtocolError(f"File listing response is malformed: {e!r}") from e

        logger.info(f"Found {len(records)} files in '{APP_DATA_FOLDER}'.")
        return records

    @staticmethod
    def resolve(path: str, files: Sequence[RemoteFileRecord]) -> Optional[RemoteFileRecord]:
        """
        Returns the first record whose logical path equals `path`, or None.

        Duplicate names are possible remotely; listing order decides the winner.
        """
        for record in files:
            if record.logical_path == path:
                return record
        return None
