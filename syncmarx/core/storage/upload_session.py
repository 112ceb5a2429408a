from typing import Optional

import requests

from .endpoints import APP_DATA_FOLDER, UPLOAD_MIME_TYPE, UPLOAD_URL
from .exceptions import ProtocolError
from .models import RemoteFileRecord
from .transport import bearer_headers, send_request
from syncmarx.utils.logger import get_logger

logger = get_logger(__name__)


class ResumableUpload:
    """
    Two-step Drive resumable upload: open a session, then PUT the bytes to it.

    Nothing is retried, chunked or resumed. If the second request never
    happens the session is left open on Google's side.
    """

    def __init__(self, session: requests.Session, upload_url: str = UPLOAD_URL):
        self.session = session
        self.upload_url = upload_url

    def upload(self, file_name: str, payload: bytes, access_token: str,
               existing: Optional[RemoteFileRecord] = None) -> None:
        location = self.initiate(file_name, len(payload), access_token, existing)
        self.transfer(location, payload, access_token)

    def initiate(self, file_name: str, size: int, access_token: str,
                 existing: Optional[RemoteFileRecord] = None) -> str:
        """Opens an upload session and returns its location URL."""
        metadata = {'name': file_name, 'mimeType': UPLOAD_MIME_TYPE}
        if existing:
            # Parents cannot be changed through an update, so they are only sent on create
            method = 'PUT'
            url = f"{self.upload_url}/{existing.id}"
            logger.info(f"Updating existing file '{file_name}' (ID: {existing.id}).")
        else:
            method = 'POST'
            url = self.upload_url
            metadata['parents'] = [APP_DATA_FOLDER]
            logger.info(f"Creating new file '{file_name}' in '{APP_DATA_FOLDER}'.")

        headers = bearer_headers(access_token)
        headers.update({
            'Content-Type': 'application/json; charset=UTF-8',
            'X-Upload-Content-Length': str(size),
            'X-Upload-Content-Type': UPLOAD_MIME_TYPE,
        })
        response = send_request(self.session, method, url,
                                params={'uploadType': 'resumable'},
                                json=metadata,
                                headers=headers)

        location = response.headers.get('Location')
        if not location:
            logger.error(f"Upload session for '{file_name}' was opened without a Location header.")
            raise ProtocolError(f"No upload session location returned for '{file_name}'.")
        return location

    def transfer(self, location: str, payload: bytes, access_token: str) -> None:
        send_request(self.session, 'PUT', location,
                     params={'uploadType': 'resumable'},
                     data=payload,
                     headers=bearer_headers(access_token))
        logger.info(f"Transferred {len(payload)} bytes.")
