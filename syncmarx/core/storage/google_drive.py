from typing import Any, List, Optional, Union

import requests

from .base_storage_provider import BaseStorageProvider
from .content_codec import ContentCodec
from .credential_state import CredentialState
from .endpoints import FILES_URL, REVOKE_URL
from .exceptions import RemoteFileNotFoundError
from .models import Credentials, DownloadResult, RemoteFileRecord, UploadRequest
from .remote_index import RemoteFileIndex
from .token_guard import TokenLifecycleGuard
from .transport import bearer_headers, send_request
from .upload_session import ResumableUpload
from syncmarx.utils.logger import get_logger

logger = get_logger(__name__)


class GoogleDriveStorage(BaseStorageProvider):
    """
    Google Drive backend storing files in the application data folder.

    Each public operation is a plain sequence of HTTP calls: validate (and if
    needed refresh) the token, list the folder when a path must be resolved,
    then perform the transfer. Calls are not serialized against each other.
    Two concurrent uploads of a path that does not exist yet can both decide
    to create it and leave two remote files with the same name; callers that
    care must serialize uploads per path themselves.
    """

    def __init__(self, refresh_url: str, encryption_secret: Optional[Union[str, bytes]] = None,
                 session: Optional[requests.Session] = None, codec: Optional[ContentCodec] = None):
        self.session = session or requests.Session()
        self.credential_state = CredentialState()
        self.codec = codec or ContentCodec(encryption_secret)
        self.token_guard = TokenLifecycleGuard(self.session, self.credential_state, refresh_url)
        self.file_index = RemoteFileIndex(self.session)
        self.uploader = ResumableUpload(self.session)

    def get_type(self) -> str:
        return 'googledrive'

    def get_credentials(self) -> Optional[Credentials]:
        return self.credential_state.snapshot()

    def is_authorized(self) -> bool:
        return self.credential_state.is_authorized

    def authorize(self, credentials: Credentials) -> None:
        self.credential_state.set(credentials)

    def deauthorize(self) -> None:
        access_token = self.token_guard.ensure_valid_token()
        send_request(self.session, 'GET', REVOKE_URL, params={'token': access_token})
        self.credential_state.clear()
        logger.info("Google Drive access revoked.")

    def files_list(self) -> List[RemoteFileRecord]:
        access_token = self.token_guard.ensure_valid_token()
        return self.file_index.list_files(access_token)

    def file_upload(self, path: str, contents: Any, compression: bool = False) -> None:
        self.upload(UploadRequest(logical_path=path, content=contents, use_compression=compression))

    def upload(self, request: UploadRequest) -> None:
        payload = self.codec.encode(request.content, request.use_compression)

        access_token = self.token_guard.ensure_valid_token()
        existing = RemoteFileIndex.resolve(request.logical_path, self.file_index.list_files(access_token))
        self.uploader.upload(request.file_name, payload, access_token, existing)
        logger.info(f"Uploaded '{request.logical_path}' ({len(payload)} bytes, compression={request.use_compression}).")

    def file_download(self, path: str) -> DownloadResult:
        access_token = self.token_guard.ensure_valid_token()
        record = RemoteFileIndex.resolve(path, self.file_index.list_files(access_token))
        if record is None:
            logger.error(f"Cannot download '{path}': no matching file in Drive.")
            raise RemoteFileNotFoundError(path)

        response = send_request(self.session, 'GET', f"{FILES_URL}/{record.id}",
                                params={'alt': 'media'},
                                headers=bearer_headers(access_token))
        logger.info(f"File downloaded: '{path}' (ID: {record.id}).")
        return self.codec.decode(response.content)
