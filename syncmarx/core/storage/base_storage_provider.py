import abc
from typing import Any, List, Optional

from .models import Credentials, DownloadResult, RemoteFileRecord


class BaseStorageProvider(abc.ABC):
    """Abstract base class for the remote storage backends a sync engine talks to."""

    @abc.abstractmethod
    def get_type(self) -> str:
        """Short identifier of the backend, e.g. 'googledrive'."""
        pass

    @abc.abstractmethod
    def authorize(self, credentials: Credentials) -> None:
        """
        Stores the given credentials, replacing any previous ones.

        No remote validation happens here.
        """
        pass

    @abc.abstractmethod
    def deauthorize(self) -> None:
        """
        Revokes the current credentials remotely, then forgets them locally.

        If revoking fails the local credentials are kept and the error propagates.
        """
        pass

    @abc.abstractmethod
    def is_authorized(self) -> bool:
        pass

    @abc.abstractmethod
    def get_credentials(self) -> Optional[Credentials]:
        """Returns the current credentials, or None when unauthorized."""
        pass

    @abc.abstractmethod
    def files_list(self) -> List[RemoteFileRecord]:
        """
        Lists the files this backend stores for the sync engine.

        Returns:
            Records in the order the remote listing returned them.
        """
        pass

    @abc.abstractmethod
    def file_upload(self, path: str, contents: Any, compression: bool = False) -> None:
        """
        Writes `contents` to the logical `path`, creating or replacing the file.

        Args:
            path: Logical path such as '/bookmarks.json'.
            contents: JSON-serializable value to store.
            compression: Compress and encrypt the stored payload.
        """
        pass

    @abc.abstractmethod
    def file_download(self, path: str) -> DownloadResult:
        """
        Reads the file at the logical `path`.

        Raises:
            RemoteFileNotFoundError: If no remote file matches the path.
        """
        pass
