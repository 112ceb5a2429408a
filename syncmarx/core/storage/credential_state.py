import threading
from typing import Optional

from .exceptions import NotAuthorizedError
from .models import Credentials


class CredentialState:
    """
    Holds the access/refresh token pair for one adapter instance.

    The sync engine may call into the same adapter from several threads, so
    every read and write of the pair happens under a lock: a reader never sees
    a refresh that is only half applied.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._credentials: Optional[Credentials] = None

    def set(self, credentials: Credentials) -> None:
        with self._lock:
            self._credentials = credentials

    def clear(self) -> None:
        with self._lock:
            self._credentials = None

    def replace_access_token(self, expected: Credentials, access_token: str) -> str:
        """
        Swaps in a refreshed access token if the stored pair is still `expected`.

        If another caller authorized with a different pair while the refresh
        was in flight, the stored pair is left alone and its access token is
        returned instead.

        Raises:
            NotAuthorizedError: If the credentials were cleared in the meantime.
        """
        with self._lock:
            if self._credentials is None or not self._credentials.access_token:
                raise NotAuthorizedError("Credentials were cleared while the access token was being refreshed.")
            if self._credentials != expected:
                return self._credentials.access_token
            self._credentials = Credentials(access_token=access_token,
                                            refresh_token=expected.refresh_token)
            return access_token

    def snapshot(self) -> Optional[Credentials]:
        """Returns the current pair, or None when unauthorized."""
        with self._lock:
            if self._credentials is None or not self._credentials.access_token:
                return None
            return self._credentials

    @property
    def is_authorized(self) -> bool:
        return self.snapshot() is not None

    @property
    def access_token(self) -> Optional[str]:
        credentials = self.snapshot()
        return credentials.access_token if credentials else None

    @property
    def refresh_token(self) -> Optional[str]:
        credentials = self.snapshot()
        return credentials.refresh_token if credentials else None
