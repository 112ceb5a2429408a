from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Credentials:
    """An OAuth access/refresh token pair. Both tokens are set or neither is."""
    access_token: str
    refresh_token: str

    def __post_init__(self):
        if bool(self.access_token) != bool(self.refresh_token):
            raise ValueError("Credentials require both an access token and a refresh token.")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Credentials":
        # The sync engine stores camelCase keys; accept snake_case as well
        access_token = data.get('accessToken', data.get('access_token'))
        refresh_token = data.get('refreshToken', data.get('refresh_token'))
        return cls(access_token=access_token, refresh_token=refresh_token)

    def to_dict(self) -> Dict[str, str]:
        return {'accessToken': self.access_token, 'refreshToken': self.refresh_token}


@dataclass(frozen=True)
class RemoteFileRecord:
    id: str
    name: str

    @property
    def logical_path(self) -> str:
        return '/' + self.name

    @property
    def path_lower(self) -> str:
        return self.logical_path.lower()


@dataclass
class UploadRequest:
    logical_path: str
    content: Any = None
    use_compression: bool = False

    @property
    def file_name(self) -> str:
        """Remote object name: the logical path without its leading slash."""
        if self.logical_path.startswith('/'):
            return self.logical_path[1:]
        return self.logical_path


@dataclass
class DownloadResult:
    content: Any = None
    was_compressed: bool = False


@dataclass(frozen=True)
class ParseAttempt:
    """Outcome of trying to read a payload as plain JSON; value is only meaningful when ok."""
    ok: bool
    value: Optional[Any] = field(default=None)
