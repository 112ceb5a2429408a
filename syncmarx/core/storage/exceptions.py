class StorageProviderError(Exception):
    """Base exception for storage provider errors."""
    pass

class UnsupportedProviderError(StorageProviderError):
    """Raised when no storage provider is registered for a requested type."""
    pass

class NotAuthorizedError(StorageProviderError):
    """Raised when an authenticated operation is attempted without credentials."""
    pass

class AuthExpiredError(StorageProviderError):
    """The access token was rejected and exchanging the refresh token failed too."""
    pass

class ProtocolError(StorageProviderError):
    """A response was missing data the protocol requires (e.g. an upload session location)."""
    pass

class RemoteFileNotFoundError(StorageProviderError):
    """No remote object matches the requested logical path."""

    def __init__(self, path: str):
        super().__init__(f"No remote file found for path '{path}'.")
        self.path = path

class TransportError(StorageProviderError, ConnectionError):
    """A request failed at the network level or was rejected by the remote API."""
    pass

class ContentDecodeError(StorageProviderError):
    """Downloaded bytes are neither plain JSON nor a valid encrypted payload."""
    pass
