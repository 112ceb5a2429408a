import base64
import hashlib
import json
import zlib
from typing import Any, Optional, Union

from cryptography.fernet import Fernet, InvalidToken

from .exceptions import ContentDecodeError
from .models import DownloadResult, ParseAttempt
from syncmarx.utils.logger import get_logger

logger = get_logger(__name__)

# Fernet keys are 32 bytes, urlsafe base64 encoded
FERNET_KEY_LENGTH = 44


def derive_fernet_key(secret: Union[str, bytes]) -> bytes:
    """Turns an arbitrary secret into a Fernet key; a ready-made key is used as is."""
    if isinstance(secret, bytes):
        secret = secret.decode('utf-8')
    if len(secret) == FERNET_KEY_LENGTH:
        return secret.encode('utf-8')
    return base64.urlsafe_b64encode(hashlib.sha256(secret.encode('utf-8')).digest())


class ContentCodec:
    """
    Converts structured content to and from the bytes stored remotely.

    Uncompressed content is stored as indented JSON. Compressed content is
    zlib-compressed JSON encrypted with Fernet. Nothing in the stored object
    records which of the two was used: on read, a payload that parses as JSON
    is taken to be uncompressed, and anything else is decrypted.
    """

    def __init__(self, secret: Optional[Union[str, bytes]] = None):
        if not secret:
            logger.warning("No encryption secret configured. Using an ephemeral key - "
                           "compressed files written by this process cannot be read after restart.")
            key = Fernet.generate_key()
        else:
            key = derive_fernet_key(secret)
        self._cipher = Fernet(key)

    def encode(self, content: Any, use_compression: bool) -> bytes:
        if use_compression:
            return self.encrypt(content)
        return json.dumps(content, indent=2).encode('utf-8')

    def decode(self, payload: bytes) -> DownloadResult:
        attempt = self.try_parse_plain(payload)
        if attempt.ok:
            return DownloadResult(content=attempt.value, was_compressed=False)
        return DownloadResult(content=self.decrypt(payload), was_compressed=True)

    @staticmethod
    def try_parse_plain(payload: bytes) -> ParseAttempt:
        try:
            return ParseAttempt(ok=True, value=json.loads(payload.decode('utf-8')))
        except (UnicodeDecodeError, ValueError):
            return ParseAttempt(ok=False)

    def encrypt(self, content: Any) -> bytes:
        compressed = zlib.compress(json.dumps(content, separators=(',', ':')).encode('utf-8'))
        return self._cipher.encrypt(compressed)

    def decrypt(self, payload: bytes) -> Any:
        try:
            compressed = self._cipher.decrypt(payload)
        except InvalidToken as e:
            logger.error("Payload is neither plain JSON nor encrypted with the configured key.")
            raise ContentDecodeError("Unable to decrypt downloaded payload.") from e
        try:
            return json.loads(zlib.decompress(compressed).decode('utf-8'))
        except (zlib.error, UnicodeDecodeError, ValueError) as e:
            logger.error(f"Decrypted payload could not be decompressed: {e}")
            raise ContentDecodeError(f"Corrupt compressed payload: {e}") from e
