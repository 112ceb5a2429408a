import requests

from .credential_state import CredentialState
from .endpoints import TOKENINFO_URL
from .exceptions import AuthExpiredError, NotAuthorizedError, TransportError
from .models import Credentials
from .transport import send_request
from syncmarx.utils.logger import get_logger

logger = get_logger(__name__)


class TokenLifecycleGuard:
    """
    Makes sure the stored access token is usable before an authenticated call.

    The token is checked against Google's tokeninfo endpoint. If that check
    fails for any reason, the refresh token is exchanged for a new access token
    through the syncmarx refresh proxy. There is exactly one recovery attempt
    per call, and the new token is assumed valid without re-checking it.
    """

    def __init__(self, session: requests.Session, credential_state: CredentialState,
                 refresh_url: str, tokeninfo_url: str = TOKENINFO_URL):
        self.session = session
        self.credential_state = credential_state
        self.refresh_url = refresh_url
        self.tokeninfo_url = tokeninfo_url

    def ensure_valid_token(self) -> str:
        """Returns an access token that is valid, refreshing it first if needed."""
        credentials = self.credential_state.snapshot()
        if credentials is None:
            raise NotAuthorizedError("Storage provider is not authorized.")

        logger.info("Verifying access token...")
        try:
            response = send_request(self.session, 'GET', self.tokeninfo_url,
                                    params={'access_token': credentials.access_token})
        except TransportError as e:
            logger.info(f"Access token rejected ({e}). Attempting to fetch new token...")
            return self._refresh(credentials)

        logger.debug(f"Token info request returned HTTP {response.status_code}")
        return credentials.access_token

    def _refresh(self, credentials: Credentials) -> str:
        try:
            response = send_request(self.session, 'POST', self.refresh_url,
                                    data={'refresh_token': credentials.refresh_token})
            body = response.json()
            access_token = body.get('access_token') if isinstance(body, dict) else None
        except (TransportError, ValueError) as e:
            logger.error(f"Failed to refresh access token: {e}")
            raise AuthExpiredError(f"Access token expired and refresh failed: {e}") from e

        if not access_token:
            logger.error("Refresh endpoint response did not include an access token.")
            raise AuthExpiredError("Access token expired and refresh returned no access token.")

        current_token = self.credential_state.replace_access_token(credentials, access_token)
        if current_token != access_token:
            logger.info("Credentials changed during refresh; keeping the newly authorized token.")
        else:
            logger.info("Obtained new token!")
        return current_token
