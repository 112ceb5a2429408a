from typing import Dict

import requests
from requests.exceptions import HTTPError, RequestException

from .exceptions import TransportError
from syncmarx.utils.logger import get_logger

logger = get_logger(__name__)


def bearer_headers(access_token: str) -> Dict[str, str]:
    return {'Authorization': 'Bearer ' + access_token}


def send_request(session: requests.Session, method: str, url: str, **kwargs) -> requests.Response:
    """
    Issues a single HTTP request and returns the response if it was successful.

    Network failures and 4XX/5XX responses are both raised as TransportError,
    with the original requests exception chained as the cause. No retries.
    """
    try:
        response = session.request(method, url, **kwargs)
        response.raise_for_status()
        return response
    except HTTPError as http_err:
        status = http_err.response.status_code if http_err.response is not None else 'unknown'
        logger.debug(f"{method} {url} rejected with HTTP {status}")
        raise TransportError(f"{method} {url} failed with HTTP {status}: {http_err}") from http_err
    except RequestException as req_err:
        logger.debug(f"{method} {url} failed: {req_err}")
        raise TransportError(f"{method} {url} failed: {req_err}") from req_err
