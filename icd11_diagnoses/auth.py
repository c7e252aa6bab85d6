"""OAuth2 authentication for WHO ICD-11 API."""

import logging

from .exceptions import AuthenticationError, RemoteError, TransportError
from .transport import Transport

logger = logging.getLogger(__name__)


TOKEN_URL = "https://icdaccessmanagement.who.int/connect/token"
SCOPE = "icdapi_access"
GRANT_TYPE = "client_credentials"


def fetch_token(transport: Transport, client_id: str, client_secret: str,
                token_url: str = TOKEN_URL, timeout: float = 10.0) -> str:
    """Request a bearer token with the client-credentials grant.

    The token is not refreshed; callers re-run this when the API starts
    rejecting it.
    """
    try:
        response = transport.send(
            "POST",
            token_url,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            data={
                "client_id": client_id,
                "client_secret": client_secret,
                "scope": SCOPE,
                "grant_type": GRANT_TYPE,
            },
            timeout=timeout,
        )
    except TransportError as e:
        raise TransportError(e.message, "initialize", token_url) from e

    if response.status != 200:
        raise AuthenticationError(
            f"Token endpoint answered {response.status}: {response.text}",
            "initialize",
            token_url,
        )

    try:
        data = response.json()
    except RemoteError as e:
        raise AuthenticationError("Token response is not JSON", "initialize", token_url) from e
    token = data.get("access_token")
    if not token:
        raise AuthenticationError("Token response has no access_token", "initialize", token_url)

    logger.info("Obtained ICD API access token")
    return token
