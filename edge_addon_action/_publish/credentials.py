"""Credential providers for the Edge Add-ons API.

Two schemes are supported:
- client-credentials: OAuth2 token exchange against ACCESS_TOKEN_URL,
  producing ``Authorization: Bearer <token>``
- api-key: static ``Authorization: ApiKey <key>`` plus ``X-ClientID``
"""

from typing import Dict, Optional

import requests

from edge_addon_action.exceptions import AuthenticationError
from edge_addon_action.http_client import get_default_headers
from edge_addon_action.logging_config import logger

from .protocol import EDGE_ADDONS_API

# Token exchange timeout in seconds
TOKEN_TIMEOUT = 60


class ClientCredentialsProvider:
    """
    OAuth2 client-credentials provider.

    The token is requested on the first call to ``get_auth_headers`` and
    cached on this instance for the rest of the run. Expiry is not tracked;
    a token that lapses mid-run surfaces as a 401 from the API.
    """

    def __init__(
        self,
        access_token_url: str,
        client_id: str,
        client_secret: str,
        api_base_url: str = EDGE_ADDONS_API,
    ) -> None:
        self._access_token_url = access_token_url
        self._client_id = client_id
        self._client_secret = client_secret
        self._scope = f"{api_base_url.rstrip('/')}/.default"
        self._token: Optional[str] = None

    @property
    def name(self) -> str:
        return "client-credentials"

    @property
    def has_token(self) -> bool:
        """Check whether a token has already been obtained."""
        return self._token is not None

    def get_auth_headers(self) -> Dict[str, str]:
        if self._token is None:
            self._token = self._fetch_token()
        return {"Authorization": f"Bearer {self._token}"}

    def _fetch_token(self) -> str:
        """
        Exchange client credentials for an access token.

        Raises:
            AuthenticationError: On transport failure, non-2xx status,
                malformed JSON or a payload without access_token
        """
        logger.info(f"Requesting access token for client {self._client_id}")
        form = {
            "scope": self._scope,
            "grant_type": "client_credentials",
            "client_id": self._client_id,
            "client_secret": self._client_secret,
        }
        try:
            response = requests.post(
                self._access_token_url,
                headers=get_default_headers(content_type="application/x-www-form-urlencoded"),
                data=form,
                timeout=TOKEN_TIMEOUT,
            )
        except requests.exceptions.ConnectionError:
            raise AuthenticationError("Failed to connect to access token endpoint")
        except requests.exceptions.Timeout:
            raise AuthenticationError("Access token request timed out")

        if not response.ok:
            err_msg = f"Failed to obtain access token. [{response.status_code}]"
            try:
                response_json = response.json()
                if isinstance(response_json, dict) and "error_description" in response_json:
                    err_msg += f" - {response_json['error_description']}"
            except ValueError:
                pass
            raise AuthenticationError(err_msg)

        try:
            data = response.json()
        except ValueError:
            raise AuthenticationError("Access token response is not valid JSON")

        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise AuthenticationError("Access token response does not contain access_token")

        logger.debug(f"Obtained {data.get('token_type', 'Bearer')} token, expires in {data.get('expires_in', '?')}s")
        return token


class ApiKeyProvider:
    """Static API key provider. No network exchange is needed."""

    def __init__(self, api_key: str, client_id: str) -> None:
        self._api_key = api_key
        self._client_id = client_id

    @property
    def name(self) -> str:
        return "api-key"

    def get_auth_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"ApiKey {self._api_key}",
            "X-ClientID": self._client_id,
        }
