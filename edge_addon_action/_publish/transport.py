"""HTTP request layer for the Edge Add-ons API."""

from typing import Any, Dict, Optional

import requests

from edge_addon_action.exceptions import APIError
from edge_addon_action.http_client import get_default_headers
from edge_addon_action.logging_config import logger

from .protocol import EDGE_ADDONS_API, CredentialProvider

# Request timeout in seconds
REQUEST_TIMEOUT = 120


class EdgeAddonsClient:
    """
    Issues authenticated requests against the Edge Add-ons API.

    Every request carries the provider's auth headers. Any non-2xx response
    raises APIError with the raw status and body; retrying is left to the
    caller.
    """

    def __init__(self, credentials: CredentialProvider, api_base_url: str = EDGE_ADDONS_API) -> None:
        self._credentials = credentials
        self._api_base_url = api_base_url.rstrip("/")

    @property
    def api_base_url(self) -> str:
        return self._api_base_url

    def request(
        self,
        path: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        data: Optional[bytes] = None,
        json: Optional[Any] = None,
    ) -> requests.Response:
        """
        Send a request to ``api_base_url + path``.

        Args:
            path: API path beginning with "/"
            method: HTTP method
            headers: Extra headers (e.g. Content-Type)
            data: Raw request body
            json: JSON request body

        Returns:
            The successful response

        Raises:
            AuthenticationError: If the credential provider cannot produce headers
            APIError: On transport failure or a non-2xx status
        """
        request_headers = get_default_headers()
        if headers:
            request_headers.update(headers)
        request_headers.update(self._credentials.get_auth_headers())

        url = f"{self._api_base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            response = requests.request(
                method,
                url,
                headers=request_headers,
                data=data,
                json=json,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.exceptions.ConnectionError:
            raise APIError("Failed to connect to Edge Add-ons API")
        except requests.exceptions.Timeout:
            raise APIError("Edge Add-ons API request timed out")

        if not response.ok:
            raise APIError(
                f"{method} {path} failed. [{response.status_code}]",
                status_code=response.status_code,
                body=response.text,
            )

        return response
