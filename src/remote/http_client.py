"""Authenticated HTTP transport for the Kaggle API.

This module wraps a requests session with per-client credentials,
headers, and timeout. Nothing is stored on shared class state.
"""

from __future__ import annotations

from typing import Any

import requests
from requests.auth import HTTPBasicAuth

from core.config import ClientConfig
from core.constants import BASE_URL, REQUIRED_HEADERS
from core.errors import KaggleError, RequestError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class KaggleHttpClient:
    """Issue authenticated requests against the versioned API root."""

    def __init__(
        self,
        config: ClientConfig,
        session: requests.Session | None = None,
        base_url: str = BASE_URL,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()
        self._base_url = base_url.rstrip("/")

    def url_for(self, endpoint: str) -> str:
        """Join an endpoint path onto the API root."""
        return f"{self._base_url}/{endpoint.lstrip('/')}"

    def request(self, method: str, endpoint: str, **kwargs: Any) -> requests.Response:
        """Send one authenticated request.

        Args:
            method: HTTP method name.
            endpoint: Endpoint path below the API root.
            **kwargs: Extra ``requests`` arguments such as ``params``.

        Returns:
            Raw response; status handling is left to the caller.

        Raises:
            KaggleError: If the client is in cache-only mode.
            RequestError: On timeouts and other transport failures.
        """
        if self._config.cache_only:
            raise KaggleError(
                f"Network access is disabled in cache-only mode (requested {endpoint}). "
                "Create the client without cache_only to reach the Kaggle API."
            )
        url = self.url_for(endpoint)
        headers = {**REQUIRED_HEADERS, **kwargs.pop("headers", {})}
        _LOGGER.debug("kaggle_request", method=method, url=url)
        try:
            return self._session.request(
                method,
                url,
                headers=headers,
                auth=self._auth(),
                timeout=self._config.timeout_seconds,
                **kwargs,
            )
        except requests.Timeout as error:
            raise RequestError(
                f"Request timed out after {self._config.timeout_seconds}s: {url}"
            ) from error
        except requests.RequestException as error:
            raise RequestError(f"Request failed: {error}") from error

    def get(self, endpoint: str, **kwargs: Any) -> requests.Response:
        """Send an authenticated GET request."""
        return self.request("GET", endpoint, **kwargs)

    def _auth(self) -> HTTPBasicAuth:
        return HTTPBasicAuth(self._config.username or "", self._config.api_key or "")
