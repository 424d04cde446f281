"""
BrowserStack REST Client
Thin async wrapper over httpx shared by all product tools.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from .config import ServerConfig

logger = logging.getLogger(__name__)


class BrowserStackAPIError(Exception):
    """Raised when a BrowserStack API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:
        message = super().__str__()
        if self.status_code is not None:
            return f"{message} (HTTP {self.status_code})"
        return message


class CredentialsMissingError(BrowserStackAPIError):
    """Raised when a request needs credentials that are not configured."""


class BrowserStackClient:
    """Manages the HTTP client used to talk to the BrowserStack REST APIs."""

    def __init__(self, config: ServerConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize the client.

        Args:
            config: Server configuration carrying credentials and base URLs
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._client_lock = asyncio.Lock()

    @property
    def username(self) -> Optional[str]:
        return self.config.username

    async def _get_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                if not self.config.has_credentials:
                    raise CredentialsMissingError(
                        "BROWSERSTACK_USERNAME and BROWSERSTACK_ACCESS_KEY must be set"
                    )
                self._client = httpx.AsyncClient(
                    auth=(self.config.username, self.config.access_key),
                    timeout=self.config.timeout,
                    transport=self._transport,
                    headers={"Accept": "application/json"},
                )
                logger.debug("Created BrowserStack HTTP client")
            return self._client

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        expect_json: bool = True,
    ) -> Any:
        """
        Perform a request and decode the response.

        Raises:
            BrowserStackAPIError: on transport failure or a non-2xx status
        """
        client = await self._get_client()
        logger.debug(f"{method} {url} params={params}")

        try:
            response = await client.request(method, url, params=params, json=json)
        except httpx.HTTPError as e:
            raise BrowserStackAPIError(f"Request to {url} failed: {e}") from e

        if response.is_error:
            raise BrowserStackAPIError(
                f"BrowserStack API returned an error for {method} {url}: {response.text[:200]}",
                status_code=response.status_code,
            )

        if not expect_json:
            return response.text
        try:
            return response.json()
        except ValueError as e:
            raise BrowserStackAPIError(
                f"Invalid JSON in response from {url}", status_code=response.status_code
            ) from e

    async def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", url, params=params)

    async def post_json(self, url: str, payload: Dict[str, Any]) -> Any:
        return await self.request("POST", url, json=payload)

    async def get_text(self, url: str) -> str:
        return await self.request("GET", url, expect_json=False)

    def api(self, path: str) -> str:
        return f"{self.config.api_url.rstrip('/')}/{path.lstrip('/')}"

    def app_api(self, path: str) -> str:
        return f"{self.config.app_api_url.rstrip('/')}/{path.lstrip('/')}"

    def test_management_api(self, path: str) -> str:
        return f"{self.config.test_management_url.rstrip('/')}/{path.lstrip('/')}"

    async def close(self):
        """Close the underlying HTTP client."""
        async with self._client_lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None
                logger.info("BrowserStack HTTP client closed")
