from typing import Any

import httpx
from loguru import logger

from moodpick.core.exceptions import UpstreamError


class BaseClient:
    """
    Base asynchronous HTTP client with logging and error translation.

    Requests are attempted exactly once. Failures surface as ``UpstreamError``
    and every retry is left to the caller.
    """

    def __init__(
        self,
        base_url: str = "",
        timeout: float = 10.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.headers = headers or {}
        self.transport = transport
        self._client: httpx.AsyncClient | None = None

    async def get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx.AsyncClient instance."""
        if self._client is None or self._client.is_closed:
            logger.debug(f"Creating HTTP client for {self.base_url}")
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
                follow_redirects=True,
                transport=self.transport,
            )
        return self._client

    async def close(self):
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Send one request and translate failures into UpstreamError."""
        client = await self.get_client()
        logger.debug(f"{method} {self.base_url}{url} params={kwargs.get('params')}")
        try:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"Request failed ({method} {url}): HTTP {status}")
            raise UpstreamError(f"HTTP error! status: {status}", status_code=status) from e
        except httpx.RequestError as e:
            logger.error(f"Request failed ({method} {url}): {e!r}")
            raise UpstreamError(str(e) or e.__class__.__name__) from e

    async def get(self, url: str, params: dict[str, Any] | None = None, **kwargs) -> dict[str, Any]:
        """Perform a GET request and return the JSON response."""
        response = await self._request("GET", url, params=params, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from {url}", status_code=response.status_code) from e
