from typing import Any

import httpx

from moodpick.core.base_client import BaseClient
from moodpick.core.rate_limiter import RateLimiter
from moodpick.core.version import __version__


class JikanClient(BaseClient):
    """
    Client for the Jikan (unofficial MyAnimeList) API.

    Every request waits on the injected rate limiter right before dispatch.
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        base_url: str = "https://api.jikan.moe/v4",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {
            "User-Agent": f"moodpick/{__version__}",
            "Accept": "application/json",
        }
        super().__init__(base_url=base_url, timeout=timeout, headers=headers, transport=transport)
        self.rate_limiter = rate_limiter

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        # create the client first so its setup is not counted against the interval
        await self.get_client()
        await self.rate_limiter.acquire()
        return await super()._request(method, url, **kwargs)
