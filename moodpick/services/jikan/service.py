from typing import Any

import httpx

from moodpick.core.exceptions import UpstreamError
from moodpick.core.rate_limiter import RateLimiter
from moodpick.services.jikan.client import JikanClient


class JikanService:
    """
    Anime catalog backed by Jikan.
    """

    def __init__(
        self,
        rate_limiter: RateLimiter,
        base_url: str = "https://api.jikan.moe/v4",
        page_size: int = 25,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = JikanClient(rate_limiter=rate_limiter, base_url=base_url, timeout=timeout, transport=transport)
        self.page_size = page_size

    async def close(self):
        await self.client.close()

    async def list_anime(
        self,
        genre_id: str | int | None = None,
        rating: str | None = None,
        min_score: float | None = None,
        page: int = 1,
    ) -> list[dict[str, Any]]:
        """One page of anime ordered by popularity. Unset filters are left out of the query."""
        params: dict[str, Any] = {
            "page": page,
            "limit": self.page_size,
            "order_by": "popularity",
            "sort": "desc",
        }
        if genre_id:
            params["genres"] = genre_id
        if rating:
            params["rating"] = rating
        if min_score:
            params["min_score"] = min_score
        data = await self.client.get("/anime", params=params)
        return data.get("data") or []

    async def get_anime_by_id(self, mal_id: int) -> dict[str, Any]:
        """Full record for a single anime."""
        data = await self.client.get(f"/anime/{mal_id}")
        record = data.get("data")
        if not record:
            raise UpstreamError(f"No details returned for anime {mal_id}")
        return record
