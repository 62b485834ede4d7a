from typing import Any

import httpx
from cachetools import TTLCache
from loguru import logger

from moodpick.core.constants import NO_RESULTS_MESSAGE
from moodpick.core.exceptions import EmptyResultError
from moodpick.services.tmdb.client import TMDBClient


class TMDBService:
    """
    Movie catalog backed by The Movie Database (TMDB) API.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.themoviedb.org/3",
        language: str = "en-US",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = TMDBClient(
            api_key=api_key, base_url=base_url, language=language, timeout=timeout, transport=transport
        )
        # Detail records rarely change; discover pages are always fetched fresh.
        self._details: TTLCache = TTLCache(maxsize=500, ttl=3600)

    async def close(self):
        """Close the underlying HTTP client."""
        await self.client.close()

    async def discover(self, genre_id: str | int, min_score: float, page: int = 1) -> list[dict[str, Any]]:
        """One page of movies in a genre, most popular first.

        Raises EmptyResultError when the page holds no movies.
        """
        params = {
            "page": page,
            "sort_by": "popularity.desc",
            "with_genres": genre_id,
            "vote_average.gte": min_score,
        }
        data = await self.client.get("/discover/movie", params=params)
        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            logger.info(f"Discover returned no movies for genre={genre_id} min_score={min_score} page={page}")
            raise EmptyResultError(NO_RESULTS_MESSAGE.format(kind="movies"))
        return results

    async def get_details(self, movie_id: int) -> dict[str, Any]:
        """Get details of a specific movie."""
        cached = self._details.get(movie_id)
        if cached is not None:
            logger.debug(f"Movie details cache hit for {movie_id}")
            return cached
        details = await self.client.get(f"/movie/{movie_id}")
        self._details[movie_id] = details
        return details
