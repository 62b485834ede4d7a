import random
import time
from collections import defaultdict

import httpx
import pytest

from moodpick.core.exceptions import PersistenceError
from moodpick.core.rate_limiter import RateLimiter
from moodpick.services.jikan.service import JikanService
from moodpick.services.recommendation.workflow import RecommendationWorkflow
from moodpick.services.tmdb.service import TMDBService

TMDB_URL = "https://tmdb.test/3"
JIKAN_URL = "https://jikan.test/v4"
IMAGE_BASE = "https://img.test/w500"


class FakeCatalog:
    """Routes requests by URL path to canned JSON payloads or handler functions."""

    def __init__(self):
        self.routes = {}
        self.requests: list[httpx.Request] = []
        self.dispatched_at: list[float] = []

    def add(self, path, payload=None, status=200):
        self.routes[path] = (status, payload)

    def add_handler(self, path, handler):
        self.routes[path] = handler

    def calls(self, path) -> int:
        return sum(1 for r in self.requests if r.url.path == path)

    def params(self, path) -> list[dict]:
        return [dict(r.url.params) for r in self.requests if r.url.path == path]

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.dispatched_at.append(time.monotonic())
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"message": "not found"})
        if callable(route):
            result = route(request)
            if hasattr(result, "__await__"):
                result = await result
            return result
        status, payload = route
        return httpx.Response(status, json=payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)


class MemoryKeyValueStore:
    def __init__(self, data=None):
        self.data = dict(data or {})
        self.writes = defaultdict(int)

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value):
        self.writes[key] += 1
        self.data[key] = value

    async def delete(self, key):
        self.data.pop(key, None)

    async def close(self):
        return None


class BrokenKeyValueStore:
    async def get(self, key):
        raise PersistenceError("disk unavailable")

    async def set(self, key, value):
        raise PersistenceError("disk unavailable")

    async def delete(self, key):
        raise PersistenceError("disk unavailable")

    async def close(self):
        return None


def movie_details(**overrides) -> dict:
    details = {
        "id": 1,
        "title": "X",
        "vote_average": 8.1,
        "vote_count": 500,
        "genres": [{"id": 28, "name": "Action"}],
        "release_date": "2020-05-01",
        "overview": "...",
        "poster_path": "/p.jpg",
    }
    details.update(overrides)
    return details


def anime_record(mal_id=42, **overrides) -> dict:
    record = {
        "mal_id": mal_id,
        "url": f"https://myanimelist.net/anime/{mal_id}/slug",
        "title": "Y",
        "title_japanese": "ワイ",
        "images": {"jpg": {"image_url": "u", "large_image_url": "u-large"}},
        "synopsis": "A story.",
        "rating": "PG-13 - Teens 13 or older",
        "episodes": 12,
        "score": 9.0,
        "status": "Finished Airing",
        "genres": [{"mal_id": 1, "name": "Action"}, {"mal_id": 10, "name": "Fantasy"}],
    }
    record.update(overrides)
    return record


@pytest.fixture
def catalog():
    return FakeCatalog()


@pytest.fixture
def tmdb(catalog):
    return TMDBService(api_key="test-key", base_url=TMDB_URL, transport=catalog.transport)


@pytest.fixture
def jikan(catalog):
    return JikanService(rate_limiter=RateLimiter(0), base_url=JIKAN_URL, transport=catalog.transport)


@pytest.fixture
def workflow(tmdb, jikan):
    return RecommendationWorkflow(tmdb, jikan, image_base_url=IMAGE_BASE, rng=random.Random(1234))


@pytest.fixture
def memory_store():
    return MemoryKeyValueStore()
