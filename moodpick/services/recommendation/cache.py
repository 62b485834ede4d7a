from typing import Any

from cachetools import LRUCache
from loguru import logger

from moodpick.models.filters import FilterSet


class AnimeListCache:
    """Holds the last fetched anime list page for the active filters.

    Only one filter combination is kept; storing a new one evicts the old.
    """

    def __init__(self) -> None:
        self._pages: LRUCache = LRUCache(maxsize=1)

    def get(self, filters: FilterSet) -> list[dict[str, Any]] | None:
        items = self._pages.get(filters.anime_cache_key)
        if items is not None:
            logger.debug(f"Anime list cache hit for {filters.anime_cache_key}")
        return items

    def put(self, filters: FilterSet, items: list[dict[str, Any]]) -> None:
        self._pages[filters.anime_cache_key] = list(items)

    def clear(self) -> None:
        self._pages.clear()

    def __len__(self) -> int:
        return len(self._pages)
