import random

import httpx
from loguru import logger

from moodpick.core.config import Settings, settings
from moodpick.core.rate_limiter import RateLimiter
from moodpick.models.filters import ContentKind, FilterSet, FilterUpdate
from moodpick.models.results import FavoriteEntry, PublishedState
from moodpick.services.favorites import FavoritesStore
from moodpick.services.jikan.service import JikanService
from moodpick.services.recommendation.workflow import RecommendationWorkflow
from moodpick.services.storage import KeyValueStore, create_store
from moodpick.services.tmdb.service import TMDBService


class PickerSession:
    """Entry points and published state for the presentation layer."""

    def __init__(
        self,
        tmdb: TMDBService,
        jikan: JikanService,
        favorites: FavoritesStore,
        image_base_url: str = "https://image.tmdb.org/t/p/w500",
        rng: random.Random | None = None,
    ):
        self.tmdb = tmdb
        self.jikan = jikan
        self.favorites = favorites
        self.workflow = RecommendationWorkflow(tmdb, jikan, image_base_url=image_base_url, rng=rng)

    @classmethod
    def from_settings(
        cls,
        config: Settings,
        store: KeyValueStore | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
    ) -> "PickerSession":
        tmdb = TMDBService(
            api_key=config.TMDB_API_KEY,
            base_url=config.TMDB_BASE_URL,
            language=config.TMDB_LANGUAGE,
            timeout=config.REQUEST_TIMEOUT_SECONDS,
            transport=transport,
        )
        jikan = JikanService(
            rate_limiter=RateLimiter(config.JIKAN_MIN_INTERVAL_SECONDS),
            base_url=config.JIKAN_BASE_URL,
            page_size=config.JIKAN_PAGE_SIZE,
            timeout=config.REQUEST_TIMEOUT_SECONDS,
            transport=transport,
        )
        favorites = FavoritesStore(store or create_store(config), key=config.FAVORITES_KEY)
        return cls(tmdb, jikan, favorites, image_base_url=config.TMDB_IMAGE_BASE_URL, rng=rng)

    async def startup(self) -> None:
        await self.favorites.load()

    async def close(self) -> None:
        await self.tmdb.close()
        await self.jikan.close()
        await self.favorites.store.close()

    async def get_recommendation(self) -> PublishedState:
        await self.workflow.get_recommendation()
        return self.state()

    def update_filters(self, update: FilterUpdate) -> FilterSet:
        return self.workflow.update_filters(update)

    def set_content_kind(self, kind: ContentKind) -> FilterSet:
        return self.workflow.set_content_kind(kind)

    async def toggle_favorite(self) -> bool | None:
        """Toggle the current suggestion. Returns None when there is nothing to toggle."""
        suggestion = self.workflow.suggestion
        if suggestion is None:
            return None
        return await self.favorites.toggle(suggestion)

    async def remove_favorite(self, entry_id: str) -> bool:
        return await self.favorites.remove(entry_id)

    async def reset_all(self) -> PublishedState:
        logger.info("Resetting favorites and recommendation state")
        await self.favorites.clear()
        self.workflow.reset()
        return self.state()

    def list_favorites(self) -> list[FavoriteEntry]:
        return self.favorites.list()

    def state(self) -> PublishedState:
        return PublishedState(
            filters=self.workflow.filters,
            suggestion=self.workflow.suggestion,
            error=self.workflow.error,
            error_kind=self.workflow.error_kind,
            loading=self.workflow.loading,
            favorites=self.favorites.list(),
            favorites_persisted=self.favorites.persisted,
        )


_session: PickerSession | None = None


def get_session() -> PickerSession:
    """Get the process-wide picker session."""
    global _session
    if _session is None:
        _session = PickerSession.from_settings(settings)
    return _session
