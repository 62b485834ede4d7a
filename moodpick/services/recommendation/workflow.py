import random
from collections.abc import Sequence
from typing import Any, TypeVar

from loguru import logger

from moodpick.core.constants import GENERIC_ERROR_MESSAGE, MISSING_MOOD_OR_GENRE_MESSAGE, NO_RESULTS_MESSAGE
from moodpick.core.exceptions import EmptyResultError, PickerError, ValidationError
from moodpick.models.filters import ContentKind, FilterSet, FilterUpdate, default_min_score
from moodpick.models.results import AnimeResult, MovieResult
from moodpick.services.jikan.service import JikanService
from moodpick.services.recommendation.cache import AnimeListCache
from moodpick.services.recommendation.normalize import normalize_anime, normalize_movie
from moodpick.services.tmdb.service import TMDBService

T = TypeVar("T")


def pick_random(items: Sequence[T], rng: random.Random) -> T:
    """Uniform pick over ``items``; index is always in ``[0, len(items))``."""
    if not items:
        raise ValueError("cannot pick from an empty sequence")
    return items[rng.randrange(len(items))]


class RecommendationWorkflow:
    """
    Drives a single "get recommendation" action:
    validate -> candidate list -> random pick -> details -> normalize -> publish.

    Published state (``suggestion``, ``error``, ``error_kind``, ``loading``) is
    only written by the most recent invocation. Each call takes a generation
    number when it starts; a call whose generation is no longer the latest when
    it finishes is discarded.
    """

    def __init__(
        self,
        tmdb: TMDBService,
        jikan: JikanService,
        image_base_url: str = "https://image.tmdb.org/t/p/w500",
        rng: random.Random | None = None,
    ):
        self.tmdb = tmdb
        self.jikan = jikan
        self.image_base_url = image_base_url
        self.rng = rng or random.Random()
        self.anime_cache = AnimeListCache()

        self.filters = FilterSet()
        self.suggestion: MovieResult | AnimeResult | None = None
        self.error: str | None = None
        self.error_kind: str | None = None
        self.loading = False
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def update_filters(self, update: FilterUpdate) -> FilterSet:
        """Apply a partial filter change, invalidating what depends on it."""
        changes = {k: v for k, v in update.model_dump(exclude_none=True).items() if getattr(self.filters, k) != v}
        if not changes:
            return self.filters

        if {"genre", "age_rating", "minimum_score"} & changes.keys():
            self.anime_cache.clear()
        if {"mood", "genre", "minimum_score"} & changes.keys():
            changes["page_cursor"] = 1

        self.filters = self.filters.model_copy(update=changes)
        logger.debug(f"Filters updated: {self.filters}")
        return self.filters

    def set_content_kind(self, kind: ContentKind) -> FilterSet:
        """Switch catalogs. Genre and age rating ids are catalog specific, so they are cleared."""
        if kind == self.filters.content_kind:
            return self.filters
        self.filters = self.filters.model_copy(
            update={
                "content_kind": kind,
                "genre": "",
                "age_rating": "",
                "minimum_score": default_min_score(kind),
                "page_cursor": 1,
            }
        )
        self.anime_cache.clear()
        self.suggestion = None
        self.error = None
        self.error_kind = None
        return self.filters

    def reset(self) -> None:
        """Back to the initial state. In-flight calls become stale."""
        self._generation += 1
        self.filters = FilterSet()
        self.anime_cache.clear()
        self.suggestion = None
        self.error = None
        self.error_kind = None
        self.loading = False

    async def get_recommendation(self) -> MovieResult | AnimeResult | None:
        """Fetch and publish a new suggestion. Never raises; failures are published."""
        self._generation += 1
        generation = self._generation
        filters = self.filters
        self.loading = True
        self.error = None
        self.error_kind = None

        try:
            if filters.content_kind == ContentKind.MOVIE:
                result = await self._recommend_movie(filters)
            else:
                result = await self._recommend_anime(filters)
        except PickerError as e:
            self._publish_error(generation, e.message, e.kind)
            return None
        except Exception as e:
            logger.exception(f"Unexpected error while fetching a {filters.content_kind.value}: {e}")
            self._publish_error(generation, GENERIC_ERROR_MESSAGE, "unknown")
            return None

        if not self._is_current(generation):
            logger.warning(f"Discarding stale recommendation (generation {generation} < {self._generation})")
            return None

        self.suggestion = result
        self.error = None
        self.error_kind = None
        self.loading = False
        if filters.content_kind == ContentKind.MOVIE and self._same_query(filters):
            self.filters = self.filters.model_copy(update={"page_cursor": self.filters.page_cursor + 1})
        logger.info(f"Suggesting {result.kind} '{result.title}'")
        return result

    async def _recommend_movie(self, filters: FilterSet) -> MovieResult:
        if not filters.mood or not filters.genre:
            raise ValidationError(MISSING_MOOD_OR_GENRE_MESSAGE)

        logger.info(
            f"Fetching movies genre={filters.genre} mood={filters.mood} "
            f"min_score={filters.minimum_score} page={filters.page_cursor}"
        )
        candidates = await self.tmdb.discover(filters.genre, filters.minimum_score, filters.page_cursor)
        picked = pick_random(candidates, self.rng)
        details = await self.tmdb.get_details(picked["id"])
        return normalize_movie(details, filters.mood, self.image_base_url)

    async def _recommend_anime(self, filters: FilterSet) -> AnimeResult:
        candidates = self.anime_cache.get(filters)
        if candidates is None:
            candidates = await self.jikan.list_anime(
                genre_id=filters.genre or None,
                rating=filters.age_rating or None,
                min_score=filters.minimum_score or None,
            )
            if candidates:
                self.anime_cache.put(filters, candidates)

        if not candidates:
            raise EmptyResultError(NO_RESULTS_MESSAGE.format(kind="anime"))

        picked: dict[str, Any] = pick_random(candidates, self.rng)
        details = await self.jikan.get_anime_by_id(picked["mal_id"])
        return normalize_anime(details)

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _same_query(self, filters: FilterSet) -> bool:
        """Filters unchanged since ``filters`` was taken, ignoring the page cursor."""
        return self.filters.model_dump(exclude={"page_cursor"}) == filters.model_dump(exclude={"page_cursor"})

    def _publish_error(self, generation: int, message: str, kind: str) -> None:
        if not self._is_current(generation):
            logger.warning(f"Discarding stale error from generation {generation}: {message}")
            return
        logger.warning(f"Recommendation failed ({kind}): {message}")
        self.error = message
        self.error_kind = kind
        self.loading = False
