from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from moodpick.core.constants import DEFAULT_ANIME_MIN_SCORE, DEFAULT_MOVIE_MIN_SCORE


class ContentKind(str, Enum):
    MOVIE = "movie"
    ANIME = "anime"


def default_min_score(kind: ContentKind) -> float:
    return DEFAULT_MOVIE_MIN_SCORE if kind == ContentKind.MOVIE else DEFAULT_ANIME_MIN_SCORE


class FilterSet(BaseModel):
    """Constraints for one recommendation request. Immutable; use ``model_copy(update=...)``."""

    model_config = ConfigDict(frozen=True)

    content_kind: ContentKind = ContentKind.MOVIE
    genre: str = ""  # catalog genre id, "" when unset
    mood: str = ""  # movies only, echoed into the result
    age_rating: str = ""  # anime only: g, pg, pg13, r17
    minimum_score: float = Field(default=DEFAULT_MOVIE_MIN_SCORE, ge=0, le=10)
    page_cursor: int = Field(default=1, ge=1)

    @property
    def anime_cache_key(self) -> tuple[str, str, float]:
        return (self.genre, self.age_rating, self.minimum_score)


class FilterUpdate(BaseModel):
    """Partial filter change sent by the presentation layer."""

    genre: str | None = None
    mood: str | None = None
    age_rating: str | None = None
    minimum_score: float | None = Field(default=None, ge=0, le=10)
