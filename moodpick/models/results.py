from typing import Literal

from pydantic import AliasChoices, BaseModel, Field

from moodpick.models.filters import ContentKind, FilterSet


class MovieResult(BaseModel):
    """A normalized movie suggestion."""

    kind: Literal["movie"] = "movie"
    source_id: int | None = None
    title: str
    genre: str = "Unknown"
    mood: str = ""
    is_hidden_gem: bool = False
    rating: float = 0.0
    poster: str | None = None
    plot: str | None = None
    year: str | None = None


class AnimeResult(BaseModel):
    """A normalized anime suggestion."""

    kind: Literal["anime"] = "anime"
    mal_id: int
    title: str
    title_japanese: str | None = None
    synopsis: str | None = None
    image_url: str | None = None
    large_image_url: str | None = None
    score: float | None = None
    episodes: int | None = None
    genres: list[str] = Field(default_factory=list)
    rating: str | None = None
    status: str | None = None
    url: str | None = None


class FavoriteEntry(BaseModel):
    id: str  # "movie-<title>" or "anime-<mal_id>"
    title: str
    poster: str | None = None
    rating: float = 0.0
    # Unversioned data used "type" and "mal_id"
    kind: ContentKind = Field(validation_alias=AliasChoices("kind", "type"))
    source_id: int | None = Field(default=None, validation_alias=AliasChoices("source_id", "mal_id"))

    @staticmethod
    def derive_id(result: MovieResult | AnimeResult) -> str:
        if isinstance(result, AnimeResult):
            return f"anime-{result.mal_id}"
        return f"movie-{result.title}"

    @classmethod
    def from_result(cls, result: MovieResult | AnimeResult) -> "FavoriteEntry":
        if isinstance(result, AnimeResult):
            return cls(
                id=cls.derive_id(result),
                title=result.title,
                poster=result.image_url,
                rating=result.score or 0.0,
                kind=ContentKind.ANIME,
                source_id=result.mal_id,
            )
        return cls(
            id=cls.derive_id(result),
            title=result.title,
            poster=result.poster,
            rating=result.rating,
            kind=ContentKind.MOVIE,
            source_id=result.source_id,
        )


FAVORITES_SCHEMA_VERSION = 1


class FavoritesEnvelope(BaseModel):
    """Persisted form of the favorites collection."""

    version: int = FAVORITES_SCHEMA_VERSION
    favorites: list[FavoriteEntry] = Field(default_factory=list)


class PublishedState(BaseModel):
    """Everything the presentation layer renders."""

    filters: FilterSet
    suggestion: MovieResult | AnimeResult | None = Field(default=None, discriminator="kind")
    error: str | None = None
    error_kind: str | None = None
    loading: bool = False
    favorites: list[FavoriteEntry] = Field(default_factory=list)
    favorites_persisted: bool = True
