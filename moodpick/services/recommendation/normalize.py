import re
from typing import Any

from moodpick.core.constants import HIDDEN_GEM_MAX_VOTE_COUNT, HIDDEN_GEM_MIN_VOTE_AVERAGE, MAL_ANIME_URL
from moodpick.models.results import AnimeResult, MovieResult

_YEAR_RE = re.compile(r"\d{4}")


def extract_year(date_str: str | None) -> str | None:
    """First 4-digit run of a date string, e.g. "2020-05-01" -> "2020"."""
    if not date_str:
        return None
    match = _YEAR_RE.search(date_str)
    return match.group(0) if match else None


def is_hidden_gem(vote_count: int | None, vote_average: float | None) -> bool:
    return (vote_count or 0) < HIDDEN_GEM_MAX_VOTE_COUNT and (vote_average or 0) >= HIDDEN_GEM_MIN_VOTE_AVERAGE


def poster_url(image_base_url: str, poster_path: str | None) -> str | None:
    return f"{image_base_url}{poster_path}" if poster_path else None


def normalize_movie(details: dict[str, Any], mood: str, image_base_url: str) -> MovieResult:
    """Turn a TMDB movie detail record into a MovieResult."""
    genres = details.get("genres") or []
    primary_genre = (genres[0].get("name") if genres else None) or "Unknown"
    vote_average = details.get("vote_average") or 0.0

    return MovieResult(
        source_id=details.get("id"),
        title=details.get("title") or "Unknown",
        genre=primary_genre,
        mood=mood,
        is_hidden_gem=is_hidden_gem(details.get("vote_count"), vote_average),
        rating=vote_average,
        poster=poster_url(image_base_url, details.get("poster_path")),
        plot=details.get("overview"),
        year=extract_year(details.get("release_date")),
    )


def normalize_anime(data: dict[str, Any]) -> AnimeResult:
    """Turn a Jikan anime record into an AnimeResult."""
    mal_id = data["mal_id"]
    jpg = (data.get("images") or {}).get("jpg") or {}

    return AnimeResult(
        mal_id=mal_id,
        title=data.get("title") or "Unknown",
        title_japanese=data.get("title_japanese"),
        synopsis=data.get("synopsis"),
        image_url=jpg.get("image_url"),
        large_image_url=jpg.get("large_image_url"),
        score=data.get("score"),
        episodes=data.get("episodes"),
        genres=[g.get("name") for g in data.get("genres") or [] if g.get("name")],
        rating=data.get("rating"),
        status=data.get("status"),
        url=data.get("url") or MAL_ANIME_URL.format(mal_id=mal_id),
    )
