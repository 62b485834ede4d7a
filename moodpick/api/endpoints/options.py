from fastapi import APIRouter

from moodpick.services.jikan.genre import anime_genres, anime_ratings
from moodpick.services.tmdb.genre import MOODS, movie_genres

router = APIRouter(tags=["options"])


@router.get("/options", summary="Choices offered for each filter")
async def get_options() -> dict:
    return {
        "movie": {
            "genres": [{"id": str(id), "name": name} for id, name in movie_genres.items()],
            "moods": MOODS,
            "minimum_scores": [6, 7, 8, 9],
        },
        "anime": {
            "genres": [{"id": str(id), "name": name} for id, name in anime_genres.items()],
            "ratings": [{"value": value, "label": label} for value, label in anime_ratings.items()],
            "minimum_score_range": {"min": 1, "max": 10, "step": 0.1},
        },
    }
