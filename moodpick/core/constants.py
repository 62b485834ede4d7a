"""
Core constants used across the application. Keep these simple and documented.
"""

# Hidden gem: few votes but a high average
HIDDEN_GEM_MAX_VOTE_COUNT: int = 1000
HIDDEN_GEM_MIN_VOTE_AVERAGE: float = 7.0

DEFAULT_MOVIE_MIN_SCORE: float = 6.0
DEFAULT_ANIME_MIN_SCORE: float = 7.0

MISSING_MOOD_OR_GENRE_MESSAGE: str = "Please select both mood and genre!"
NO_RESULTS_MESSAGE: str = "No {kind} found with these criteria. Try different filters!"
GENERIC_ERROR_MESSAGE: str = "An error occurred. Please try again!"

MAL_ANIME_URL: str = "https://myanimelist.net/anime/{mal_id}"
