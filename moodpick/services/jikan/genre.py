anime_genres = {
    1: "Action",
    2: "Adventure",
    4: "Comedy",
    8: "Drama",
    10: "Fantasy",
    22: "Romance",
    24: "Sci-Fi",
    36: "Slice of Life",
    37: "Supernatural",
    41: "Thriller",
}


# Jikan `rating` query values and their display labels
anime_ratings = {
    "g": "G - All Ages",
    "pg": "PG - Children",
    "pg13": "PG-13 - Teens 13 and older",
    "r17": "R - 17+ (violence & profanity)",
}
