movie_genres = {
    28: "Action",
    12: "Adventure",
    16: "Animation",
    35: "Comedy",
    18: "Drama",
    14: "Fantasy",
    27: "Horror",
    10749: "Romance",
    878: "Science Fiction",
    53: "Thriller",
}


# Moods are only used to label a suggestion; they are never sent to TMDB.
MOODS = ["Happy", "Sad", "Action", "Romantic", "Scary", "Funny", "Adventure", "Mystery", "Family"]
