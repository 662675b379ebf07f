from .movie import Movie
from .genre import Genre
from .associations import movie_genres
from .rating import MovieRating

__all__ = [
    "Movie",
    "Genre",
    "movie_genres",
    "MovieRating",
]
