from __future__ import annotations
from fastapi import Depends

from movies_api.domain.repositories.movie_repo import MovieRepository
from movies_api.domain.repositories.rating_repo import RatingRepository
from movies_api.domain.services.movie_query import MovieQueryComposer
from movies_api.domain.services.movie_service import MovieService
from movies_api.domain.services.rating_service import RatingService

def get_movie_repo() -> MovieRepository:
    return MovieRepository()

def get_rating_repo() -> RatingRepository:
    return RatingRepository()

def get_movie_query_composer(
    movie_repo: MovieRepository = Depends(get_movie_repo),
) -> MovieQueryComposer:
    return MovieQueryComposer(movie_repo)

def get_movie_service(
    movie_repo: MovieRepository = Depends(get_movie_repo),
) -> MovieService:
    return MovieService(movie_repo)

def get_rating_service(
    movie_repo: MovieRepository = Depends(get_movie_repo),
    rating_repo: RatingRepository = Depends(get_rating_repo),
) -> RatingService:
    return RatingService(movie_repo, rating_repo)
