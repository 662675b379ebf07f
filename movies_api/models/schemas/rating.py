from __future__ import annotations
from uuid import UUID
from pydantic import BaseModel, Field, ConfigDict


class RateMovieIn(BaseModel):
    rating: int = Field(..., ge=1, le=5)


class MovieRatingOut(BaseModel):
    movie_id: UUID
    slug: str
    rating: int
    model_config = ConfigDict(from_attributes=True)
