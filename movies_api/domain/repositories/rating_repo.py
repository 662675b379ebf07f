from __future__ import annotations
from uuid import UUID

from sqlalchemy import select, delete, and_
from sqlalchemy.ext.asyncio import AsyncSession

from movies_api.models.orm import Movie, MovieRating

class RatingRepository:
    async def get(self, db: AsyncSession, user_id: UUID, movie_id: UUID) -> MovieRating | None:
        return await db.get(MovieRating, (user_id, movie_id))

    async def upsert(self, db: AsyncSession, user_id: UUID, movie_id: UUID, rating: int) -> MovieRating:
        existing = await self.get(db, user_id, movie_id)
        if existing is not None:
            existing.rating = rating
            return existing
        obj = MovieRating(user_id=user_id, movie_id=movie_id, rating=rating)
        db.add(obj)
        return obj

    async def delete(self, db: AsyncSession, user_id: UUID, movie_id: UUID) -> int:
        res = await db.execute(
            delete(MovieRating).where(
                and_(MovieRating.user_id == user_id, MovieRating.movie_id == movie_id)
            )
        )
        return res.rowcount or 0

    async def list_for_user(self, db: AsyncSession, user_id: UUID) -> list[tuple[UUID, str, int]]:
        stmt = (
            select(MovieRating.movie_id, Movie.slug, MovieRating.rating)
            .join(Movie, Movie.id == MovieRating.movie_id)
            .where(MovieRating.user_id == user_id)
            .order_by(Movie.slug)
        )
        return [tuple(r) for r in (await db.execute(stmt)).all()]
