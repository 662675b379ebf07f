import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from movies_api.domain.repositories.movie_repo import MovieRepository
from movies_api.domain.repositories.rating_repo import RatingRepository
from movies_api.models.schemas.rating import MovieRatingOut

logger = logging.getLogger(__name__)


class RatingService:
    def __init__(self, movie_repo: MovieRepository, rating_repo: RatingRepository):
        self.movie_repo = movie_repo
        self.rating_repo = rating_repo

    async def rate(self, db: AsyncSession, movie_id: UUID, user_id: UUID, rating: int) -> None:
        # Проверим, что фильм существует, чтобы вернуть понятную ошибку, а не FK violation
        movie = await self.movie_repo.get_by_id(db, movie_id)
        if not movie:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"error": "movie_not_found"})

        try:
            await self.rating_repo.upsert(db, user_id, movie_id, rating)
            await db.commit()
        except IntegrityError:
            # параллельный первый PUT успел вставить строку: перезаписываем её
            await db.rollback()
            existing = await self.rating_repo.get(db, user_id, movie_id)
            if existing is None:
                raise
            existing.rating = rating
            await db.commit()
        logger.info(f"Пользователь {user_id} оценил фильм {movie_id} на {rating}")

    async def delete_rating(self, db: AsyncSession, movie_id: UUID, user_id: UUID) -> None:
        deleted = await self.rating_repo.delete(db, user_id, movie_id)
        if deleted == 0:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"error": "rating_not_found"})
        await db.commit()

    async def list_user_ratings(self, db: AsyncSession, user_id: UUID) -> list[MovieRatingOut]:
        rows = await self.rating_repo.list_for_user(db, user_id)
        return [MovieRatingOut(movie_id=movie_id, slug=slug, rating=rating) for movie_id, slug, rating in rows]
