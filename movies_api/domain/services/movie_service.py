import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from movies_api.core.slug import make_slug
from movies_api.domain.repositories.movie_repo import MovieRepository
from movies_api.models.schemas.movie import MovieCreate, MovieUpdate, MovieOut

logger = logging.getLogger(__name__)


def parse_movie_id(value: str) -> UUID | None:
    try:
        return UUID(value)
    except ValueError:
        return None


class MovieService:
    def __init__(self, movie_repo: MovieRepository):
        self.movie_repo = movie_repo

    async def _projection(self, db: AsyncSession, movie_id: UUID, user_id: UUID | None) -> MovieOut:
        row = await self.movie_repo.get_projection(db, movie_id=movie_id, user_id=user_id)
        movie, rating, user_rating = row
        return MovieOut.from_row(movie, rating, user_rating)

    async def create(self, db: AsyncSession, payload: MovieCreate) -> MovieOut:
        slug = make_slug(payload.title, payload.year_of_release)
        try:
            genres = await self.movie_repo.resolve_genres(db, payload.genres)
            movie = await self.movie_repo.create(
                db,
                title=payload.title,
                slug=slug,
                year_of_release=payload.year_of_release,
                synopsis=payload.synopsis,
                genres=genres,
            )
            await db.commit()
        except IntegrityError:
            await db.rollback()
            # конфликт по UNIQUE(slug)
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail={"error": "movie_exists", "message": f"Movie with slug '{slug}' already exists"},
            )
        logger.info(f"Создан фильм {movie.id} ({slug})")
        return await self._projection(db, movie.id, None)

    async def get(self, db: AsyncSession, id_or_slug: str, user_id: UUID | None = None) -> MovieOut:
        movie_id = parse_movie_id(id_or_slug)
        if movie_id is not None:
            row = await self.movie_repo.get_projection(db, movie_id=movie_id, user_id=user_id)
        else:
            # slug уникален за счёт ограничения в БД
            row = await self.movie_repo.get_projection(db, slug=id_or_slug, user_id=user_id)
        if row is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"error": "movie_not_found"})
        movie, rating, user_rating = row
        return MovieOut.from_row(movie, rating, user_rating)

    async def update(
        self, db: AsyncSession, movie_id: UUID, payload: MovieUpdate, user_id: UUID | None = None
    ) -> MovieOut:
        movie = await self.movie_repo.get_by_id(db, movie_id)
        if not movie:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"error": "movie_not_found"})
        slug = make_slug(payload.title, payload.year_of_release)
        try:
            genres = await self.movie_repo.resolve_genres(db, payload.genres)
            await self.movie_repo.update_fields(
                db,
                movie,
                title=payload.title,
                slug=slug,
                year_of_release=payload.year_of_release,
                synopsis=payload.synopsis,
                genres=genres,
            )
            await db.commit()
        except IntegrityError:
            await db.rollback()
            # новое название+год дали slug, который уже занят
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail={"error": "movie_exists", "message": f"Movie with slug '{slug}' already exists"},
            )
        return await self._projection(db, movie_id, user_id)

    async def delete(self, db: AsyncSession, movie_id: UUID) -> None:
        ok = await self.movie_repo.delete(db, movie_id)
        if not ok:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"error": "movie_not_found"})
        logger.info(f"Удалён фильм {movie_id}")
