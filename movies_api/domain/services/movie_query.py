import asyncio
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from movies_api.core.config import settings
from movies_api.core.exceptions import InvalidArgument, StoreUnavailable
from movies_api.domain.repositories.movie_repo import MovieRepository, MoviePredicate
from movies_api.models.orm import Movie
from movies_api.models.schemas.movie import MovieQueryOptions, MovieOut, MoviesPage

logger = logging.getLogger(__name__)


def build_predicate(options: MovieQueryOptions) -> MoviePredicate:
    """
    Собираем условия только из заданных фильтров.
    None = «не фильтровать», год 0 при этом вполне себе условие.
    """
    predicate = MoviePredicate()
    if options.title is not None:
        predicate = predicate.and_(Movie.title.icontains(options.title, autoescape=True))
    if options.year_of_release is not None:
        predicate = predicate.and_(Movie.year_of_release == options.year_of_release)
    return predicate


# Страница фильмов + общее число фильмов под тем же фильтром.
# Сессию БД передаёт вызывающий, сам компоновщик состояния не хранит.
class MovieQueryComposer:
    def __init__(self, movie_repo: MovieRepository, max_page_size: int | None = None):
        self.movie_repo = movie_repo
        self.max_page_size = max_page_size or settings.paging.max_page_size

    def validate(self, options: MovieQueryOptions) -> None:
        if options.page < 1:
            raise InvalidArgument(f"page must be >= 1, got {options.page}")
        if options.page_size <= 0 or options.page_size > self.max_page_size:
            raise InvalidArgument(
                f"page_size must be between 1 and {self.max_page_size}, got {options.page_size}"
            )

    async def list_page(self, db: AsyncSession, options: MovieQueryOptions) -> MoviesPage:
        self.validate(options)

        predicate = build_predicate(options)
        stmt = self.movie_repo.filter_by(predicate, options.user_id)
        stmt = self.movie_repo.order_by(stmt, options.sort_field, options.sort_direction)
        stmt = self.movie_repo.paginate(
            stmt,
            skip=(options.page - 1) * options.page_size,
            take=options.page_size,
        )

        try:
            # AsyncSession не умеет в параллельные запросы, поэтому по очереди
            total = await self.movie_repo.count_matching(db, predicate)
            rows = await self.movie_repo.materialize(db, stmt)
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as exc:
            # asyncpg отдаёт отказ соединения и таймаут как есть, без обёртки SQLAlchemy
            logger.exception("Не удалось получить список фильмов")
            raise StoreUnavailable("movie store query failed") from exc

        logger.debug(
            f"movies page={options.page} size={options.page_size} "
            f"filters={len(predicate.clauses)} -> {len(rows)}/{total}"
        )
        return MoviesPage(
            items=[MovieOut.from_row(movie, rating, user_rating) for movie, rating, user_rating in rows],
            total=total,
            page=options.page,
            page_size=options.page_size,
        )
