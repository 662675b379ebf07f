from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, ColumnElement, Row, select, delete, func, null
from sqlalchemy.ext.asyncio import AsyncSession

from movies_api.models.orm import Movie, Genre, MovieRating, movie_genres
from movies_api.models.schemas.movie import SortField, SortDirection


@dataclass(frozen=True)
class MoviePredicate:
    """
    Конъюнкция условий на фильмы. Пустой предикат = без ограничений.
    Один и тот же объект применяется и к странице, и к подсчёту.
    """
    clauses: tuple[ColumnElement[bool], ...] = ()

    def and_(self, clause: ColumnElement[bool]) -> MoviePredicate:
        return MoviePredicate(self.clauses + (clause,))

    def apply(self, stmt: Select) -> Select:
        if not self.clauses:
            return stmt
        return stmt.where(*self.clauses)


SORT_COLUMNS = {
    SortField.title: Movie.title,
    SortField.year_of_release: Movie.year_of_release,
}


class MovieRepository:
    # --- построение запроса: ничего не выполняется до materialize/count_matching ---

    def filter_by(self, predicate: MoviePredicate, user_id: UUID | None = None) -> Select:
        avg_rating = (
            select(func.avg(MovieRating.rating))
            .where(MovieRating.movie_id == Movie.id)
            .correlate(Movie)
            .scalar_subquery()
        )
        if user_id is not None:
            user_rating = (
                select(MovieRating.rating)
                .where(MovieRating.movie_id == Movie.id, MovieRating.user_id == user_id)
                .correlate(Movie)
                .scalar_subquery()
            )
        else:
            user_rating = null()
        stmt = select(Movie, avg_rating.label("rating"), user_rating.label("user_rating"))
        return predicate.apply(stmt)

    def order_by(self, stmt: Select, field: SortField, direction: SortDirection) -> Select:
        column = SORT_COLUMNS[field]
        key = column.desc() if direction == SortDirection.desc else column.asc()
        # тай-брейк по id, чтобы страницы не «плыли» при равных ключах
        return stmt.order_by(key, Movie.id.asc())

    def paginate(self, stmt: Select, skip: int, take: int) -> Select:
        return stmt.offset(skip).limit(take)

    async def materialize(self, db: AsyncSession, stmt: Select) -> Sequence[Row]:
        return (await db.execute(stmt)).all()

    async def count_matching(self, db: AsyncSession, predicate: MoviePredicate) -> int:
        stmt = predicate.apply(select(func.count()).select_from(Movie))
        total = await db.scalar(stmt)
        return int(total or 0)

    # --- CRUD ---

    async def get_by_id(self, db: AsyncSession, movie_id: UUID) -> Movie | None:
        return await db.scalar(select(Movie).where(Movie.id == movie_id))

    async def get_by_slug(self, db: AsyncSession, slug: str) -> Movie | None:
        return await db.scalar(select(Movie).where(Movie.slug == slug))

    async def get_projection(
        self,
        db: AsyncSession,
        *,
        movie_id: UUID | None = None,
        slug: str | None = None,
        user_id: UUID | None = None,
    ) -> Row | None:
        predicate = MoviePredicate()
        if movie_id is not None:
            predicate = predicate.and_(Movie.id == movie_id)
        if slug is not None:
            predicate = predicate.and_(Movie.slug == slug)
        rows = await self.materialize(db, self.filter_by(predicate, user_id))
        return rows[0] if rows else None

    async def resolve_genres(self, db: AsyncSession, names: list[str]) -> list[Genre]:
        # дубли убираем, порядок первого вхождения сохраняем
        unique = list(dict.fromkeys(n for n in names if n))
        if not unique:
            return []
        existing = (await db.execute(select(Genre).where(Genre.name.in_(unique)))).scalars().all()
        by_name = {g.name: g for g in existing}
        result = []
        for name in unique:
            genre = by_name.get(name)
            if genre is None:
                genre = Genre(name=name)
                db.add(genre)
            result.append(genre)
        return result

    async def create(
        self,
        db: AsyncSession,
        *,
        title: str,
        slug: str,
        year_of_release: int,
        synopsis: str | None,
        genres: list[Genre],
    ) -> Movie:
        movie = Movie(
            title=title,
            slug=slug,
            year_of_release=year_of_release,
            synopsis=synopsis,
        )
        # коллекцию собираем до первого flush
        with db.no_autoflush:
            movie.genres.extend(genres)
        db.add(movie)
        # commit делаем в сервисе, чтобы можно было обрабатывать ошибки
        return movie

    async def update_fields(
        self,
        db: AsyncSession,
        movie: Movie,
        *,
        title: str,
        slug: str,
        year_of_release: int,
        synopsis: str | None,
        genres: list[Genre],
    ) -> Movie:
        movie.title = title
        movie.slug = slug
        movie.year_of_release = year_of_release
        movie.synopsis = synopsis
        with db.no_autoflush:
            movie.genres = genres
        db.add(movie)
        return movie

    async def delete(self, db: AsyncSession, movie_id: UUID) -> bool:
        # sqlite не каскадит FK без PRAGMA, поэтому чистим связи явно
        await db.execute(delete(movie_genres).where(movie_genres.c.movie_id == movie_id))
        await db.execute(delete(MovieRating).where(MovieRating.movie_id == movie_id))
        result = await db.execute(delete(Movie).where(Movie.id == movie_id))
        await db.commit()
        return result.rowcount > 0
