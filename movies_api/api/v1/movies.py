from uuid import UUID

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.ext.asyncio import AsyncSession

from movies_api.api.deps import get_movie_query_composer, get_movie_service, get_rating_service
from movies_api.core.config import settings
from movies_api.core.jwt_verify import optional_user_id, current_user_id
from movies_api.db.postgres import get_async_session
from movies_api.domain.services.movie_query import MovieQueryComposer
from movies_api.domain.services.movie_service import MovieService
from movies_api.domain.services.rating_service import RatingService
from movies_api.models.schemas.common import ErrorEnvelope
from movies_api.models.schemas.movie import MovieCreate, MovieUpdate, MovieOut, MoviesPage, MoviesQuery
from movies_api.models.schemas.rating import RateMovieIn

router = APIRouter()

@router.get(
        "",
        response_model=MoviesPage,
        responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorEnvelope}},
        description="Список фильмов с фильтрами по названию и году, сортировкой и пагинацией. "
                "Для авторизованного пользователя в каждом фильме есть его оценка."
)
async def list_movies(
    title: str | None = Query(None, description="Часть названия, без учёта регистра"),
    year: int | None = Query(None, description="Год выхода"),
    sort_by: str | None = Query(None, description="Поле сортировки: 'title', '-title', 'year', '-year'"),
    page: int = Query(1, description="Номер страницы, с 1"),
    page_size: int = Query(settings.paging.default_page_size, description="Размер страницы"),
    user_id: UUID | None = Depends(optional_user_id),
    db: AsyncSession = Depends(get_async_session),
    composer: MovieQueryComposer = Depends(get_movie_query_composer),
):
    params = MoviesQuery(title=title, year=year, sort_by=sort_by, page=page, page_size=page_size)
    return await composer.list_page(db, params.to_options(user_id))

@router.get(
        "/{id_or_slug}",
        response_model=MovieOut,
        description="Фильм по ID или по slug."
)
async def get_movie(
    id_or_slug: str,
    user_id: UUID | None = Depends(optional_user_id),
    db: AsyncSession = Depends(get_async_session),
    service: MovieService = Depends(get_movie_service),
):
    return await service.get(db, id_or_slug, user_id)

@router.post(
        "",
        response_model=MovieOut,
        status_code=status.HTTP_201_CREATED,
        description="Создание фильма. Slug строится из названия и года."
)
async def create_movie(
    payload: MovieCreate,
    db: AsyncSession = Depends(get_async_session),
    service: MovieService = Depends(get_movie_service),
):
    return await service.create(db, payload)

@router.put(
        "/{movie_id}",
        response_model=MovieOut,
        description="Полное обновление фильма: название, год, описание, жанры."
)
async def update_movie(
    movie_id: UUID,
    payload: MovieUpdate,
    user_id: UUID | None = Depends(optional_user_id),
    db: AsyncSession = Depends(get_async_session),
    service: MovieService = Depends(get_movie_service),
):
    return await service.update(db, movie_id, payload, user_id)

@router.delete(
        "/{movie_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        description="Удаление фильма вместе с его оценками."
)
async def delete_movie(
    movie_id: UUID,
    db: AsyncSession = Depends(get_async_session),
    service: MovieService = Depends(get_movie_service),
):
    await service.delete(db, movie_id)
    return None

@router.put(
        "/{movie_id}/ratings",
        status_code=status.HTTP_204_NO_CONTENT,
        description="Поставить или изменить свою оценку фильму (1..5)."
)
async def rate_movie(
    movie_id: UUID,
    payload: RateMovieIn,
    user_id: UUID = Depends(current_user_id),
    db: AsyncSession = Depends(get_async_session),
    service: RatingService = Depends(get_rating_service),
):
    await service.rate(db, movie_id, user_id, payload.rating)
    return None

@router.delete(
        "/{movie_id}/ratings",
        status_code=status.HTTP_204_NO_CONTENT,
        description="Удалить свою оценку фильма."
)
async def delete_rating(
    movie_id: UUID,
    user_id: UUID = Depends(current_user_id),
    db: AsyncSession = Depends(get_async_session),
    service: RatingService = Depends(get_rating_service),
):
    await service.delete_rating(db, movie_id, user_id)
    return None
