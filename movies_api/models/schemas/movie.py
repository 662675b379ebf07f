from __future__ import annotations
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict, computed_field

from movies_api.core.config import settings
from movies_api.core.exceptions import InvalidArgument


class SortField(str, Enum):
    title = "title"
    year_of_release = "year_of_release"


class SortDirection(str, Enum):
    asc = "asc"
    desc = "desc"


# как поле сортировки может прийти в query-параметре
SORT_ALIASES = {
    "title": SortField.title,
    "year": SortField.year_of_release,
    "yearofrelease": SortField.year_of_release,
    "year_of_release": SortField.year_of_release,
}


def parse_sort(sort_by: str | None) -> tuple[SortField, SortDirection]:
    """
    '-title' -> (title, desc), '+year' / 'year' -> (year_of_release, asc).
    Пусто -> сортировка по названию по возрастанию.
    """
    if sort_by is None or not sort_by.strip():
        return SortField.title, SortDirection.asc
    raw = sort_by.strip()
    direction = SortDirection.desc if raw.startswith("-") else SortDirection.asc
    # знак направления допускается только один
    name = (raw[1:] if raw[0] in "+-" else raw).lower()
    field = SORT_ALIASES.get(name)
    if field is None:
        raise InvalidArgument(f"unknown sort field '{name}', allowed: title, year")
    return field, direction


class MovieQueryOptions(BaseModel):
    """Параметры одной выборки списка фильмов. Живёт в рамках запроса."""
    title: str | None = None
    year_of_release: int | None = None
    sort_field: SortField = SortField.title
    sort_direction: SortDirection = SortDirection.asc
    user_id: UUID | None = None
    page: int = 1
    page_size: int = settings.paging.default_page_size
    model_config = ConfigDict(frozen=True)


class MoviesQuery(BaseModel):
    """Query-параметры GET /movies. Границы page/page_size проверяет сервис."""
    title: str | None = Field(None, description="Часть названия, без учёта регистра")
    year: int | None = Field(None, description="Год выхода")
    sort_by: str | None = Field(None, description="Поле сортировки, например: 'title' или '-year'")
    page: int = Field(1, description="Номер страницы, с 1")
    page_size: int = Field(settings.paging.default_page_size, description="Размер страницы")

    def to_options(self, user_id: UUID | None = None) -> MovieQueryOptions:
        field, direction = parse_sort(self.sort_by)
        return MovieQueryOptions(
            title=self.title,
            year_of_release=self.year,
            sort_field=field,
            sort_direction=direction,
            user_id=user_id,
            page=self.page,
            page_size=self.page_size,
        )


class MovieCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    year_of_release: int = Field(..., ge=1870, le=2100)
    synopsis: str | None = None
    genres: list[str] = Field(default_factory=list)
    model_config = ConfigDict(str_strip_whitespace=True)


class MovieUpdate(MovieCreate):
    pass


class MovieOut(BaseModel):
    id: UUID
    title: str
    slug: str
    year_of_release: int
    synopsis: str | None = None
    genres: list[str] = []
    rating: float | None = None
    user_rating: int | None = None

    @classmethod
    def from_row(cls, movie, rating=None, user_rating=None) -> MovieOut:
        return cls(
            id=movie.id,
            title=movie.title,
            slug=movie.slug,
            year_of_release=movie.year_of_release,
            synopsis=movie.synopsis,
            genres=sorted(g.name for g in movie.genres),
            rating=float(rating) if rating is not None else None,
            user_rating=user_rating,
        )


class MoviesPage(BaseModel):
    items: list[MovieOut]
    total: int
    page: int
    page_size: int

    @computed_field
    @property
    def has_next_page(self) -> bool:
        return self.page * self.page_size < self.total
