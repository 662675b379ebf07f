from fastapi import FastAPI, Request, status
from fastapi.responses import ORJSONResponse, JSONResponse
from contextlib import asynccontextmanager

from movies_api.api.v1 import movies, ratings
from movies_api.core.config import settings
from movies_api.core.exceptions import InvalidArgument, StoreUnavailable
from movies_api.db.postgres import engine

from pydantic import ValidationError


# код до yield выполняется для старта,
# после yield - для завершения и освобождения ресурсов
@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await engine.dispose()

app = FastAPI(
    # Конфигурируем название проекта. Оно будет отображаться в документации
    title=settings.pr.name,
    # Адрес документации в красивом интерфейсе
    docs_url='/api/openapi',
    # Адрес документации в формате OpenAPI
    openapi_url='/api/openapi.json',
    # Заменяем стандартный JSON-сериализатор на более шуструю версию, написанную на Rust
    default_response_class=ORJSONResponse,
    description="Каталог фильмов: список с фильтрами и пагинацией, CRUD и оценки пользователей",
    version="1.0.0",
    lifespan=lifespan
)


# Обработчик  ошибок Pydantic
@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors()},
    )


# Неверные page/page_size/sort_by: ошибка клиента
@app.exception_handler(InvalidArgument)
async def invalid_argument_handler(request: Request, exc: InvalidArgument):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.as_detail()},
    )


# БД недоступна: не путаем с пустым результатом
@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": exc.as_detail()},
    )

app.include_router(movies.router, prefix="/api/v1/movies", tags=["movies"])
app.include_router(ratings.router, prefix="/api/v1/ratings", tags=["ratings"])
