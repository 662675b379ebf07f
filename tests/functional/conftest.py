import os
import uuid

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from tests.functional.settings import test_settings
from tests.functional.utils.helpers import ALPHA_ID, BETA_ID, GAMMA_ID

# настройки приложения читаются при импорте, поэтому окружение готовим до него
os.environ.setdefault("JWT_SECRET", test_settings.jwt_secret)
os.environ.setdefault("JWT_ISS", test_settings.jwt_iss)
os.environ.setdefault("JWT_AUD", test_settings.jwt_aud)
os.environ.setdefault("DATABASE_URL", test_settings.database_url)

from main import app  # noqa: E402
from movies_api.db.base import Base  # noqa: E402
from movies_api.db.postgres import get_async_session  # noqa: E402
from movies_api.models.orm import Movie  # noqa: E402


# свежая БД на каждый тест: StaticPool держит одно соединение,
# иначе у in-memory sqlite каждая сессия видела бы пустую базу
@pytest_asyncio.fixture(name="engine")
async def engine():
    eng = create_async_engine(
        test_settings.database_url,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture(name="session_maker")
async def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(name="db")
async def db(session_maker):
    async with session_maker() as s:
        yield s


# фикстура для HTTP-клиента поверх приложения, без сети
@pytest_asyncio.fixture(name="client")
async def client(session_maker):
    async def override_session():
        async with session_maker() as s:
            yield s

    app.dependency_overrides[get_async_session] = override_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url=test_settings.service_url) as c:
        yield c
    app.dependency_overrides.clear()


@pytest_asyncio.fixture(name="three_movies")
async def three_movies(db):
    """
    Alpha (2000), Beta (2000), Gamma (2010).
    """
    movies = [
        Movie(id=ALPHA_ID, title="Alpha", slug="alpha-2000", year_of_release=2000, genres=[]),
        Movie(id=BETA_ID, title="Beta", slug="beta-2000", year_of_release=2000, genres=[]),
        Movie(id=GAMMA_ID, title="Gamma", slug="gamma-2010", year_of_release=2010, genres=[]),
    ]
    db.add_all(movies)
    await db.commit()
    return movies


@pytest.fixture(name="user_id")
def user_id():
    return uuid.uuid4()
