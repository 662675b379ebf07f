from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from movies_api.core.config import settings

# Создаём движок
# Настройки подключения к БД передаём из переменных окружения, которые заранее загружены в файл настроек
engine = create_async_engine(settings.postgres.async_url, echo=settings.al.echo_engine)
async_session = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

async def get_async_session() -> AsyncSession:
    # одна сессия на запрос, никакого глобального контекста
    async with async_session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
