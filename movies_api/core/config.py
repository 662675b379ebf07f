import os
import logging
from logging import config as logging_config

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from movies_api.core.logger import LOGGING


class PostgresSettings(BaseSettings):
    """Настройки для подключения к Postgres."""
    db: str = Field('movies', validation_alias='POSTGRES_DB')
    user: str = Field('app', validation_alias='POSTGRES_USER')
    password: str = Field('secret', validation_alias='POSTGRES_PASSWORD')
    host: str = Field('movies-db', validation_alias='SQL_HOST')
    port: int = Field(5432, validation_alias='SQL_PORT')
    options: str | None = Field(None, validation_alias='SQL_OPTIONS')
    # полный DSN перекрывает поля выше (например, sqlite+aiosqlite для тестов)
    url: str | None = Field(None, validation_alias='DATABASE_URL')

    @property
    def async_url(self) -> str:
        """Для FastAPI (async SQLAlchemy)."""
        if self.url:
            return self.url
        opts = f"?options={self.options}" if self.options else ""
        return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.db}{opts}"


class JwtSettings(BaseSettings):
    secret: str = Field(..., validation_alias="JWT_SECRET")
    algorithm: str = "HS256"
    issuer: str = Field("auth-service", validation_alias="JWT_ISS")
    audience: str = Field("movies-service", validation_alias="JWT_AUD")


class PagingSettings(BaseSettings):
    """Ограничения постраничной выдачи."""
    default_page_size: int = Field(10, validation_alias="DEFAULT_PAGE_SIZE")
    max_page_size: int = Field(25, validation_alias="MAX_PAGE_SIZE")


class ProjectSettings(BaseSettings):
    """Текстовая информация о проекте"""
    name: str = Field('movies', validation_alias='PROJECT_NAME')


class AlchemySettings(BaseSettings):
    """Настройки для Alchemy"""
    echo_engine: bool = Field(False, validation_alias='ECHO_ENGINE')


class AppSettings(BaseSettings):
    """Основной класс с настройками приложения."""
    model_config = SettingsConfigDict(
        env_nested_delimiter='__',
        env_file_encoding='utf-8'
    )

    postgres: PostgresSettings = Field(default_factory=PostgresSettings)
    pr: ProjectSettings = Field(default_factory=ProjectSettings)
    jwt: JwtSettings = Field(default_factory=JwtSettings)
    paging: PagingSettings = Field(default_factory=PagingSettings)
    al: AlchemySettings = Field(default_factory=AlchemySettings)


try:
    settings = AppSettings()
except Exception as e:
    logging.error(f"Ошибка при загрузке конфигурации: {e}")
    raise

logging_config.dictConfig(LOGGING)

# Корень проекта
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
