import asyncio
import json
from pathlib import Path

import typer
from pydantic import ValidationError

from movies_api.db.base import Base
from movies_api.db.postgres import engine, async_session
from movies_api.core.slug import make_slug
from movies_api.domain.repositories.movie_repo import MovieRepository
from movies_api.models.schemas.movie import MovieCreate
import movies_api.models.orm  # noqa: F401  регистрируем таблицы в metadata

app = typer.Typer(help="Management commands")

@app.command("create-tables")
def create_tables():
    """Создать недостающие таблицы (без миграций)."""
    asyncio.run(_create_tables())
    typer.secho("✅ Таблицы созданы", fg=typer.colors.GREEN)

async def _create_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()

@app.command("seed")
def seed(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON-файл со списком фильмов"),
):
    """Загрузить фильмы из JSON: [{"title": ..., "year_of_release": ..., "genres": [...]}]."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        payloads = [MovieCreate.model_validate(item) for item in raw]
    except (json.JSONDecodeError, ValidationError) as e:
        typer.secho(f"❌ Некорректный файл: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    created, skipped = asyncio.run(_seed(payloads))
    typer.secho(f"✅ Добавлено: {created}, пропущено (slug занят): {skipped}", fg=typer.colors.GREEN)

async def _seed(payloads: list[MovieCreate]) -> tuple[int, int]:
    repo = MovieRepository()
    created = skipped = 0
    async with async_session() as db:
        for p in payloads:
            slug = make_slug(p.title, p.year_of_release)
            if await repo.get_by_slug(db, slug):
                skipped += 1
                continue
            genres = await repo.resolve_genres(db, p.genres)
            await repo.create(
                db,
                title=p.title,
                slug=slug,
                year_of_release=p.year_of_release,
                synopsis=p.synopsis,
                genres=genres,
            )
            # flush, чтобы новые жанры были видны следующим фильмам
            await db.flush()
            created += 1
        await db.commit()
    await engine.dispose()
    return created, skipped


if __name__ == "__main__":
    app()
