from __future__ import annotations

from sqlalchemy import String, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movies_api.db.base import Base
from .associations import movie_genres

class Genre(Base):
    __tablename__ = "genres"
    __table_args__ = (UniqueConstraint("name", name="uq_genres_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)

    # обратную сторону не грузим, фильмы жанра никому не нужны целиком
    movies: Mapped[list["Movie"]] = relationship(
        "Movie",
        secondary=movie_genres,
        back_populates="genres",
        lazy="noload",
    )
