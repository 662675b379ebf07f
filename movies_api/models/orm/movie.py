from __future__ import annotations

import uuid
from sqlalchemy import String, Integer, Text, Uuid, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movies_api.db.base import Base
from .associations import movie_genres


class Movie(Base):
    __tablename__ = "movies"
    __table_args__ = (
        UniqueConstraint("slug", name="uq_movies_slug"),
        # фильтр по году и сортировка по году с тай-брейком по id
        Index("ix_movies_year_id", "year_of_release", "id"),
        Index("ix_movies_title_id", "title", "id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(300), nullable=False)
    year_of_release: Mapped[int] = mapped_column(Integer, nullable=False)
    synopsis: Mapped[str | None] = mapped_column(Text)

    genres: Mapped[list["Genre"]] = relationship(
        "Genre",
        secondary=movie_genres,
        back_populates="movies",
        order_by="Genre.name",
        lazy="selectin",
    )
