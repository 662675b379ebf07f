from __future__ import annotations

import uuid
from sqlalchemy import Integer, Uuid, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from movies_api.db.base import Base


class MovieRating(Base):
    """
    Оценка фильма пользователем (1..5).
    Пользователи живут в auth-service, здесь храним только их id из токена.
    """
    __tablename__ = "movie_ratings"
    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_movie_ratings_range"),
        # средний рейтинг считаем по movie_id
        Index("ix_movie_ratings_movie", "movie_id"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    movie_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
