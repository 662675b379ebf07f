from sqlalchemy import Table, Column, ForeignKey, Integer, Uuid

from movies_api.db.base import Base

movie_genres = Table(
    "movie_genres",
    Base.metadata,
    Column("movie_id", Uuid, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", Integer, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)
