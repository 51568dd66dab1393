"""Movie ORM — the catalog aggregate: movie, its 1:1 detail and genre links.

Invariants:
    - title is unique
    - Exactly one MovieDetail per movie (movie_details.movie_id is unique);
      the detail is created and deleted with its movie (delete-orphan)
    - director_id is required; creator_id is nullable (cleared when the user goes)
    - like_count/dislike_count are denormalized from movie_user_like

Design Decisions:
    - All relationships lazy="selectin": AsyncSession cannot lazy-load on attribute access
    - Likes have no ORM relationship here; services query MovieUserLike directly
"""

from sqlalchemy import Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movie_catalog.db.base import Base, TimestampMixin
from movie_catalog.models.director import Director
from movie_catalog.models.genre import Genre
from movie_catalog.models.user import User

movie_genre = Table(
    "movie_genre",
    Base.metadata,
    Column(
        "movie_id", Integer,
        ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "genre_id", Integer,
        ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True,
    ),
)


class Movie(TimestampMixin, Base):
    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    dislike_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    movie_file_path: Mapped[str] = mapped_column(String(500), nullable=False)
    director_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("directors.id"), nullable=False,
    )
    creator_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True,
    )

    detail: Mapped["MovieDetail"] = relationship(
        "MovieDetail", back_populates="movie", uselist=False,
        cascade="all, delete-orphan", lazy="selectin",
    )
    director: Mapped[Director] = relationship(Director, lazy="selectin")
    genres: Mapped[list[Genre]] = relationship(
        Genre, secondary=movie_genre, lazy="selectin",
        order_by=Genre.id,
    )
    creator: Mapped[User | None] = relationship(User, lazy="selectin")


class MovieDetail(TimestampMixin, Base):
    __tablename__ = "movie_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    detail: Mapped[str] = mapped_column(Text, nullable=False)
    movie_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("movies.id", ondelete="CASCADE"),
        unique=True, nullable=False,
    )

    movie: Mapped[Movie] = relationship(Movie, back_populates="detail")
