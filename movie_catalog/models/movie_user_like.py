"""MovieUserLike ORM — a user's like/dislike on a movie.

Invariants:
    - Composite primary key (movie_id, user_id): at most one reaction per pair
    - is_like=True means like, False means dislike; "no reaction" = no row
"""

from sqlalchemy import Boolean, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from movie_catalog.db.base import Base, TimestampMixin


class MovieUserLike(TimestampMixin, Base):
    __tablename__ = "movie_user_like"

    movie_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    )
    is_like: Mapped[bool] = mapped_column(Boolean, nullable=False)
