"""Genre ORM.

Invariants:
    - name is unique
    - movie links live in movie_genre (models/movie.py); no back-reference here
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from movie_catalog.db.base import Base, TimestampMixin


class Genre(TimestampMixin, Base):
    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
