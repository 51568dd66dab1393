"""User ORM — account with bcrypt password hash and integer role.

Invariants:
    - email is unique
    - password column holds a bcrypt hash, never plaintext; never serialized
    - role defaults to Role.USER (2)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from movie_catalog.core.domain_types import Role
from movie_catalog.db.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[int] = mapped_column(
        Integer, nullable=False, default=int(Role.USER),
    )
