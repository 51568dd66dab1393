"""SQLAlchemy Declarative Base — shared base class and timestamp columns.

Invariants:
    - All models inherit from Base
    - created_at/updated_at use client-side defaults so values are populated
      on the instance after flush (no expired attributes under AsyncSession)
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all catalog ORM models."""
    pass


class TimestampMixin:
    """created_at / updated_at columns shared by every table."""
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
        onupdate=utcnow,
    )
