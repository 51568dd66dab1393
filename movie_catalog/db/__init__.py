"""Database Layer — SQLAlchemy declarative Base and shared column mixins.

Invariants:
    - Every model inherits from Base and TimestampMixin
"""
