"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Role is ordered by privilege: a LOWER value grants MORE access (admin=0)
    - TokenType distinguishes access from refresh tokens; only access tokens
      authenticate regular requests
"""

from enum import Enum, IntEnum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
MovieId = NewType("MovieId", int)
DirectorId = NewType("DirectorId", int)
GenreId = NewType("GenreId", int)


# ─── Enums ───────────────────────────────────────────────────────

class Role(IntEnum):
    """User roles — stored as integers in the `users.role` column."""
    ADMIN = 0
    PAID_USER = 1
    USER = 2

    def grants(self, required: "Role") -> bool:
        """True if this role is at least as privileged as `required`."""
        return self <= required


class TokenType(str, Enum):
    """JWT `type` claim."""
    ACCESS = "access"
    REFRESH = "refresh"


class SortDirection(str, Enum):
    """Cursor pagination order direction."""
    ASC = "ASC"
    DESC = "DESC"
