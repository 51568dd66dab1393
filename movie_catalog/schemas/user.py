"""User Schemas.

Passwords are capped at 72 UTF-8 bytes, the most bcrypt will hash.
"""

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from movie_catalog.core.domain_types import Role
from movie_catalog.schemas.base import CamelModel, RequestModel

BCRYPT_MAX_BYTES = 72


def _check_password_bytes(password: str | None) -> str | None:
    if password is not None and len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"password must be at most {BCRYPT_MAX_BYTES} bytes")
    return password


class UserCreate(RequestModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=BCRYPT_MAX_BYTES)
    role: Role = Role.USER

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return _check_password_bytes(v)


class UserUpdate(RequestModel):
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=1, max_length=BCRYPT_MAX_BYTES)
    role: Role | None = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str | None) -> str | None:
        return _check_password_bytes(v)


class UserResponse(CamelModel):
    id: int
    email: str
    role: int
    created_at: datetime
    updated_at: datetime
