"""Token Parsing — pure helpers for `Authorization` header values.

Invariants:
    - Basic header: "Basic <base64(email:password)>" — exactly two space-separated
      parts, exactly one ':' in the decoded credentials
    - Bearer header: "Bearer <jwt>" — exactly two space-separated parts
    - Any format violation raises BadRequestError (never returns partial data)
    - No signature verification here (see services/token_service.py)
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Any

from movie_catalog.core.domain_types import Role, TokenType, UserId
from movie_catalog.core.errors import BadRequestError

_INVALID_FORMAT = "Invalid token format"


@dataclass(frozen=True)
class BasicCredentials:
    email: str
    password: str


@dataclass(frozen=True)
class TokenPayload:
    """Verified JWT claims."""
    sub: UserId
    role: Role
    type: TokenType
    exp: int

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "TokenPayload":
        try:
            return cls(
                sub=UserId(int(claims["sub"])),
                role=Role(int(claims["role"])),
                type=TokenType(claims["type"]),
                exp=int(claims["exp"]),
            )
        except (KeyError, TypeError, ValueError):
            raise BadRequestError(_INVALID_FORMAT, "INVALID_TOKEN_FORMAT")

    def to_dict(self) -> dict[str, Any]:
        return {
            "sub": self.sub,
            "role": int(self.role),
            "type": self.type.value,
            "exp": self.exp,
        }


def _split_scheme(raw_token: str | None, scheme: str) -> str:
    parts = (raw_token or "").split(" ")
    if len(parts) != 2:
        raise BadRequestError(_INVALID_FORMAT, "INVALID_TOKEN_FORMAT")
    token_scheme, token = parts
    if token_scheme.lower() != scheme.lower() or not token:
        raise BadRequestError(_INVALID_FORMAT, "INVALID_TOKEN_FORMAT")
    return token


def parse_basic_token(raw_token: str | None) -> BasicCredentials:
    """Decode a Basic header into email/password."""
    token = _split_scheme(raw_token, "Basic")
    try:
        decoded = base64.b64decode(token, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise BadRequestError(_INVALID_FORMAT, "INVALID_TOKEN_FORMAT")

    credentials = decoded.split(":")
    if len(credentials) != 2:
        raise BadRequestError(_INVALID_FORMAT, "INVALID_TOKEN_FORMAT")
    email, password = credentials
    return BasicCredentials(email=email, password=password)


def split_bearer_token(raw_token: str | None) -> str:
    """Extract the JWT from a Bearer header."""
    return _split_scheme(raw_token, "Bearer")
