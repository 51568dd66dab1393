"""Security Primitives — bcrypt password hashing and HS256 JWT encode/decode.

Invariants:
    - Passwords are hashed with bcrypt at the configured cost (HASH_ROUNDS)
    - Tokens are HS256; decode always verifies signature and exp
    - PyJWT exceptions never escape: expired -> TokenExpired, anything else -> TokenInvalid

Design Decisions:
    - bcrypt work runs in Starlette's threadpool: hashing blocks for tens of ms
"""

import time
from typing import Any

import bcrypt
import jwt
from starlette.concurrency import run_in_threadpool

JWT_ALGORITHM = "HS256"


class TokenInvalid(Exception):
    """Signature, structure or claim check failed."""


class TokenExpired(TokenInvalid):
    """Signature valid but exp is in the past."""


async def hash_password(password: str, rounds: int) -> str:
    def _hash() -> str:
        salt = bcrypt.gensalt(rounds=rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    return await run_in_threadpool(_hash)


async def verify_password(password: str, password_hash: str) -> bool:
    def _check() -> bool:
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8"),
            )
        except ValueError:
            return False

    return await run_in_threadpool(_check)


def encode_jwt(claims: dict[str, Any], secret: str, ttl_seconds: int) -> str:
    payload = {**claims, "exp": int(time.time()) + ttl_seconds}
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_jwt(token: str, secret: str) -> dict[str, Any]:
    try:
        return jwt.decode(
            token, secret, algorithms=[JWT_ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpired("token expired")
    except jwt.PyJWTError as e:
        raise TokenInvalid(str(e))


def read_unverified_claims(token: str) -> dict[str, Any]:
    """Claims without signature check — only to choose which secret verifies."""
    try:
        return jwt.decode(
            token, options={"verify_signature": False, "verify_exp": False},
        )
    except jwt.PyJWTError as e:
        raise TokenInvalid(str(e))
