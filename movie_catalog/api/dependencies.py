"""API Dependencies — service factories, authentication, roles, throttling.

Invariants:
    - get_optional_payload: no Authorization header -> None; otherwise the header must be
      a well-formed Bearer token (400) that is not blocked (401) and not expired (401)
    - get_current_user requires an ACCESS token (refresh tokens never authenticate routes)
    - require_role(role): lower role number = more privilege; insufficient -> 403
    - throttle(count): per user, per method+path, per wall-clock minute; anonymous calls
      are not counted; the (count+1)-th call within the minute -> ThrottleExceededError
"""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.config import Settings, get_settings
from movie_catalog.core.domain_types import Role, TokenType
from movie_catalog.core.errors import (
    ForbiddenError, ThrottleExceededError, UnauthorizedError,
)
from movie_catalog.core.tokens import TokenPayload
from movie_catalog.infrastructure.cache import CacheStore, get_cache
from movie_catalog.infrastructure.database import get_db
from movie_catalog.infrastructure.file_storage import FileStorage, get_file_storage
from movie_catalog.services.auth_service import AuthService
from movie_catalog.services.director_service import DirectorService
from movie_catalog.services.genre_service import GenreService
from movie_catalog.services.movie_service import MovieService
from movie_catalog.services.token_service import TokenService
from movie_catalog.services.user_service import UserService

logger = logging.getLogger(__name__)

_UNIT_SECONDS = {"minute": 60}


# ─── Service factories ──────────────────────────────────────────

def get_token_service(
    cache: CacheStore = Depends(get_cache),
    settings: Settings = Depends(get_settings),
) -> TokenService:
    return TokenService(cache, settings)


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(db, tokens, settings)


def get_user_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(db, settings)


def get_director_service(db: AsyncSession = Depends(get_db)) -> DirectorService:
    return DirectorService(db)


def get_genre_service(db: AsyncSession = Depends(get_db)) -> GenreService:
    return GenreService(db)


def get_movie_service(
    db: AsyncSession = Depends(get_db),
    cache: CacheStore = Depends(get_cache),
    storage: FileStorage = Depends(get_file_storage),
    settings: Settings = Depends(get_settings),
) -> MovieService:
    return MovieService(db, cache, storage, settings)


# ─── Authentication ─────────────────────────────────────────────

async def get_optional_payload(
    authorization: str | None = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> TokenPayload | None:
    if not authorization:
        return None
    return tokens.resolve_bearer(authorization)


async def get_current_user(
    payload: TokenPayload | None = Depends(get_optional_payload),
) -> TokenPayload:
    if payload is None or payload.type is not TokenType.ACCESS:
        raise UnauthorizedError()
    return payload


async def get_refresh_payload(
    authorization: str | None = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> TokenPayload:
    if not authorization:
        raise UnauthorizedError("Refresh token required")
    return tokens.parse_bearer_token(authorization, is_refresh=True)


def require_role(role: Role) -> Callable[..., Awaitable[TokenPayload]]:
    """Dependency factory: the current user must hold `role` or better."""

    async def _require_role(
        user: TokenPayload = Depends(get_current_user),
    ) -> TokenPayload:
        if not user.role.grants(role):
            logger.warning(
                f"Role {user.role.name} denied (needs {role.name})",
                extra={"user_id": user.sub},
            )
            raise ForbiddenError()
        return user

    return _require_role


# ─── Throttling ─────────────────────────────────────────────────

def throttle(
    count: int, unit: str = "minute",
    clock: Callable[[], float] = time.time,
) -> Callable[..., Awaitable[None]]:
    """Dependency factory: at most `count` calls per user per `unit`."""
    window_seconds = _UNIT_SECONDS[unit]

    async def _throttle(
        request: Request,
        payload: TokenPayload | None = Depends(get_optional_payload),
        cache: CacheStore = Depends(get_cache),
    ) -> None:
        if payload is None:
            return
        bucket = int(clock() // window_seconds)
        key = f"{request.method}_{request.url.path}_{payload.sub}_{bucket}"
        calls = cache.get(key, 0)
        if calls >= count:
            logger.warning(
                "Throttle limit reached",
                extra={"user_id": payload.sub, "path": request.url.path},
            )
            raise ThrottleExceededError(count, unit)
        cache.set(key, calls + 1, ttl_ms=window_seconds * 1000)

    return _throttle
