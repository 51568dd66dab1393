"""Token Service — JWT issuance, bearer verification, token blocklist.

Invariants:
    - Access and refresh tokens are signed with different secrets; the unverified
      `type` claim only selects which secret to verify with
    - A blocklisted token is rejected before any other check (BLOCK_TOKEN_<jwt>)
    - Verified payloads are cached (TOKEN_<jwt>) until 30s before exp
    - resolve_bearer: expired -> 401; any other verification failure -> anonymous (None)
    - parse_bearer_token: every failure -> 401 (explicit refresh/access endpoints)
    - Block TTL = exp - now, so the blocklist entry disappears with the token itself
"""

import logging
import time
from collections.abc import Callable

from movie_catalog.config import Settings
from movie_catalog.core.domain_types import Role, TokenType
from movie_catalog.core.errors import UnauthorizedError
from movie_catalog.core.tokens import TokenPayload, split_bearer_token
from movie_catalog.infrastructure.cache import CacheStore
from movie_catalog.infrastructure.security import (
    TokenExpired, TokenInvalid, decode_jwt, encode_jwt, read_unverified_claims,
)

logger = logging.getLogger(__name__)

PAYLOAD_CACHE_MARGIN_MS = 30_000


def block_key(token: str) -> str:
    return f"BLOCK_TOKEN_{token}"


def payload_key(token: str) -> str:
    return f"TOKEN_{token}"


class TokenService:
    """Stateless JWT logic over the shared cache."""

    def __init__(
        self, cache: CacheStore, settings: Settings,
        clock: Callable[[], float] = time.time,
    ):
        self.cache = cache
        self.settings = settings
        self._clock = clock

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def _secret_for(self, token_type: str | None) -> str:
        if token_type == TokenType.REFRESH.value:
            return self.settings.refresh_token_secret
        return self.settings.access_token_secret

    def issue_token(self, user_id: int, role: Role | int, is_refresh: bool) -> str:
        token_type = TokenType.REFRESH if is_refresh else TokenType.ACCESS
        ttl = (
            self.settings.refresh_token_ttl_seconds if is_refresh
            else self.settings.access_token_ttl_seconds
        )
        claims = {"sub": str(user_id), "role": int(role), "type": token_type.value}
        return encode_jwt(claims, self._secret_for(token_type.value), ttl)

    def _ensure_not_blocked(self, token: str) -> None:
        if self.cache.contains(block_key(token)):
            raise UnauthorizedError("Blocked token", "TOKEN_BLOCKED")

    def parse_bearer_token(self, raw_token: str | None, is_refresh: bool) -> TokenPayload:
        """Strictly verify a bearer token of the expected type."""
        token = split_bearer_token(raw_token)
        self._ensure_not_blocked(token)
        expected = TokenType.REFRESH if is_refresh else TokenType.ACCESS
        try:
            claims = decode_jwt(token, self._secret_for(expected.value))
        except TokenExpired:
            raise UnauthorizedError("Token expired", "TOKEN_EXPIRED")
        except TokenInvalid:
            raise UnauthorizedError("Invalid token", "INVALID_TOKEN")

        payload = TokenPayload.from_claims(claims)
        if payload.type is not expected:
            raise UnauthorizedError(
                f"Expected a {expected.value} token", "INVALID_TOKEN_TYPE",
            )
        return payload

    def resolve_bearer(self, raw_token: str) -> TokenPayload | None:
        """Payload for a request's Authorization header (None = anonymous)."""
        token = split_bearer_token(raw_token)
        self._ensure_not_blocked(token)

        cached = self.cache.get(payload_key(token))
        if cached is not None:
            return cached

        try:
            unverified = read_unverified_claims(token)
            claims = decode_jwt(token, self._secret_for(unverified.get("type")))
        except TokenExpired:
            raise UnauthorizedError("Token expired", "TOKEN_EXPIRED")
        except TokenInvalid as e:
            logger.info(f"Ignoring unverifiable bearer token: {e}")
            return None

        payload = TokenPayload.from_claims(claims)
        ttl_ms = payload.exp * 1000 - self._now_ms() - PAYLOAD_CACHE_MARGIN_MS
        if ttl_ms > 0:
            self.cache.set(payload_key(token), payload, ttl_ms=ttl_ms)
        return payload

    def block_token(self, token: str) -> bool:
        try:
            unverified = read_unverified_claims(token)
            claims = decode_jwt(token, self._secret_for(unverified.get("type")))
        except TokenExpired:
            return True
        except TokenInvalid:
            raise UnauthorizedError("Invalid token", "INVALID_TOKEN")

        payload = TokenPayload.from_claims(claims)
        ttl_ms = payload.exp * 1000 - self._now_ms()
        self.cache.set(block_key(token), payload.to_dict(), ttl_ms=ttl_ms)
        self.cache.delete(payload_key(token))
        logger.info("Token blocked", extra={"user_id": payload.sub})
        return True
