"""Token Service — issuance, strict parsing, lenient resolution, blocklist."""

import jwt
import pytest

from movie_catalog.config import get_settings
from movie_catalog.core.domain_types import Role, TokenType
from movie_catalog.core.errors import UnauthorizedError
from movie_catalog.infrastructure.cache import CacheStore
from movie_catalog.infrastructure.security import encode_jwt
from movie_catalog.services.token_service import (
    TokenService, block_key, payload_key,
)


@pytest.fixture
def tokens():
    return TokenService(CacheStore(), get_settings())


def test_issue_access_token_claims(tokens):
    raw = tokens.issue_token(7, Role.PAID_USER, is_refresh=False)
    payload = tokens.parse_bearer_token(f"Bearer {raw}", is_refresh=False)
    assert payload.sub == 7
    assert payload.role is Role.PAID_USER
    assert payload.type is TokenType.ACCESS


def test_access_and_refresh_use_different_secrets(tokens):
    settings = get_settings()
    refresh = tokens.issue_token(1, Role.USER, is_refresh=True)
    with pytest.raises(jwt.InvalidSignatureError):
        jwt.decode(refresh, settings.access_token_secret, algorithms=["HS256"])


def test_parse_bearer_rejects_wrong_type(tokens):
    refresh = tokens.issue_token(1, Role.USER, is_refresh=True)
    with pytest.raises(UnauthorizedError):
        tokens.parse_bearer_token(f"Bearer {refresh}", is_refresh=False)


def test_parse_bearer_rejects_expired(tokens):
    expired = encode_jwt(
        {"sub": "1", "role": 2, "type": "access"},
        get_settings().access_token_secret, ttl_seconds=-5,
    )
    with pytest.raises(UnauthorizedError) as exc:
        tokens.parse_bearer_token(f"Bearer {expired}", is_refresh=False)
    assert exc.value.code == "TOKEN_EXPIRED"


def test_resolve_bearer_caches_payload(tokens):
    raw = tokens.issue_token(3, Role.USER, is_refresh=False)
    payload = tokens.resolve_bearer(f"Bearer {raw}")
    assert payload.sub == 3
    assert tokens.cache.get(payload_key(raw)) == payload


def test_resolve_bearer_ignores_forged_token(tokens):
    forged = encode_jwt({"sub": "1", "role": 0, "type": "access"}, "wrong", 60)
    assert tokens.resolve_bearer(f"Bearer {forged}") is None


def test_resolve_bearer_expired_is_unauthorized(tokens):
    expired = encode_jwt(
        {"sub": "1", "role": 2, "type": "access"},
        get_settings().access_token_secret, ttl_seconds=-5,
    )
    with pytest.raises(UnauthorizedError):
        tokens.resolve_bearer(f"Bearer {expired}")


def test_block_token_sets_blocklist_and_drops_cached_payload(tokens):
    raw = tokens.issue_token(3, Role.USER, is_refresh=False)
    tokens.resolve_bearer(f"Bearer {raw}")

    assert tokens.block_token(raw) is True
    assert tokens.cache.contains(block_key(raw))
    assert not tokens.cache.contains(payload_key(raw))
    with pytest.raises(UnauthorizedError) as exc:
        tokens.resolve_bearer(f"Bearer {raw}")
    assert exc.value.code == "TOKEN_BLOCKED"


def test_block_expired_token_is_noop(tokens):
    expired = encode_jwt(
        {"sub": "1", "role": 2, "type": "access"},
        get_settings().access_token_secret, ttl_seconds=-5,
    )
    assert tokens.block_token(expired) is True
    assert not tokens.cache.contains(block_key(expired))
