"""Token Parsing — Basic/Bearer header parsing and payload construction.

Tests cover:
    - Well-formed Basic header decodes to email/password
    - Every malformed shape raises BadRequestError (never partial data)
    - Bearer extraction and scheme checks
    - TokenPayload.from_claims coerces string sub and rejects incomplete claims
"""

import base64

import pytest

from movie_catalog.core.domain_types import Role, TokenType
from movie_catalog.core.errors import BadRequestError
from movie_catalog.core.tokens import (
    TokenPayload, parse_basic_token, split_bearer_token,
)


def _basic(raw: str) -> str:
    return "Basic " + base64.b64encode(raw.encode()).decode()


def test_parse_basic_token_decodes_credentials():
    creds = parse_basic_token(_basic("alice@example.com:s3cret"))
    assert creds.email == "alice@example.com"
    assert creds.password == "s3cret"


def test_parse_basic_token_scheme_is_case_insensitive():
    creds = parse_basic_token(_basic("a@b.c:pw").replace("Basic", "basic"))
    assert creds.email == "a@b.c"


@pytest.mark.parametrize("raw", [
    None,
    "",
    "Basic",
    "Basic a b",
    "Bearer " + base64.b64encode(b"a@b.c:pw").decode(),
    "Basic !!!not-base64!!!",
])
def test_parse_basic_token_rejects_malformed_header(raw):
    with pytest.raises(BadRequestError):
        parse_basic_token(raw)


def test_parse_basic_token_requires_single_colon():
    with pytest.raises(BadRequestError):
        parse_basic_token(_basic("no-colon"))
    with pytest.raises(BadRequestError):
        parse_basic_token(_basic("a@b.c:pw:extra"))


def test_split_bearer_token_returns_jwt():
    assert split_bearer_token("Bearer abc.def.ghi") == "abc.def.ghi"


@pytest.mark.parametrize("raw", [None, "abc", "Basic abc", "Bearer", "Bearer a b"])
def test_split_bearer_token_rejects_malformed_header(raw):
    with pytest.raises(BadRequestError):
        split_bearer_token(raw)


def test_token_payload_from_claims_coerces_types():
    payload = TokenPayload.from_claims(
        {"sub": "12", "role": 0, "type": "access", "exp": 1900000000},
    )
    assert payload.sub == 12
    assert payload.role is Role.ADMIN
    assert payload.type is TokenType.ACCESS
    assert payload.to_dict() == {
        "sub": 12, "role": 0, "type": "access", "exp": 1900000000,
    }


def test_token_payload_from_claims_rejects_missing_claims():
    with pytest.raises(BadRequestError):
        TokenPayload.from_claims({"sub": "1", "type": "access"})
    with pytest.raises(BadRequestError):
        TokenPayload.from_claims(
            {"sub": "1", "role": 9, "type": "access", "exp": 1},
        )
