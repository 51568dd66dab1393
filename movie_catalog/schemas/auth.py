"""Auth Schemas — token responses and blocklist request."""

from pydantic import Field

from movie_catalog.schemas.base import CamelModel, RequestModel


class TokenPairResponse(CamelModel):
    refresh_token: str
    access_token: str


class AccessTokenResponse(CamelModel):
    access_token: str


class BlockTokenRequest(RequestModel):
    token: str = Field(min_length=1)


class TokenPayloadResponse(CamelModel):
    sub: int
    role: int
    type: str
    exp: int
