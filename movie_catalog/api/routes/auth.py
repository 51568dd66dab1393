"""Auth Routes — Basic-token register/login, token rotation and blocklisting.

Invariants:
    - register/login read "Authorization: Basic <base64(email:password)>"
    - token/access requires a REFRESH bearer token and returns a fresh access token
    - token/block and private require an ACCESS bearer token
"""

from fastapi import APIRouter, Depends, Header, status

from movie_catalog.api.dependencies import (
    get_auth_service, get_current_user, get_refresh_payload, get_token_service,
)
from movie_catalog.core.tokens import TokenPayload
from movie_catalog.schemas.auth import (
    AccessTokenResponse, BlockTokenRequest, TokenPairResponse,
    TokenPayloadResponse,
)
from movie_catalog.schemas.user import UserResponse
from movie_catalog.services.auth_service import AuthService
from movie_catalog.services.token_service import TokenService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register", response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_user(
    authorization: str | None = Header(None),
    service: AuthService = Depends(get_auth_service),
):
    return await service.register(authorization)


@router.post("/login", response_model=TokenPairResponse)
async def login_user(
    authorization: str | None = Header(None),
    service: AuthService = Depends(get_auth_service),
):
    return await service.login(authorization)


@router.post("/token/access", response_model=AccessTokenResponse)
async def rotate_access_token(
    payload: TokenPayload = Depends(get_refresh_payload),
    tokens: TokenService = Depends(get_token_service),
):
    return {"access_token": tokens.issue_token(payload.sub, payload.role, False)}


@router.post("/token/block")
async def block_token(
    body: BlockTokenRequest,
    _user: TokenPayload = Depends(get_current_user),
    tokens: TokenService = Depends(get_token_service),
) -> bool:
    return tokens.block_token(body.token)


@router.get("/private", response_model=TokenPayloadResponse)
async def private(user: TokenPayload = Depends(get_current_user)):
    return user.to_dict()
