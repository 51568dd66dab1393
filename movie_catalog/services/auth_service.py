"""Auth Service — register and login from Basic tokens.

Invariants:
    - Registration rejects an already registered email (ConflictError)
    - Login failures never reveal whether the email or the password was wrong
    - Login issues a refresh + access token pair
"""

import logging

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.config import Settings
from movie_catalog.core.domain_types import Role
from movie_catalog.core.errors import BadRequestError
from movie_catalog.core.tokens import parse_basic_token
from movie_catalog.infrastructure.security import verify_password
from movie_catalog.models.user import User
from movie_catalog.schemas.user import UserCreate
from movie_catalog.services.token_service import TokenService
from movie_catalog.services.user_service import UserService

logger = logging.getLogger(__name__)

_WRONG_LOGIN = "Wrong login information"


class AuthService:

    def __init__(self, db: AsyncSession, tokens: TokenService, settings: Settings):
        self.users = UserService(db, settings)
        self.tokens = tokens

    async def register(self, raw_token: str | None) -> User:
        credentials = parse_basic_token(raw_token)
        try:
            dto = UserCreate(
                email=credentials.email, password=credentials.password,
                role=Role.USER,
            )
        except ValidationError:
            raise BadRequestError("Invalid email or password", "INVALID_CREDENTIALS")
        return await self.users.create(dto)

    async def authenticate(self, email: str, password: str) -> User:
        user = await self.users.get_by_email(email)
        if not user or not await verify_password(password, user.password):
            raise BadRequestError(_WRONG_LOGIN, "WRONG_LOGIN")
        return user

    async def login(self, raw_token: str | None) -> dict[str, str]:
        credentials = parse_basic_token(raw_token)
        user = await self.authenticate(credentials.email, credentials.password)
        logger.info("User logged in", extra={"user_id": user.id})
        return {
            "refresh_token": self.tokens.issue_token(user.id, user.role, True),
            "access_token": self.tokens.issue_token(user.id, user.role, False),
        }
