"""User Service — account CRUD with bcrypt hashing.

Invariants:
    - Emails are unique (checked before insert/update -> ConflictError)
    - Passwords are hashed on create and whenever a new password is supplied
    - Removing a user deletes their likes, recounts likes on the movies involved
      and clears creator_id on their movies
"""

import logging

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.config import Settings
from movie_catalog.core.domain_types import UserId
from movie_catalog.core.errors import ConflictError, ResourceNotFoundError
from movie_catalog.infrastructure.security import hash_password
from movie_catalog.models.movie import Movie
from movie_catalog.models.movie_user_like import MovieUserLike
from movie_catalog.models.user import User
from movie_catalog.schemas.user import UserCreate, UserUpdate
from movie_catalog.services.movie_service import recalculate_like_counts
from movie_catalog.services.query_pagination import (
    PagePaginationParams, apply_page_pagination,
)

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_all(self, params: PagePaginationParams) -> tuple[list[User], int]:
        query = apply_page_pagination(select(User).order_by(User.id), params)
        users = (await self.db.execute(query)).scalars().all()
        count = await self.db.scalar(select(func.count(User.id)))
        return list(users), count or 0

    async def find_one(self, user_id: UserId) -> User:
        user = await self.db.get(User, user_id)
        if not user:
            raise ResourceNotFoundError("User", user_id)
        return user

    async def create(self, dto: UserCreate) -> User:
        if await self.get_by_email(dto.email):
            raise ConflictError("Email is already registered")
        user = User(
            email=dto.email,
            password=await hash_password(dto.password, self.settings.hash_rounds),
            role=int(dto.role),
        )
        self.db.add(user)
        await self.db.commit()
        logger.info("User created", extra={"user_id": user.id})
        return user

    async def update(self, user_id: UserId, dto: UserUpdate) -> User:
        user = await self.find_one(user_id)
        fields = dto.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in fields and fields["email"] != user.email:
            if await self.get_by_email(fields["email"]):
                raise ConflictError("Email is already registered")
            user.email = fields["email"]
        if "password" in fields:
            user.password = await hash_password(
                fields["password"], self.settings.hash_rounds,
            )
        if "role" in fields:
            user.role = int(fields["role"])

        await self.db.commit()
        return user

    async def remove(self, user_id: UserId) -> int:
        user = await self.find_one(user_id)
        liked_movie_ids = list((await self.db.execute(
            select(MovieUserLike.movie_id).where(MovieUserLike.user_id == user_id),
        )).scalars().all())
        await self.db.execute(
            delete(MovieUserLike).where(MovieUserLike.user_id == user_id),
        )
        await self.db.execute(
            update(Movie).where(Movie.creator_id == user_id)
            .values(creator_id=None)
            .execution_options(synchronize_session="fetch"),
        )
        if liked_movie_ids:
            await recalculate_like_counts(self.db, liked_movie_ids)
        await self.db.delete(user)
        await self.db.commit()
        logger.info("User removed", extra={"user_id": user_id})
        return user_id
