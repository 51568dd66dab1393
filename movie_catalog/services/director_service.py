"""Director Service.

Invariants:
    - A director referenced by any movie cannot be removed (ConflictError)
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.core.domain_types import DirectorId
from movie_catalog.core.errors import ConflictError, ResourceNotFoundError
from movie_catalog.models.director import Director
from movie_catalog.models.movie import Movie
from movie_catalog.schemas.director import DirectorCreate, DirectorUpdate
from movie_catalog.services.query_pagination import (
    PagePaginationParams, apply_page_pagination,
)


class DirectorService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(
        self, params: PagePaginationParams, name: str | None = None,
    ) -> tuple[list[Director], int]:
        conditions = []
        if name:
            conditions.append(Director.name.contains(name, autoescape=True))

        query = select(Director).where(*conditions).order_by(Director.id)
        directors = (
            await self.db.execute(apply_page_pagination(query, params))
        ).scalars().all()
        count = await self.db.scalar(
            select(func.count(Director.id)).where(*conditions),
        )
        return list(directors), count or 0

    async def find_one(self, director_id: DirectorId) -> Director:
        director = await self.db.get(Director, director_id)
        if not director:
            raise ResourceNotFoundError("Director", director_id)
        return director

    async def create(self, dto: DirectorCreate) -> Director:
        director = Director(**dto.model_dump())
        self.db.add(director)
        await self.db.commit()
        return director

    async def update(self, director_id: DirectorId, dto: DirectorUpdate) -> Director:
        director = await self.find_one(director_id)
        for key, value in dto.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(director, key, value)
        await self.db.commit()
        return director

    async def remove(self, director_id: DirectorId) -> int:
        director = await self.find_one(director_id)
        movie_count = await self.db.scalar(
            select(func.count(Movie.id)).where(Movie.director_id == director_id),
        )
        if movie_count:
            raise ConflictError(
                f"Director '{director_id}' still has {movie_count} movie(s)",
            )
        await self.db.delete(director)
        await self.db.commit()
        return director_id
