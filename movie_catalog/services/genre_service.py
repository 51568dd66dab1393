"""Genre Service.

Invariants:
    - Genre names are unique (ConflictError on create/rename collisions)
    - Removing a genre deletes its movie_genre links first
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.core.domain_types import GenreId
from movie_catalog.core.errors import ConflictError, ResourceNotFoundError
from movie_catalog.models.genre import Genre
from movie_catalog.models.movie import movie_genre
from movie_catalog.schemas.genre import GenreCreate, GenreUpdate


class GenreService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_by_name(self, name: str) -> Genre | None:
        result = await self.db.execute(select(Genre).where(Genre.name == name))
        return result.scalar_one_or_none()

    async def find_all(self) -> list[Genre]:
        result = await self.db.execute(select(Genre).order_by(Genre.id))
        return list(result.scalars().all())

    async def find_one(self, genre_id: GenreId) -> Genre:
        genre = await self.db.get(Genre, genre_id)
        if not genre:
            raise ResourceNotFoundError("Genre", genre_id)
        return genre

    async def create(self, dto: GenreCreate) -> Genre:
        if await self._get_by_name(dto.name):
            raise ConflictError(f"Genre '{dto.name}' already exists")
        genre = Genre(name=dto.name)
        self.db.add(genre)
        await self.db.commit()
        return genre

    async def update(self, genre_id: GenreId, dto: GenreUpdate) -> Genre:
        genre = await self.find_one(genre_id)
        if dto.name is not None and dto.name != genre.name:
            if await self._get_by_name(dto.name):
                raise ConflictError(f"Genre '{dto.name}' already exists")
            genre.name = dto.name
        await self.db.commit()
        return genre

    async def remove(self, genre_id: GenreId) -> int:
        genre = await self.find_one(genre_id)
        await self.db.execute(
            delete(movie_genre).where(movie_genre.c.genre_id == genre_id),
        )
        await self.db.delete(genre)
        await self.db.commit()
        return genre_id
