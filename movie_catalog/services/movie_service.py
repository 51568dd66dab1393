"""Movie Service — catalog queries, create/update/delete, like toggling.

Invariants:
    - find_all: cursor pagination over whitelisted order fields; count ignores the cursor
    - find_recent: 10 newest movies, cached under MOVIE_RECENT for movie_recent_ttl_ms
    - create/update verify director and every genre id exist (404 lists missing ids)
    - Titles are unique (ConflictError)
    - create moves the uploaded file temp -> movie only after the row flushed,
      and moves it back if the commit fails
    - remove deletes likes explicitly; detail and genre links go with the movie
    - toggle_like: same reaction again removes it, opposite reaction flips it;
      like/dislike counts are recomputed for that movie before commit

Design Decisions:
    - find_one re-selects with populate_existing: the identity map may hold a
      movie whose relationships changed in this session
"""

import logging

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from movie_catalog.config import Settings
from movie_catalog.core.domain_types import MovieId, UserId
from movie_catalog.core.errors import ConflictError, ResourceNotFoundError
from movie_catalog.infrastructure.cache import CacheStore
from movie_catalog.infrastructure.file_storage import FileStorage
from movie_catalog.models.director import Director
from movie_catalog.models.genre import Genre
from movie_catalog.models.movie import Movie, MovieDetail
from movie_catalog.models.movie_user_like import MovieUserLike
from movie_catalog.models.user import User
from movie_catalog.schemas.movie import MovieCreate, MovieResponse, MovieUpdate
from movie_catalog.services.query_pagination import (
    CursorPaginationParams, apply_cursor_pagination, next_cursor_for,
)

logger = logging.getLogger(__name__)

RECENT_CACHE_KEY = "MOVIE_RECENT"
RECENT_LIMIT = 10

ORDER_COLUMNS = {
    "id": Movie.id,
    "title": Movie.title,
    "likeCount": Movie.like_count,
    "dislikeCount": Movie.dislike_count,
}


async def recalculate_like_counts(
    db: AsyncSession, movie_ids: list[int] | None = None,
) -> int:
    """Sync like_count/dislike_count with movie_user_like. Returns rows changed."""
    likes = (
        select(func.count()).select_from(MovieUserLike)
        .where(MovieUserLike.movie_id == Movie.id, MovieUserLike.is_like.is_(True))
        .scalar_subquery()
    )
    dislikes = (
        select(func.count()).select_from(MovieUserLike)
        .where(MovieUserLike.movie_id == Movie.id, MovieUserLike.is_like.is_(False))
        .scalar_subquery()
    )
    stmt = (
        update(Movie)
        .where(or_(Movie.like_count != likes, Movie.dislike_count != dislikes))
        .values(like_count=likes, dislike_count=dislikes)
        .execution_options(synchronize_session=False)
    )
    if movie_ids is not None:
        stmt = stmt.where(Movie.id.in_(movie_ids))
    result = await db.execute(stmt)
    return result.rowcount or 0


class MoviePage:
    """One page of movies plus the caller's reactions (None when anonymous)."""

    def __init__(
        self, movies: list[Movie], next_cursor: str | None, count: int,
        like_statuses: dict[int, bool] | None,
    ):
        self.movies = movies
        self.next_cursor = next_cursor
        self.count = count
        self.like_statuses = like_statuses

    def like_status_of(self, movie_id: int) -> bool | None:
        if self.like_statuses is None:
            return None
        return self.like_statuses.get(movie_id)


class MovieService:

    def __init__(
        self, db: AsyncSession, cache: CacheStore, storage: FileStorage,
        settings: Settings,
    ):
        self.db = db
        self.cache = cache
        self.storage = storage
        self.settings = settings

    # ─── Queries ────────────────────────────────────────────────

    async def find_all(
        self, params: CursorPaginationParams, title: str | None = None,
        user_id: int | None = None,
    ) -> MoviePage:
        conditions = []
        if title:
            conditions.append(Movie.title.contains(title, autoescape=True))

        query, order = apply_cursor_pagination(
            select(Movie).where(*conditions), params, ORDER_COLUMNS,
        )
        movies = list((await self.db.execute(query)).scalars().all())
        count = await self.db.scalar(
            select(func.count(Movie.id)).where(*conditions),
        )

        like_statuses = None
        if user_id is not None:
            like_statuses = await self._like_statuses(user_id, [m.id for m in movies])

        return MoviePage(
            movies=movies,
            next_cursor=next_cursor_for(movies, order, ORDER_COLUMNS),
            count=count or 0,
            like_statuses=like_statuses,
        )

    async def _like_statuses(self, user_id: int, movie_ids: list[int]) -> dict[int, bool]:
        if not movie_ids:
            return {}
        result = await self.db.execute(
            select(MovieUserLike.movie_id, MovieUserLike.is_like).where(
                MovieUserLike.user_id == user_id,
                MovieUserLike.movie_id.in_(movie_ids),
            ),
        )
        return {movie_id: is_like for movie_id, is_like in result.all()}

    async def find_recent(self) -> list[dict]:
        cached = self.cache.get(RECENT_CACHE_KEY)
        if cached is not None:
            return cached

        result = await self.db.execute(
            select(Movie)
            .order_by(Movie.created_at.desc(), Movie.id.desc())
            .limit(RECENT_LIMIT),
        )
        recent = [
            MovieResponse.model_validate(m).model_dump(by_alias=True, mode="json")
            for m in result.scalars().all()
        ]
        self.cache.set(
            RECENT_CACHE_KEY, recent, ttl_ms=self.settings.movie_recent_ttl_ms,
        )
        return recent

    async def find_one(self, movie_id: MovieId) -> Movie:
        result = await self.db.execute(
            select(Movie).where(Movie.id == movie_id)
            .execution_options(populate_existing=True),
        )
        movie = result.scalar_one_or_none()
        if not movie:
            raise ResourceNotFoundError("Movie", movie_id)
        return movie

    # ─── Mutations ──────────────────────────────────────────────

    async def _ensure_title_free(self, title: str, movie_id: int | None = None) -> None:
        query = select(Movie.id).where(Movie.title == title)
        if movie_id is not None:
            query = query.where(Movie.id != movie_id)
        if await self.db.scalar(query):
            raise ConflictError(f"A movie titled '{title}' already exists")

    async def _load_director(self, director_id: int) -> Director:
        director = await self.db.get(Director, director_id)
        if not director:
            raise ResourceNotFoundError("Director", director_id)
        return director

    async def _load_genres(self, genre_ids: list[int]) -> list[Genre]:
        result = await self.db.execute(select(Genre).where(Genre.id.in_(genre_ids)))
        genres = {g.id: g for g in result.scalars().all()}
        missing = [gid for gid in genre_ids if gid not in genres]
        if missing:
            raise ResourceNotFoundError("Genre", ", ".join(map(str, missing)))
        return [genres[gid] for gid in genre_ids]

    async def create(self, dto: MovieCreate, creator_id: UserId | None) -> Movie:
        await self._ensure_title_free(dto.title)
        director = await self._load_director(dto.director_id)
        genres = await self._load_genres(dto.genre_ids)

        movie = Movie(
            title=dto.title,
            director=director,
            genres=genres,
            creator_id=creator_id,
            detail=MovieDetail(detail=dto.detail),
            movie_file_path=self.storage.check_upload(dto.movie_file_name),
        )
        self.db.add(movie)
        await self.db.flush()

        self.storage.move_to_movie_dir(dto.movie_file_name)
        try:
            await self.db.commit()
        except Exception:
            self.storage.restore_to_temp(dto.movie_file_name)
            raise
        logger.info(
            f"Movie {movie.id} created", extra={"user_id": creator_id},
        )
        return await self.find_one(movie.id)

    async def update(self, movie_id: MovieId, dto: MovieUpdate) -> Movie:
        movie = await self.find_one(movie_id)
        fields = dto.model_dump(exclude_unset=True, exclude_none=True)

        if "title" in fields:
            await self._ensure_title_free(fields["title"], movie_id)
            movie.title = fields["title"]
        if "director_id" in fields:
            movie.director = await self._load_director(fields["director_id"])
        if "genre_ids" in fields:
            movie.genres = await self._load_genres(fields["genre_ids"])
        if "detail" in fields:
            movie.detail.detail = fields["detail"]

        await self.db.commit()
        return await self.find_one(movie_id)

    async def remove(self, movie_id: MovieId) -> int:
        movie = await self.find_one(movie_id)
        likes = await self.db.execute(
            select(MovieUserLike).where(MovieUserLike.movie_id == movie_id),
        )
        for like in likes.scalars().all():
            await self.db.delete(like)
        await self.db.delete(movie)
        await self.db.commit()
        logger.info(f"Movie {movie_id} removed")
        return movie_id

    async def toggle_like(
        self, movie_id: MovieId, user_id: UserId, is_like: bool,
    ) -> bool | None:
        if not await self.db.get(Movie, movie_id):
            raise ResourceNotFoundError("Movie", movie_id)
        if not await self.db.get(User, user_id):
            raise ResourceNotFoundError("User", user_id)

        reaction = await self.db.get(MovieUserLike, (movie_id, user_id))
        if reaction is None:
            self.db.add(MovieUserLike(
                movie_id=movie_id, user_id=user_id, is_like=is_like,
            ))
            status: bool | None = is_like
        elif reaction.is_like == is_like:
            await self.db.delete(reaction)
            status = None
        else:
            reaction.is_like = is_like
            status = is_like

        await self.db.flush()
        await recalculate_like_counts(self.db, [movie_id])
        await self.db.commit()
        return status
