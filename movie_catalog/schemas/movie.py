"""Movie Schemas — create/update bodies, movie views, cursor-paginated list.

Invariants:
    - MovieCreate requires >= 1 genre id; ids are de-duplicated preserving order
    - MovieUpdate is fully partial but, when genreIds is given, it must be non-empty
    - likeStatus is only present on list items: true/false/null (no reaction)
"""

from datetime import datetime

from pydantic import Field, field_validator

from movie_catalog.schemas.base import CamelModel, RequestModel
from movie_catalog.schemas.director import DirectorResponse
from movie_catalog.schemas.genre import GenreResponse
from movie_catalog.schemas.user import UserResponse


def _dedupe(ids: list[int] | None) -> list[int] | None:
    if ids is None:
        return None
    return list(dict.fromkeys(ids))


class MovieCreate(RequestModel):
    title: str = Field(min_length=1, max_length=255)
    detail: str = Field(min_length=1)
    director_id: int = Field(ge=1)
    genre_ids: list[int] = Field(min_length=1)
    movie_file_name: str = Field(min_length=1)

    @field_validator("genre_ids")
    @classmethod
    def unique_genre_ids(cls, v: list[int]) -> list[int]:
        return _dedupe(v)


class MovieUpdate(RequestModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    detail: str | None = Field(None, min_length=1)
    director_id: int | None = Field(None, ge=1)
    genre_ids: list[int] | None = Field(None, min_length=1)

    @field_validator("genre_ids")
    @classmethod
    def unique_genre_ids(cls, v: list[int] | None) -> list[int] | None:
        return _dedupe(v)


class MovieDetailResponse(CamelModel):
    id: int
    detail: str


class MovieResponse(CamelModel):
    id: int
    title: str
    like_count: int
    dislike_count: int
    movie_file_path: str
    created_at: datetime
    updated_at: datetime
    detail: MovieDetailResponse | None = None
    director: DirectorResponse
    genres: list[GenreResponse]
    creator: UserResponse | None = None


class MovieListItem(MovieResponse):
    like_status: bool | None = None


class MovieListResponse(CamelModel):
    data: list[MovieListItem]
    next_cursor: str | None
    count: int


class LikeStatusResponse(CamelModel):
    is_like: bool | None
