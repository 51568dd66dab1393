"""Genre Schemas."""

from datetime import datetime

from pydantic import Field

from movie_catalog.schemas.base import CamelModel, RequestModel


class GenreCreate(RequestModel):
    name: str = Field(min_length=1, max_length=100)


class GenreUpdate(RequestModel):
    name: str | None = Field(None, min_length=1, max_length=100)


class GenreResponse(CamelModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime
