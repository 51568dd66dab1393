"""Director Schemas."""

from datetime import date, datetime

from pydantic import Field

from movie_catalog.schemas.base import CamelModel, RequestModel


class DirectorCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    dob: date
    nationality: str = Field(min_length=1, max_length=100)


class DirectorUpdate(RequestModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    dob: date | None = None
    nationality: str | None = Field(None, min_length=1, max_length=100)


class DirectorResponse(CamelModel):
    id: int
    name: str
    dob: date
    nationality: str
    created_at: datetime
    updated_at: datetime
