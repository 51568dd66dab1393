"""Common Schemas — upload result and page pagination envelope."""

from typing import Generic, TypeVar

from movie_catalog.schemas.base import CamelModel

T = TypeVar("T")


class UploadResponse(CamelModel):
    file_name: str


class PageResponse(CamelModel, Generic[T]):
    data: list[T]
    page: int
    take: int
    count: int
