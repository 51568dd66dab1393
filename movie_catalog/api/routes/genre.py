"""Genre Routes — reads for any authenticated user, writes for ADMIN."""

from fastapi import APIRouter, Depends, status

from movie_catalog.api.dependencies import (
    get_current_user, get_genre_service, require_role,
)
from movie_catalog.core.domain_types import GenreId, Role
from movie_catalog.schemas.genre import GenreCreate, GenreResponse, GenreUpdate
from movie_catalog.services.genre_service import GenreService

router = APIRouter(prefix="/genre", tags=["genre"])


@router.get(
    "", response_model=list[GenreResponse],
    dependencies=[Depends(get_current_user)],
)
async def get_genres(service: GenreService = Depends(get_genre_service)):
    return await service.find_all()


@router.get(
    "/{genre_id}", response_model=GenreResponse,
    dependencies=[Depends(get_current_user)],
)
async def get_genre(
    genre_id: int, service: GenreService = Depends(get_genre_service),
):
    return await service.find_one(GenreId(genre_id))


@router.post(
    "", response_model=GenreResponse, status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(Role.ADMIN))],
)
async def create_genre(
    body: GenreCreate, service: GenreService = Depends(get_genre_service),
):
    return await service.create(body)


@router.patch(
    "/{genre_id}", response_model=GenreResponse,
    dependencies=[Depends(require_role(Role.ADMIN))],
)
async def update_genre(
    genre_id: int, body: GenreUpdate,
    service: GenreService = Depends(get_genre_service),
):
    return await service.update(GenreId(genre_id), body)


@router.delete("/{genre_id}", dependencies=[Depends(require_role(Role.ADMIN))])
async def delete_genre(
    genre_id: int, service: GenreService = Depends(get_genre_service),
) -> int:
    return await service.remove(GenreId(genre_id))
