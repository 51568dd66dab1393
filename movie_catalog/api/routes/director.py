"""Director Routes — reads for any authenticated user, writes for ADMIN."""

from fastapi import APIRouter, Depends, Query, status

from movie_catalog.api.dependencies import (
    get_current_user, get_director_service, require_role,
)
from movie_catalog.core.domain_types import DirectorId, Role
from movie_catalog.schemas.common import PageResponse
from movie_catalog.schemas.director import (
    DirectorCreate, DirectorResponse, DirectorUpdate,
)
from movie_catalog.services.director_service import DirectorService
from movie_catalog.services.query_pagination import PagePaginationParams

router = APIRouter(prefix="/director", tags=["director"])


@router.get(
    "", response_model=PageResponse[DirectorResponse],
    dependencies=[Depends(get_current_user)],
)
async def get_directors(
    name: str | None = Query(None, min_length=1),
    page: int = Query(1, ge=1),
    take: int = Query(10, ge=1, le=100),
    service: DirectorService = Depends(get_director_service),
):
    directors, count = await service.find_all(
        PagePaginationParams(page=page, take=take), name=name,
    )
    return {"data": directors, "page": page, "take": take, "count": count}


@router.get(
    "/{director_id}", response_model=DirectorResponse,
    dependencies=[Depends(get_current_user)],
)
async def get_director(
    director_id: int, service: DirectorService = Depends(get_director_service),
):
    return await service.find_one(DirectorId(director_id))


@router.post(
    "", response_model=DirectorResponse, status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(Role.ADMIN))],
)
async def create_director(
    body: DirectorCreate, service: DirectorService = Depends(get_director_service),
):
    return await service.create(body)


@router.patch(
    "/{director_id}", response_model=DirectorResponse,
    dependencies=[Depends(require_role(Role.ADMIN))],
)
async def update_director(
    director_id: int, body: DirectorUpdate,
    service: DirectorService = Depends(get_director_service),
):
    return await service.update(DirectorId(director_id), body)


@router.delete(
    "/{director_id}", dependencies=[Depends(require_role(Role.ADMIN))],
)
async def delete_director(
    director_id: int, service: DirectorService = Depends(get_director_service),
) -> int:
    return await service.remove(DirectorId(director_id))
