"""User Routes — account management, ADMIN only."""

from fastapi import APIRouter, Depends, Query, status

from movie_catalog.api.dependencies import get_user_service, require_role
from movie_catalog.core.domain_types import Role, UserId
from movie_catalog.schemas.common import PageResponse
from movie_catalog.schemas.user import UserCreate, UserResponse, UserUpdate
from movie_catalog.services.query_pagination import PagePaginationParams
from movie_catalog.services.user_service import UserService

router = APIRouter(
    prefix="/user", tags=["user"],
    dependencies=[Depends(require_role(Role.ADMIN))],
)


@router.get("", response_model=PageResponse[UserResponse])
async def get_users(
    page: int = Query(1, ge=1),
    take: int = Query(10, ge=1, le=100),
    service: UserService = Depends(get_user_service),
):
    users, count = await service.find_all(PagePaginationParams(page=page, take=take))
    return {"data": users, "page": page, "take": take, "count": count}


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return await service.find_one(UserId(user_id))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate, service: UserService = Depends(get_user_service),
):
    return await service.create(body)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int, body: UserUpdate,
    service: UserService = Depends(get_user_service),
):
    return await service.update(UserId(user_id), body)


@router.delete("/{user_id}")
async def delete_user(
    user_id: int, service: UserService = Depends(get_user_service),
) -> int:
    return await service.remove(UserId(user_id))
