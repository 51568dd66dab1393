"""Movie Routes — catalog listing, CRUD and like/dislike reactions.

Invariants:
    - GET /movie is public and throttled to 5 calls/minute per authenticated user;
      likeStatus is filled only when the caller is authenticated
    - GET /movie/recent requires an authenticated user; response cached by the service
    - GET /movie/{id} is public
    - POST/PATCH/DELETE require ADMIN
    - Reactions require an authenticated user
"""

from fastapi import APIRouter, Depends, Query, status

from movie_catalog.api.dependencies import (
    get_current_user, get_movie_service, get_optional_payload, require_role,
    throttle,
)
from movie_catalog.core.domain_types import MovieId, Role
from movie_catalog.core.tokens import TokenPayload
from movie_catalog.schemas.movie import (
    LikeStatusResponse, MovieCreate, MovieListItem, MovieListResponse,
    MovieResponse, MovieUpdate,
)
from movie_catalog.services.movie_service import MovieService
from movie_catalog.services.query_pagination import CursorPaginationParams

router = APIRouter(prefix="/movie", tags=["movie"])


@router.get(
    "", response_model=MovieListResponse,
    dependencies=[Depends(throttle(5, "minute"))],
)
async def get_movies(
    title: str | None = Query(None, min_length=3),
    cursor: str | None = Query(None),
    order: list[str] = Query(["id_DESC"]),
    take: int = Query(2, ge=1, le=100),
    payload: TokenPayload | None = Depends(get_optional_payload),
    service: MovieService = Depends(get_movie_service),
):
    page = await service.find_all(
        CursorPaginationParams(cursor=cursor, order=order, take=take),
        title=title,
        user_id=payload.sub if payload else None,
    )
    data = []
    for movie in page.movies:
        item = MovieListItem.model_validate(movie)
        item.like_status = page.like_status_of(movie.id)
        data.append(item)
    return MovieListResponse(data=data, next_cursor=page.next_cursor, count=page.count)


@router.get("/recent", response_model=list[MovieResponse])
async def get_recent_movies(
    _user: TokenPayload = Depends(get_current_user),
    service: MovieService = Depends(get_movie_service),
):
    return await service.find_recent()


@router.get("/{movie_id}", response_model=MovieResponse)
async def get_movie(
    movie_id: int, service: MovieService = Depends(get_movie_service),
):
    return await service.find_one(MovieId(movie_id))


@router.post(
    "", response_model=MovieResponse, status_code=status.HTTP_201_CREATED,
)
async def post_movie(
    body: MovieCreate,
    user: TokenPayload = Depends(require_role(Role.ADMIN)),
    service: MovieService = Depends(get_movie_service),
):
    return await service.create(body, creator_id=user.sub)


@router.patch(
    "/{movie_id}", response_model=MovieResponse,
    dependencies=[Depends(require_role(Role.ADMIN))],
)
async def patch_movie(
    movie_id: int, body: MovieUpdate,
    service: MovieService = Depends(get_movie_service),
):
    return await service.update(MovieId(movie_id), body)


@router.delete(
    "/{movie_id}", dependencies=[Depends(require_role(Role.ADMIN))],
)
async def delete_movie(
    movie_id: int, service: MovieService = Depends(get_movie_service),
) -> int:
    return await service.remove(MovieId(movie_id))


@router.post("/{movie_id}/like", response_model=LikeStatusResponse)
async def like_movie(
    movie_id: int,
    user: TokenPayload = Depends(get_current_user),
    service: MovieService = Depends(get_movie_service),
):
    return {"is_like": await service.toggle_like(MovieId(movie_id), user.sub, True)}


@router.post("/{movie_id}/dislike", response_model=LikeStatusResponse)
async def dislike_movie(
    movie_id: int,
    user: TokenPayload = Depends(get_current_user),
    service: MovieService = Depends(get_movie_service),
):
    return {"is_like": await service.toggle_like(MovieId(movie_id), user.sub, False)}
