"""Request Schemas — camelCase input, unknown-field rejection, genre ids."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from movie_catalog.core.domain_types import Role
from movie_catalog.schemas.movie import LikeStatusResponse, MovieCreate, MovieUpdate
from movie_catalog.schemas.user import UserCreate, UserResponse, UserUpdate

VALID = {
    "title": "Inception",
    "detail": "Dreams within dreams",
    "directorId": 1,
    "genreIds": [1, 2],
    "movieFileName": "abc_1.mp4",
}


def test_movie_create_accepts_camel_case():
    dto = MovieCreate.model_validate(VALID)
    assert dto.director_id == 1
    assert dto.movie_file_name == "abc_1.mp4"


def test_movie_create_dedupes_genre_ids_preserving_order():
    dto = MovieCreate.model_validate({**VALID, "genreIds": [3, 1, 3, 2, 1]})
    assert dto.genre_ids == [3, 1, 2]


def test_movie_create_requires_a_genre():
    with pytest.raises(ValidationError):
        MovieCreate.model_validate({**VALID, "genreIds": []})


def test_movie_create_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        MovieCreate.model_validate({**VALID, "likeCount": 100})


def test_movie_create_strips_title():
    assert MovieCreate.model_validate({**VALID, "title": "  Heat "}).title == "Heat"


def test_movie_update_is_partial():
    dto = MovieUpdate.model_validate({"title": "Tenet"})
    assert dto.model_dump(exclude_unset=True) == {"title": "Tenet"}
    with pytest.raises(ValidationError):
        MovieUpdate.model_validate({"genreIds": []})


def test_user_create_defaults_to_user_role():
    dto = UserCreate.model_validate({"email": "a@example.com", "password": "pw"})
    assert dto.role is Role.USER
    with pytest.raises(ValidationError):
        UserCreate.model_validate({"email": "not-an-email", "password": "pw"})


def test_password_limit_counts_utf8_bytes():
    UserCreate.model_validate({"email": "a@example.com", "password": "\u00e9" * 36})
    with pytest.raises(ValidationError):
        UserCreate.model_validate({"email": "a@example.com", "password": "\u00e9" * 40})
    with pytest.raises(ValidationError):
        UserUpdate.model_validate({"password": "\u00e9" * 40})
    assert UserUpdate.model_validate({}).password is None


def test_responses_serialize_camel_case():
    now = datetime.now(timezone.utc)
    user = UserResponse(id=1, email="a@example.com", role=2, created_at=now, updated_at=now)
    assert set(user.model_dump(by_alias=True)) == {
        "id", "email", "role", "createdAt", "updatedAt",
    }
    assert LikeStatusResponse(is_like=None).model_dump(by_alias=True) == {"isLike": None}
