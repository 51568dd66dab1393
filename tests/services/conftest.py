"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched for scheduled jobs that bypass get_db
    - Every test gets a fresh cache and a temporary public directory
    - admin_headers / user_headers carry ACCESS tokens for seeded users
"""

import base64
from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

import movie_catalog.infrastructure.database as db_module
from movie_catalog.config import get_settings
from movie_catalog.core.domain_types import Role
from movie_catalog.db.base import Base
from movie_catalog.infrastructure.cache import CacheStore, get_cache
from movie_catalog.infrastructure.database import get_db, DatabaseSessionManager
from movie_catalog.infrastructure.file_storage import FileStorage, get_file_storage
from movie_catalog.infrastructure.security import hash_password
from movie_catalog.main import app
from movie_catalog.models import Director, Genre, User
from movie_catalog.services.token_service import TokenService


def basic_auth(email: str, password: str) -> dict[str, str]:
    token = base64.b64encode(f"{email}:{password}".encode()).decode()
    return {"Authorization": f"Basic {token}"}


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def cache():
    return CacheStore()


@pytest.fixture
def storage(tmp_path):
    return FileStorage(tmp_path / "public", max_upload_bytes=1024)


@pytest.fixture
def token_service(cache):
    return TokenService(cache, get_settings())


@pytest.fixture
async def client(test_engine, test_session_factory, cache, storage):
    """FastAPI test client with DB, cache and storage overridden."""
    async def override_get_db():
        manager = db_module.db_manager
        async with manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_file_storage] = lambda: storage

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


async def _create_user(test_db, email: str, password: str, role: Role) -> User:
    user = User(
        email=email,
        password=await hash_password(password, get_settings().hash_rounds),
        role=int(role),
    )
    test_db.add(user)
    await test_db.commit()
    await test_db.refresh(user)
    return user


@pytest.fixture
async def admin_user(test_db):
    return await _create_user(test_db, "admin@example.com", "admin-pw", Role.ADMIN)


@pytest.fixture
async def regular_user(test_db):
    return await _create_user(test_db, "user@example.com", "user-pw", Role.USER)


@pytest.fixture
def admin_headers(admin_user, token_service):
    return bearer(token_service.issue_token(admin_user.id, Role.ADMIN, False))


@pytest.fixture
def user_headers(regular_user, token_service):
    return bearer(token_service.issue_token(regular_user.id, Role.USER, False))


@pytest.fixture
async def director(test_db):
    d = Director(name="Christopher Nolan", dob=date(1970, 7, 30), nationality="UK")
    test_db.add(d)
    await test_db.commit()
    await test_db.refresh(d)
    return d


@pytest.fixture
async def genres(test_db):
    items = [Genre(name="Drama"), Genre(name="Sci-Fi"), Genre(name="Thriller")]
    test_db.add_all(items)
    await test_db.commit()
    for g in items:
        await test_db.refresh(g)
    return items


@pytest.fixture
def upload_file(storage):
    """Create an already-uploaded temp file and return its name."""
    def _make(name: str = "0b7b3c1e-aaaa-bbbb-cccc-000000000000_1700000000000.mp4") -> str:
        storage.ensure_dirs()
        (storage.temp_dir / name).write_bytes(b"\x00\x00\x00\x18ftypmp42")
        return name
    return _make


@pytest.fixture
def create_movie(client, admin_headers, director, genres, upload_file):
    """POST /movie through the API; returns the response JSON."""
    counter = {"n": 0}

    async def _create(title: str, genre_ids: list[int] | None = None) -> dict:
        counter["n"] += 1
        file_name = upload_file(
            f"0b7b3c1e-aaaa-bbbb-cccc-{counter['n']:012d}_1700000000000.mp4",
        )
        res = await client.post("/movie", headers=admin_headers, json={
            "title": title,
            "detail": f"{title} detail",
            "directorId": director.id,
            "genreIds": genre_ids or [genres[0].id],
            "movieFileName": file_name,
        })
        assert res.status_code == 201, res.text
        return res.json()

    return _create
