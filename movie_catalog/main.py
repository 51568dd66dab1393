"""Movie Catalog API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CatalogError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, upload directories and the job scheduler are initialized on startup
      via the lifespan context manager and torn down on shutdown
    - /public serves uploaded media straight from settings.public_dir
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from movie_catalog.api.error_handlers import register_error_handlers
from movie_catalog.api.middleware import register_response_time_middleware
from movie_catalog.api.routes import (
    auth, common, director, genre, health, movie, user,
)
from movie_catalog.config import get_settings
from movie_catalog.infrastructure.database import init_db
from movie_catalog.infrastructure.file_storage import get_file_storage
from movie_catalog.infrastructure.observability import setup_logging
from movie_catalog.services.scheduled_tasks import build_scheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    storage = get_file_storage()
    storage.ensure_dirs()

    scheduler = None
    if settings.scheduler_enabled:
        scheduler = build_scheduler(settings, storage)
        scheduler.start()

    logger.info(f"Movie Catalog API started (env={settings.env})")
    yield
    logger.info("Movie Catalog API shutting down")

    if scheduler:
        scheduler.shutdown(wait=False)
    await manager.dispose()


app = FastAPI(
    title="Movie Catalog API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_response_time_middleware(app)
register_error_handlers(app)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(movie.router)
app.include_router(director.router)
app.include_router(genre.router)
app.include_router(user.router)
app.include_router(common.router)

app.mount(
    "/public",
    StaticFiles(directory=settings.public_dir, check_dir=False),
    name="public",
)
