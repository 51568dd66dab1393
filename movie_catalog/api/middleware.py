"""Response Time Middleware — logs every request's duration; warns on slow ones.

Invariants:
    - Duration measured with a monotonic clock, in milliseconds
    - Requests slower than settings.slow_request_ms logged at WARNING, others at INFO
"""

import logging
import time

from fastapi import FastAPI, Request

from movie_catalog.config import get_settings

logger = logging.getLogger(__name__)


def register_response_time_middleware(app: FastAPI) -> None:

    @app.middleware("http")
    async def response_time(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        slow = duration_ms > get_settings().slow_request_ms
        (logger.warning if slow else logger.info)(
            f"{request.method} {request.url.path} {response.status_code} {duration_ms}ms"
            + (" (slow)" if slow else ""),
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response
