"""Error Handlers — every failure leaves the API as the same JSON error envelope.

Invariants:
    - CatalogError -> its own status and to_response() body (5xx logged as error, else warning)
    - RequestValidationError -> 400 VALIDATION_ERROR with one entry per offending field
    - Any other exception -> 500 INTERNAL_ERROR; the body never carries exception text
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from movie_catalog.core.errors import CatalogError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def _envelope(code: str, message: str, category: str, severity: ErrorSeverity, **extra) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category,
            "severity": severity.value,
            **extra,
        },
    }


def _field_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]


async def handle_catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{exc.code} on {request.method} {request.url.path}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = _field_errors(exc)
    logger.warning(
        f"Rejected request body/params on {request.url.path}: {details}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION.value, ErrorSeverity.ERROR,
            details=details,
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL.value, ErrorSeverity.CRITICAL,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the three handlers, most specific first."""
    app.add_exception_handler(CatalogError, handle_catalog_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
