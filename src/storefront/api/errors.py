"""Map domain and auth exceptions onto HTTP responses.

Every error body has the shape ``{"error": ...}``. Validation and not-found
errors carry the exception's message dict; the rest carry a string.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import (
    ExpectedVersionError,
    InvalidOperationError,
    ObjectNotFoundError,
    ValidationError,
)

from storefront.auth import Forbidden, Unauthorized

logger = structlog.get_logger(__name__)


def _detail(exc):
    return getattr(exc, "messages", None) or str(exc)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": _detail(exc)})

    @app.exception_handler(ObjectNotFoundError)
    async def not_found(request: Request, exc: ObjectNotFoundError):
        return JSONResponse(status_code=404, content={"error": _detail(exc)})

    @app.exception_handler(InvalidOperationError)
    async def conflict(request: Request, exc: InvalidOperationError):
        return JSONResponse(status_code=409, content={"error": _detail(exc)})

    @app.exception_handler(ExpectedVersionError)
    async def version_conflict(request: Request, exc: ExpectedVersionError):
        return JSONResponse(
            status_code=409,
            content={"error": "The resource was modified concurrently, please retry"},
        )

    @app.exception_handler(Unauthorized)
    async def unauthorized(request: Request, exc: Unauthorized):
        return JSONResponse(status_code=401, content={"error": str(exc) or "Unauthorized"})

    @app.exception_handler(Forbidden)
    async def forbidden(request: Request, exc: Forbidden):
        return JSONResponse(status_code=403, content={"error": str(exc) or "Forbidden"})

    @app.exception_handler(Exception)
    async def internal_error(request: Request, exc: Exception):
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
