"""Exception handlers mapping domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from forum.domain.error import (
    ContentDeletedException,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
)


def _status_for(exc: DomainError) -> int:
    if isinstance(exc, NotAuthorizedError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, (NotFoundError, ContentDeletedException)):
        return status.HTTP_404_NOT_FOUND
    # ValidationError and any other domain error
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Handle all DomainError subclasses with the matching status code."""
    status_code = _status_for(exc)
    logfire.warn(
        "Request failed with domain error",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
        status_code=status_code,
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle malformed identifiers and other bad input (400)."""
    logfire.warn("Invalid request value", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the exception handlers to an application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
