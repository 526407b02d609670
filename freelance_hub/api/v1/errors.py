"""Map domain exceptions raised by services to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from freelance_hub.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DatabaseError,
    DocumentWriteError,
    FreelanceHubError,
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
)
from freelance_hub.core.state_machine import InvalidTransitionError
from freelance_hub.schemas.common import ErrorEnvelope

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[Exception], tuple[int, str]] = {
    ValidationError: (status.HTTP_422_UNPROCESSABLE_ENTITY, "validation_error"),
    NotFoundError: (status.HTTP_404_NOT_FOUND, "not_found"),
    InvalidReferenceError: (status.HTTP_400_BAD_REQUEST, "invalid_reference"),
    ConflictError: (status.HTTP_409_CONFLICT, "conflict"),
    InvalidTransitionError: (status.HTTP_409_CONFLICT, "invalid_transition"),
    DocumentWriteError: (status.HTTP_500_INTERNAL_SERVER_ERROR, "document_write_error"),
    DatabaseError: (status.HTTP_503_SERVICE_UNAVAILABLE, "database_error"),
    AuthenticationError: (status.HTTP_401_UNAUTHORIZED, "unauthorized"),
    AuthorizationError: (status.HTTP_403_FORBIDDEN, "forbidden"),
}


def map_domain_error(exc: Exception) -> tuple[int, str, str]:
    """Return (status code, error code, detail) for a service exception."""
    for exc_type, (code, error_code) in ERROR_STATUS.items():
        if isinstance(exc, exc_type):
            if isinstance(exc, AuthenticationError):
                return code, error_code, "Invalid credentials."
            return code, error_code, str(exc)
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", "Internal server error."


async def _domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    code, error_code, detail = map_domain_error(exc)
    if code >= 500:
        logger.error(
            "api.request.failed",
            exc_info=exc,
            extra={"event": "api.request.failed", "path": request.url.path, "error_code": error_code},
        )
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=code,
        content=ErrorEnvelope(error_code=error_code, detail=detail).model_dump(),
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FreelanceHubError, _domain_error_handler)
    app.add_exception_handler(InvalidTransitionError, _domain_error_handler)
