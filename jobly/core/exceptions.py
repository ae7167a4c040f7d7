"""
Application exceptions and their HTTP rendering.

CRUD functions raise these; they travel unchanged through the routes and are
turned into JSON responses by the handlers registered on the app.
"""

import logging
from typing import Any, List, Union

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class JoblyError(Exception):
    """Base exception for all application-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: Union[str, List[str]] = "Internal server error"):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Convert exception to dictionary for JSON serialization."""
        return {"error": {"message": self.message, "status": self.status_code}}


class BadRequestError(JoblyError):
    """400: missing or invalid data, duplicate keys."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: Union[str, List[str]] = "Bad Request"):
        super().__init__(message)


class NotFoundError(JoblyError):
    """404: lookup by key failed."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)


class UnauthorizedError(JoblyError):
    """401: bad credentials, missing token or insufficient rights."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


def _format_validation_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location}: {error.get('msg')}" if location else str(error.get("msg"))


async def jobly_error_handler(request: Request, exc: JoblyError) -> JSONResponse:
    logger.warning(
        f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}"
    )
    headers: Any = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Schema validation failures are bad requests."""
    errors = [_format_validation_error(e) for e in exc.errors()]
    return await jobly_error_handler(request, BadRequestError(errors))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(JoblyError, jobly_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
