"""Error taxonomy and the FastAPI handlers that turn it into responses."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BulletinError(Exception):
    """Base exception for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class ValidationError(BulletinError):
    """Raised when request fields are missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateKeyError(BulletinError):
    """Raised when a unique constraint rejects a new identity.

    ``field`` names the colliding column when the store reported it.
    """

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: str | None) -> None:
        self.field = field
        if field == "username":
            message = "Username already exists"
        elif field == "email":
            message = "Email already exists"
        else:
            message = "User already exists"
        super().__init__(message)


class InvalidCredentialsError(BulletinError):
    """Raised when a login attempt fails for any reason."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class UnauthenticatedError(BulletinError):
    """Raised when a bearer token is missing, malformed, expired or revoked."""

    status_code = status.HTTP_401_UNAUTHORIZED

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class NotFoundError(BulletinError):
    """Raised when a mutation targets a record that does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class EventNotFoundError(NotFoundError):
    """Raised when an event id matches no row."""

    def __init__(self, event_id: int) -> None:
        self.event_id = event_id
        super().__init__("Event not found")


class InternalError(BulletinError):
    """Raised for unexpected storage or hashing failures."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class PasswordHashError(InternalError):
    """Raised when a stored password hash cannot be parsed."""


def _describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    missing: list[str] = []
    problems: list[str] = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        field = ".".join(loc) or "body"
        if error.get("type") == "missing":
            missing.append(field)
        else:
            problems.append(f"{field}: {error.get('msg', 'invalid value')}")

    parts: list[str] = []
    if missing:
        parts.append(f"Missing required fields: {', '.join(missing)}")
    parts.extend(problems)
    return "; ".join(parts) or "Invalid request"


async def _bulletin_error_handler(request: Request, exc: BulletinError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        detail = "Internal server error"
    else:
        detail = exc.message
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": detail},
        headers=exc.headers,
    )


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": _describe_validation_errors(list(exc.errors()))},
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map the error taxonomy onto HTTP responses."""

    app.add_exception_handler(BulletinError, _bulletin_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)
