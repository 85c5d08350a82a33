"""Pydantic schemas exposed by the API."""

from .auth import (
    IdentityContext,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RegisterRequest,
    RegisterResponse,
    UserRead,
    VerifyResponse,
)
from .event import EventDeleted, EventRead, EventWrite

__all__ = [
    "EventDeleted",
    "EventRead",
    "EventWrite",
    "IdentityContext",
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "RegisterRequest",
    "RegisterResponse",
    "UserRead",
    "VerifyResponse",
]
