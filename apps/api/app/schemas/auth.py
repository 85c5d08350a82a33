"""Pydantic schemas for authentication workflows."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Self-service registration payload."""

    full_name: str = Field(..., alias="fullName", min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class LoginRequest(BaseModel):
    """Credentials payload submitted to the login endpoint."""

    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1)


class UserRead(BaseModel):
    """Redacted identity view; never carries the password hash."""

    id: int
    username: str
    email: str
    full_name: str = Field(..., alias="fullName")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class IdentityContext(BaseModel):
    """Authenticated identity attached to gated requests."""

    id: int
    username: str
    full_name: str = Field(..., alias="fullName")
    role: str

    model_config = ConfigDict(populate_by_name=True)


class RegisterResponse(BaseModel):
    success: bool = True
    message: str = "Account created successfully"
    user: UserRead


class LoginResponse(BaseModel):
    """Bearer token response returned to the caller."""

    success: bool = True
    token: str
    user: UserRead
    message: str = "Login successful"


class VerifyResponse(BaseModel):
    success: bool = True
    message: str = "Token is valid"
    user: IdentityContext


class LogoutResponse(BaseModel):
    success: bool = True
    message: str = "Logged out successfully"
