"""Authentication endpoints: register, login, verify and logout."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

from app.core.dependencies import (
    BearerTokenDep,
    CredentialStoreDep,
    IdentityDep,
    SessionManagerDep,
    SettingsDep,
)
from app.core.errors import ValidationError
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RegisterRequest,
    RegisterResponse,
    VerifyResponse,
)

router = APIRouter(prefix="/api/auth", tags=["Auth"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    credentials: CredentialStoreDep,
    settings: SettingsDep,
) -> RegisterResponse:
    """Create a new administrator account."""

    if len(payload.password) < settings.password_min_length:
        raise ValidationError(
            f"Password must be at least {settings.password_min_length} characters long"
        )

    user = credentials.create_identity(
        username=payload.username,
        email=payload.email,
        password=payload.password,
        full_name=payload.full_name,
    )
    logger.info("Registered user %r (id=%s)", user.username, user.id)
    return RegisterResponse(user=user)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, sessions: SessionManagerDep) -> LoginResponse:
    """Authenticate an administrator and return a bearer token."""

    result = sessions.login(payload.username, payload.password)
    return LoginResponse(token=result.token, user=result.user)


@router.get("/verify", response_model=VerifyResponse)
def verify(identity: IdentityDep) -> VerifyResponse:
    """Confirm the presented token is live and describe its owner."""

    return VerifyResponse(user=identity)


@router.post("/logout", response_model=LogoutResponse)
def logout(
    identity: IdentityDep,
    token: BearerTokenDep,
    sessions: SessionManagerDep,
) -> LogoutResponse:
    """Revoke the presented token."""

    sessions.revoke(token)
    logger.info("User %r logged out", identity.username)
    return LogoutResponse()
