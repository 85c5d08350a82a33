"""FastAPI dependencies: settings, service factories and the authorization gate."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.errors import InternalError, UnauthenticatedError
from app.core.security import parse_bearer_token
from app.db.session import get_db
from app.schemas.auth import IdentityContext
from app.services.credentials import CredentialStore
from app.services.events import EventStore
from app.services.sessions import SessionManager

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running application was built with."""
    return request.app.state.settings


def get_credential_store(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> CredentialStore:
    return CredentialStore(db, hash_rounds=settings.password_hash_rounds)


def get_session_manager(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> SessionManager:
    return SessionManager(
        db,
        ttl=timedelta(hours=settings.session_ttl_hours),
        hash_rounds=settings.password_hash_rounds,
    )


def get_event_store(db: Session = Depends(get_db)) -> EventStore:
    return EventStore(db)


_bearer_scheme = HTTPBearer(auto_error=False)


def bearer_token(
    request: Request,
    _credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> str:
    """Extract the bearer token from the raw ``Authorization`` header.

    ``HTTPBearer`` only documents the scheme; the header is parsed here so
    the ``Bearer`` prefix stays case-sensitive.
    """
    return parse_bearer_token(request.headers.get("Authorization"))


def require_identity(
    request: Request,
    token: str = Depends(bearer_token),
    sessions: SessionManager = Depends(get_session_manager),
) -> IdentityContext:
    """Turn a bearer token into the authenticated identity or reject the request.

    Must guard every handler that mutates events. Storage failures become
    ``InternalError`` so they are never reported as a bad token.
    """
    try:
        view = sessions.validate(token)
    except SQLAlchemyError as exc:
        logger.exception("Session validation failed")
        raise InternalError("Authentication failed") from exc

    if view is None:
        raise UnauthenticatedError("Invalid or expired token.")

    identity = view.to_identity()
    request.state.identity = identity
    return identity


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
CredentialStoreDep = Annotated[CredentialStore, Depends(get_credential_store)]
SessionManagerDep = Annotated[SessionManager, Depends(get_session_manager)]
EventStoreDep = Annotated[EventStore, Depends(get_event_store)]
BearerTokenDep = Annotated[str, Depends(bearer_token)]
IdentityDep = Annotated[IdentityContext, Depends(require_identity)]
