"""Bearer-token session lifecycle: login, validation, revocation and sweep."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import lru_cache

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.clock import Clock, utcnow
from app.core.errors import InvalidCredentialsError
from app.core.security import create_password_hash, generate_session_token, verify_password
from app.repositories.session import SessionRepository
from app.repositories.user import UserRepository
from app.schemas.auth import IdentityContext, UserRead
from app.services.credentials import CredentialStore

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(hours=24)


@lru_cache(maxsize=8)
def _decoy_hash(rounds: int) -> str:
    # Verified against when the username is unknown so both failure paths
    # spend the same hashing time.
    return create_password_hash("decoy-password-never-matches", rounds=rounds)


@dataclass(frozen=True)
class LoginResult:
    """Token minted by a successful login together with the redacted identity."""

    token: str
    user: UserRead
    expires_at: datetime


@dataclass(frozen=True)
class SessionView:
    """A live session joined to its owning identity."""

    session_id: int
    user_id: int
    username: str
    full_name: str
    role: str
    expires_at: datetime

    def to_identity(self) -> IdentityContext:
        return IdentityContext(
            id=self.user_id,
            username=self.username,
            full_name=self.full_name,
            role=self.role,
        )


class SessionManager:
    """Mints, validates, revokes and sweeps bearer-token sessions.

    Expiry is absolute and fixed at login; there is no sliding renewal.
    Every operation is a single statement, so concurrent callers need no
    coordination beyond the store's own per-statement atomicity.
    """

    def __init__(
        self,
        session: Session,
        *,
        ttl: timedelta = DEFAULT_SESSION_TTL,
        hash_rounds: int = 10,
        clock: Clock = utcnow,
    ) -> None:
        self._session = session
        self._ttl = ttl
        self._hash_rounds = hash_rounds
        self._clock = clock
        self._sessions = SessionRepository()
        self._users = UserRepository()
        self._credentials = CredentialStore(session, hash_rounds=hash_rounds)

    def login(self, username: str, password: str) -> LoginResult:
        """Exchange credentials for a new bearer token.

        Raises:
            InvalidCredentialsError: For an unknown, inactive or wrong-password
                login alike.
        """
        user = self._credentials.find_active_by_username(username)
        if user is None:
            verify_password(password, _decoy_hash(self._hash_rounds))
            logger.info("Rejected login attempt for %r", username)
            raise InvalidCredentialsError()

        if not self._credentials.verify_secret(user, password):
            logger.info("Rejected login attempt for %r", username)
            raise InvalidCredentialsError()

        now = self._clock()
        expires_at = now + self._ttl
        token = generate_session_token()
        self._sessions.create(
            self._session,
            user_id=user.id,
            token=token,
            expires_at=expires_at,
            created_at=now,
        )
        view = UserRead.model_validate(user)
        self._stamp_last_login(user.id, now)

        logger.info("User %r logged in", view.username)
        return LoginResult(token=token, user=view, expires_at=expires_at)

    def _stamp_last_login(self, user_id: int, when: datetime) -> None:
        # The session already exists; a failed stamp must not undo the login.
        try:
            self._users.touch_last_login(self._session, user_id, when)
        except SQLAlchemyError:
            self._session.rollback()
            logger.warning("Could not record last login for user_id=%s", user_id, exc_info=True)

    def validate(self, token: str, *, now: datetime | None = None) -> SessionView | None:
        """Return the live session for ``token``, or None.

        Storage failures propagate; an unknown, expired or deactivated-owner
        token is simply None.
        """
        current = now if now is not None else self._clock()
        row = self._sessions.find_live(self._session, token, current)
        if row is None:
            return None

        record, user = row
        return SessionView(
            session_id=record.id,
            user_id=user.id,
            username=user.username,
            full_name=user.full_name,
            role=user.role,
            expires_at=record.expires_at,
        )

    def revoke(self, token: str) -> None:
        """Delete the session for ``token``; unknown tokens are ignored."""
        result = self._sessions.delete_by_token(self._session, token)
        if result.matched:
            logger.info("Session revoked")

    def sweep(self, *, now: datetime | None = None) -> int:
        """Delete every session whose expiry has passed; return how many."""
        current = now if now is not None else self._clock()
        result = self._sessions.delete_expired(self._session, current)
        return result.rows_affected
