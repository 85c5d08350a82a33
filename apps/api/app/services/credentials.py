"""Identity creation, lookup and secret verification."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateKeyError
from app.core.security import create_password_hash, verify_password
from app.models.user import ADMIN_ROLE, User
from app.repositories.user import UserRepository
from app.schemas.auth import UserRead

logger = logging.getLogger(__name__)

# Markers emitted by SQLite ("users.username") and PostgreSQL (constraint
# names or the "Key (username)=" detail line) for each unique column.
_UNIQUE_FIELD_MARKERS: dict[str, tuple[str, ...]] = {
    "username": ("users.username", "uq_users_username", "users_username_key", "(username)"),
    "email": ("users.email", "uq_users_email", "users_email_key", "(email)"),
}


def colliding_field(exc: IntegrityError) -> str | None:
    """Name the unique column a failed insert collided on, if reported."""

    message = str(exc.orig if exc.orig is not None else exc).lower()
    for field, markers in _UNIQUE_FIELD_MARKERS.items():
        if any(marker in message for marker in markers):
            return field
    return None


class CredentialStore:
    """Holds administrator identities and their hashed secrets."""

    def __init__(self, session: Session, *, hash_rounds: int = 10) -> None:
        self._session = session
        self._hash_rounds = hash_rounds
        self._users = UserRepository()

    def create_identity(
        self,
        *,
        username: str,
        email: str,
        password: str,
        full_name: str,
    ) -> UserRead:
        """Persist a new active admin identity.

        Uniqueness is enforced by the store, not checked beforehand, so
        concurrent registrations cannot both pass a pre-check.

        Raises:
            DuplicateKeyError: If the username or email is already taken.
        """
        hashed = create_password_hash(password, rounds=self._hash_rounds)
        try:
            user = self._users.create(
                self._session,
                data={
                    "username": username,
                    "email": email,
                    "hashed_password": hashed,
                    "full_name": full_name,
                    "role": ADMIN_ROLE,
                    "is_active": True,
                },
            )
        except IntegrityError as exc:
            self._session.rollback()
            raise DuplicateKeyError(colliding_field(exc)) from exc

        return UserRead.model_validate(user)

    def find_active_by_username(self, username: str) -> User | None:
        return self._users.get_active_by_username(self._session, username)

    def verify_secret(self, user: User, candidate_password: str) -> bool:
        """Compare a candidate password with the identity's stored hash."""
        return verify_password(candidate_password, user.hashed_password)

    def bootstrap_admin(
        self,
        *,
        username: str,
        password: str,
        email: str,
        full_name: str,
    ) -> bool:
        """Seed the initial administrator unless that username already exists.

        Returns True when a row was created. Failures are logged, never raised.
        """
        if self._users.get_by_username(self._session, username) is not None:
            logger.debug("Bootstrap admin %r already present", username)
            return False

        try:
            self.create_identity(
                username=username,
                email=email,
                password=password,
                full_name=full_name,
            )
        except DuplicateKeyError as exc:
            logger.warning("Bootstrap admin %r not created: %s", username, exc.message)
            return False
        except SQLAlchemyError:
            self._session.rollback()
            logger.exception("Bootstrap admin %r could not be created", username)
            return False

        logger.info("Bootstrap admin user %r created", username)
        return True
