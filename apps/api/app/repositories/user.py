"""Repository utilities for identity persistence."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.models.user import User
from app.repositories.base import BaseRepository, WriteResult


class UserRepository(BaseRepository[User]):
    """Data-access helper for administrator accounts."""

    def __init__(self) -> None:
        super().__init__(model=User)

    def get_by_username(self, session: Session, username: str) -> User | None:
        """Return the user with exactly this username, active or not."""

        statement = select(self.model).where(self.model.username == username)
        result = session.execute(statement)
        return result.scalars().one_or_none()

    def get_active_by_username(self, session: Session, username: str) -> User | None:
        """Return the user with this username if the account is active."""

        statement = select(self.model).where(
            self.model.username == username,
            self.model.is_active.is_(True),
        )
        result = session.execute(statement)
        return result.scalars().one_or_none()

    def create(self, session: Session, *, data: dict[str, object]) -> User:
        """Insert a new user; unique violations propagate as IntegrityError."""
        user = User(**data)
        created = self.add(session, user)
        session.commit()
        return created

    def touch_last_login(self, session: Session, user_id: int, when: datetime) -> WriteResult:
        """Stamp the last successful authentication time."""
        statement = (
            update(User)
            .where(User.id == user_id)
            .values(last_login_at=when)
            .execution_options(synchronize_session=False)
        )
        result = session.execute(statement)
        session.commit()
        return WriteResult(result.rowcount or 0)
