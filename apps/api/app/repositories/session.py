"""Repository for bearer-token session rows."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Row, delete, select
from sqlalchemy.orm import Session

from app.models.session import AuthSession
from app.models.user import User
from app.repositories.base import BaseRepository, WriteResult


class SessionRepository(BaseRepository[AuthSession]):
    """Manages session persistence, lookup and removal."""

    def __init__(self) -> None:
        super().__init__(AuthSession)

    def create(
        self,
        session: Session,
        *,
        user_id: int,
        token: str,
        expires_at: datetime,
        created_at: datetime,
    ) -> AuthSession:
        """Insert a new session row."""
        record = AuthSession(
            user_id=user_id,
            token=token,
            expires_at=expires_at,
            created_at=created_at,
        )
        created = self.add(session, record)
        session.commit()
        return created

    def find_live(
        self, session: Session, token: str, now: datetime
    ) -> Row[tuple[AuthSession, User]] | None:
        """Join a token to its owner, keeping it only while live."""
        stmt = (
            select(AuthSession, User)
            .join(User, AuthSession.user_id == User.id)
            .where(
                AuthSession.token == token,
                AuthSession.expires_at > now,
                User.is_active.is_(True),
            )
        )
        return session.execute(stmt).first()

    def delete_by_token(self, session: Session, token: str) -> WriteResult:
        """Delete the row holding ``token`` if there is one."""
        stmt = delete(AuthSession).where(AuthSession.token == token)
        result = session.execute(stmt, execution_options={"synchronize_session": False})
        session.commit()
        return WriteResult(result.rowcount or 0)

    def delete_expired(self, session: Session, now: datetime) -> WriteResult:
        """Bulk delete every row whose expiry is at or before ``now``."""
        stmt = delete(AuthSession).where(AuthSession.expires_at <= now)
        result = session.execute(stmt, execution_options={"synchronize_session": False})
        session.commit()
        return WriteResult(result.rowcount or 0)
