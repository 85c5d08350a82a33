"""Database access helpers for calendar events."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Select, delete, select, update
from sqlalchemy.orm import Session

from app.models.event import Event
from app.models.user import User
from app.repositories.base import BaseRepository, WriteResult

EventRow = tuple[Event, str | None]


class EventRepository(BaseRepository[Event]):
    """Repository for interacting with event records."""

    def __init__(self) -> None:
        super().__init__(model=Event)

    def _with_creator(self) -> Select[Any]:
        return select(Event, User.username).outerjoin(User, Event.created_by == User.id)

    def list_with_creator(
        self, session: Session, *, event_type: str | None = None
    ) -> list[EventRow]:
        """Return events in chronological order with the creator's username."""
        statement = self._with_creator()
        if event_type is not None:
            statement = statement.where(Event.type == event_type)
        statement = statement.order_by(Event.date.asc(), Event.time.asc(), Event.id.asc())
        return [(row[0], row[1]) for row in session.execute(statement).all()]

    def get_with_creator(self, session: Session, event_id: int) -> EventRow | None:
        """Return a single event joined to its creator's username."""
        statement = self._with_creator().where(Event.id == event_id)
        row = session.execute(statement).first()
        if row is None:
            return None
        return row[0], row[1]

    def create(self, session: Session, *, data: dict[str, object]) -> Event:
        """Insert a new event."""
        event = Event(**data)
        created = self.add(session, event)
        session.commit()
        return created

    def update_fields(
        self,
        session: Session,
        event_id: int,
        *,
        data: dict[str, object],
        updated_at: datetime,
    ) -> WriteResult:
        """Overwrite the editable columns of one event in a single statement."""
        statement = (
            update(Event)
            .where(Event.id == event_id)
            .values(**data, updated_at=updated_at)
            .execution_options(synchronize_session=False)
        )
        result = session.execute(statement)
        session.commit()
        return WriteResult(result.rowcount or 0)

    def delete_by_id(self, session: Session, event_id: int) -> WriteResult:
        """Remove one event."""
        statement = delete(Event).where(Event.id == event_id)
        result = session.execute(statement, execution_options={"synchronize_session": False})
        session.commit()
        return WriteResult(result.rowcount or 0)
