"""CRUD over calendar events with creator attribution."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy.orm import Session

from app.core.clock import Clock, utcnow
from app.core.errors import EventNotFoundError, ValidationError
from app.models.event import Event, EventTypeEnum
from app.repositories.event import EventRepository
from app.schemas.event import EventRead, EventWrite

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "date", "time", "type")
_REQUIRED_FIELDS = ("title", "date", "time", "type")


def _to_read(event: Event, creator_username: str | None) -> EventRead:
    return EventRead(
        id=event.id,
        title=event.title,
        description=event.description,
        date=event.date,
        time=event.time,
        type=event.type,
        created_by=event.created_by,
        created_by_username=creator_username,
        created_at=event.created_at,
        updated_at=event.updated_at,
    )


def _editable_values(data: EventWrite | Mapping[str, Any]) -> dict[str, object]:
    """Pick the editable columns out of a payload and check the type enum.

    Anything else about the values is trusted; shape checks belong to the
    HTTP schema.
    """
    if isinstance(data, EventWrite):
        return data.to_record()

    missing = [field for field in _REQUIRED_FIELDS if data.get(field) is None]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    event_type = data["type"]
    if isinstance(event_type, EventTypeEnum):
        event_type = event_type.value
    if event_type not in EventTypeEnum.values():
        raise ValidationError(
            f"Invalid event type {event_type!r}; expected one of {', '.join(EventTypeEnum.values())}"
        )

    values: dict[str, object] = {field: data.get(field) for field in EDITABLE_FIELDS}
    values["type"] = event_type
    if values["description"] is None:
        values["description"] = ""
    return values


class EventStore:
    """Shared event records; any authenticated identity may edit any event."""

    def __init__(self, session: Session, *, clock: Clock = utcnow) -> None:
        self._session = session
        self._clock = clock
        self._events = EventRepository()

    def list_all(self) -> list[EventRead]:
        """Return every event ordered by date, then time."""
        rows = self._events.list_with_creator(self._session)
        return [_to_read(event, username) for event, username in rows]

    def list_by_type(self, event_type: str) -> list[EventRead]:
        """Return events of one type; an unknown type yields an empty list."""
        if event_type not in EventTypeEnum.values():
            return []
        rows = self._events.list_with_creator(self._session, event_type=event_type)
        return [_to_read(event, username) for event, username in rows]

    def get(self, event_id: int) -> EventRead:
        row = self._events.get_with_creator(self._session, event_id)
        if row is None:
            raise EventNotFoundError(event_id)
        return _to_read(*row)

    def create(self, data: EventWrite | Mapping[str, Any], creator_id: int | None) -> EventRead:
        """Insert an event attributed to ``creator_id``."""
        values = _editable_values(data)
        now = self._clock()
        event = self._events.create(
            self._session,
            data={**values, "created_by": creator_id, "created_at": now, "updated_at": now},
        )
        logger.info("Event id=%s created by user_id=%s", event.id, creator_id)
        return self.get(event.id)

    def update(self, event_id: int, data: EventWrite | Mapping[str, Any]) -> EventRead:
        """Overwrite an event's editable fields and stamp its update time.

        Raises:
            EventNotFoundError: If no event has this id.
        """
        values = _editable_values(data)
        result = self._events.update_fields(
            self._session, event_id, data=values, updated_at=self._clock()
        )
        if not result.matched:
            raise EventNotFoundError(event_id)

        logger.info("Event id=%s updated", event_id)
        return self.get(event_id)

    def delete(self, event_id: int) -> None:
        """Remove an event.

        Raises:
            EventNotFoundError: If no event has this id.
        """
        result = self._events.delete_by_id(self._session, event_id)
        if not result.matched:
            raise EventNotFoundError(event_id)
        logger.info("Event id=%s deleted", event_id)
