"""Event endpoints: public listing and authenticated mutation."""

from __future__ import annotations

from fastapi import APIRouter, status

from app.core.dependencies import EventStoreDep, IdentityDep
from app.schemas.event import EventDeleted, EventRead, EventWrite

router = APIRouter(prefix="/api/events", tags=["Events"])


@router.get("", response_model=list[EventRead])
def list_events(events: EventStoreDep) -> list[EventRead]:
    """Return all events in chronological order (public)."""

    return events.list_all()


@router.get("/type/{event_type}", response_model=list[EventRead])
def list_events_by_type(event_type: str, events: EventStoreDep) -> list[EventRead]:
    """Return events of one type (public); unknown types return an empty list."""

    return events.list_by_type(event_type)


@router.post("", response_model=EventRead, status_code=status.HTTP_201_CREATED)
def create_event(payload: EventWrite, identity: IdentityDep, events: EventStoreDep) -> EventRead:
    """Create an event attributed to the caller."""

    return events.create(payload, creator_id=identity.id)


# Any authenticated admin may edit or delete any event; there is no
# per-creator ownership check.
@router.put("/{event_id}", response_model=EventRead)
def update_event(
    event_id: int,
    payload: EventWrite,
    identity: IdentityDep,
    events: EventStoreDep,
) -> EventRead:
    """Overwrite an existing event."""

    return events.update(event_id, payload)


@router.delete("/{event_id}", response_model=EventDeleted)
def delete_event(event_id: int, identity: IdentityDep, events: EventStoreDep) -> EventDeleted:
    """Delete an event."""

    events.delete(event_id)
    return EventDeleted()
