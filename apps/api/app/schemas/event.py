"""Pydantic schemas for calendar event payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.event import EventTypeEnum

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


class EventWrite(BaseModel):
    """Payload for creating or overwriting an event.

    Dates and times must be zero-padded (``YYYY-MM-DD`` / ``HH:MM``) so that
    stored values keep sorting chronologically.
    """

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="")
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    type: EventTypeEnum

    @field_validator("date")
    @classmethod
    def _real_calendar_date(cls, value: str) -> str:
        datetime.strptime(value, DATE_FORMAT)
        return value

    @field_validator("time")
    @classmethod
    def _real_time_of_day(cls, value: str) -> str:
        datetime.strptime(value, TIME_FORMAT)
        return value

    def to_record(self) -> dict[str, object]:
        """Return column values with the enum flattened to its string."""
        data = self.model_dump()
        data["type"] = self.type.value
        return data


class EventRead(BaseModel):
    """Representation returned by the API for persisted events."""

    id: int
    title: str
    description: str
    date: str
    time: str
    type: str
    created_by: int | None = None
    created_by_username: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EventDeleted(BaseModel):
    success: bool = True
    message: str = "Event deleted successfully"
