"""ORM model for calendar events."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.types import UTCDateTime


class EventTypeEnum(str, enum.Enum):
    """Closed set of event categories."""

    ASSIGNMENT = "assignment"
    WEBINAR = "webinar"
    WORKSHOP = "workshop"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


_TYPE_CHECK = "type IN ({})".format(", ".join(f"'{value}'" for value in EventTypeEnum.values()))


class Event(Base):
    """A dated calendar entry attributed to the identity that created it.

    ``date`` (YYYY-MM-DD) and ``time`` (HH:MM) are fixed-width strings, so
    ordering them lexicographically is chronological.
    """

    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint(_TYPE_CHECK, name="ck_events_type"),
        Index("ix_events_date_time", "date", "time"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    time: Mapped[str] = mapped_column(String(5), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    created_by: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:  # pragma: no cover - debug helper only
        return f"Event(id={self.id!r}, title={self.title!r}, date={self.date!r})"
