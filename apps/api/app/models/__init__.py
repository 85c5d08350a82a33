"""Database models package."""

from .user import ADMIN_ROLE, User
from .session import AuthSession
from .event import Event, EventTypeEnum

__all__ = ["ADMIN_ROLE", "AuthSession", "Event", "EventTypeEnum", "User"]
