"""Repository exports."""

from .base import WriteResult
from .event import EventRepository
from .session import SessionRepository
from .user import UserRepository

__all__ = [
    "EventRepository",
    "SessionRepository",
    "UserRepository",
    "WriteResult",
]
