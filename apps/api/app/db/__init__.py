"""Database helpers and base objects."""

from .base import Base, metadata
from .session import Database, get_db
from .types import UTCDateTime

__all__ = [
    "Base",
    "Database",
    "get_db",
    "metadata",
    "UTCDateTime",
]
