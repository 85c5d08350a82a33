"""Service layer: credentials, sessions, events and the session sweeper."""

from .credentials import CredentialStore
from .events import EventStore
from .sessions import LoginResult, SessionManager, SessionView
from .sweeper import SessionSweeper

__all__ = [
    "CredentialStore",
    "EventStore",
    "LoginResult",
    "SessionManager",
    "SessionSweeper",
    "SessionView",
]
