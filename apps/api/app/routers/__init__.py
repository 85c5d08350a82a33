from . import auth, events, health  # noqa: F401

__all__ = ["auth", "events", "health"]
