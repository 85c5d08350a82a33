"""Store handle owning the engine and the ORM session factory."""

from __future__ import annotations

from typing import Any, Generator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Explicitly constructed store handle shared by every component.

    One instance is owned by the process (or by a test) and passed to
    whatever needs store access.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        engine_kwargs: dict[str, Any] = {"echo": echo, "future": True}
        is_sqlite = url.startswith("sqlite")
        if is_sqlite:
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url.rstrip("/").endswith("sqlite:"):
                engine_kwargs["poolclass"] = StaticPool

        self.engine: Engine = create_engine(url, **engine_kwargs)
        if is_sqlite:
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=False
        )

    def session(self) -> Session:
        """Open a new ORM session bound to this store."""
        return self._session_factory()

    def create_all(self) -> None:
        """Create any missing tables for the registered models."""
        # Registers the model classes on Base.metadata.
        import app.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    def __repr__(self) -> str:  # pragma: no cover - debug helper only
        return f"Database(url={self.engine.url!r})"


def get_db(request: Request) -> Generator[Session, None, None]:
    """Provide a SQLAlchemy session scoped to the request lifecycle."""
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
