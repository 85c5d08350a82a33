"""Tests for the Alembic migration that creates the bulletin schema."""

from __future__ import annotations

import importlib.util
from pathlib import Path
from typing import Any

import pytest
from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.exc import IntegrityError

MIGRATION_PATH = (
    Path(__file__).resolve().parents[1]
    / "alembic"
    / "versions"
    / "20251001_01_create_bulletin_tables.py"
)


def _load_migration() -> Any:
    spec = importlib.util.spec_from_file_location("migration_20251001_01", MIGRATION_PATH)
    assert spec and spec.loader
    migration = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(migration)
    return migration


def test_bulletin_migration_creates_expected_schema() -> None:
    migration = _load_migration()
    engine = create_engine("sqlite+pysqlite:///:memory:")
    original_op: Any = migration.op

    try:
        with engine.begin() as connection:
            context = MigrationContext.configure(connection=connection)
            migration.op = Operations(context)

            migration.upgrade()

            inspector = inspect(connection)
            assert {"users", "sessions", "events"}.issubset(inspector.get_table_names())

            user_columns = {col["name"]: col for col in inspector.get_columns("users")}
            assert {
                "id",
                "username",
                "email",
                "hashed_password",
                "full_name",
                "role",
                "created_at",
                "last_login_at",
                "is_active",
            } == set(user_columns)
            assert user_columns["last_login_at"]["nullable"] is True
            user_uniques = {
                tuple(constraint["column_names"])
                for constraint in inspector.get_unique_constraints("users")
            }
            assert {("username",), ("email",)}.issubset(user_uniques)

            session_uniques = inspector.get_unique_constraints("sessions")
            assert any(c["column_names"] == ["token"] for c in session_uniques)
            session_indexes = {index["name"] for index in inspector.get_indexes("sessions")}
            assert {"ix_sessions_user_id", "ix_sessions_expires_at"}.issubset(session_indexes)

            event_columns = {col["name"]: col for col in inspector.get_columns("events")}
            assert event_columns["created_by"]["nullable"] is True
            event_indexes = {index["name"] for index in inspector.get_indexes("events")}
            assert "ix_events_date_time" in event_indexes

            connection.execute(
                text(
                    "INSERT INTO users (username, email, hashed_password, full_name) "
                    "VALUES ('alice', 'a@x.com', 'hash', 'Alice A')"
                )
            )
            row = connection.execute(
                text("SELECT role, is_active FROM users WHERE username = 'alice'")
            ).one()
            assert row.role == "admin"
            assert bool(row.is_active) is True

            connection.execute(
                text(
                    "INSERT INTO events (title, date, time, type, created_by) "
                    "VALUES ('Quiz', '2025-09-01', '09:00', 'assignment', 1)"
                )
            )
            description = connection.execute(
                text("SELECT description FROM events WHERE title = 'Quiz'")
            ).scalar_one()
            assert description == ""

            with pytest.raises(IntegrityError):
                connection.execute(
                    text(
                        "INSERT INTO events (title, date, time, type) "
                        "VALUES ('Party', '2025-09-01', '20:00', 'party')"
                    )
                )
    finally:
        migration.op = original_op


def test_bulletin_migration_downgrade_drops_tables() -> None:
    migration = _load_migration()
    engine = create_engine("sqlite+pysqlite:///:memory:")
    original_op: Any = migration.op

    try:
        with engine.begin() as connection:
            migration.op = Operations(MigrationContext.configure(connection=connection))

            migration.upgrade()
            migration.downgrade()

            remaining = set(inspect(connection).get_table_names())
            assert not {"users", "sessions", "events"} & remaining
    finally:
        migration.op = original_op
