"""Tests for the background expired-session sweeper."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from app.db.session import Database
from app.models.session import AuthSession
from app.monitoring.middleware import render_metrics
from app.services.credentials import CredentialStore
from app.services.sessions import SessionManager
from app.services.sweeper import SessionSweeper


class FakeClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 9, 1, 8, 0, tzinfo=timezone.utc))


@pytest.fixture()
def database(clock: FakeClock) -> Database:
    database = Database("sqlite+pysqlite:///:memory:")
    database.create_all()
    with database.session() as session:
        CredentialStore(session, hash_rounds=4).create_identity(
            username="alice",
            email="a@x.com",
            password="secret1",
            full_name="Alice A",
        )
        manager = SessionManager(session, hash_rounds=4, clock=clock)
        manager.login("alice", "secret1")
        manager.login("alice", "secret1")
    return database


def _session_count(database: Database) -> int:
    with database.session() as session:
        return session.execute(select(func.count()).select_from(AuthSession)).scalar_one()


def _swept_total() -> int:
    for line in render_metrics().splitlines():
        if line.startswith("bulletin_sessions_swept_total "):
            return int(line.rsplit(" ", 1)[1])
    raise AssertionError("swept counter missing")


def test_run_once_keeps_live_sessions(database: Database, clock: FakeClock) -> None:
    sweeper = SessionSweeper(database, clock=clock)

    assert sweeper.run_once() == 0
    assert _session_count(database) == 2


def test_run_once_removes_expired_sessions(
    database: Database, clock: FakeClock, caplog: pytest.LogCaptureFixture
) -> None:
    before = _swept_total()
    clock.advance(hours=25)
    sweeper = SessionSweeper(database, clock=clock)

    with caplog.at_level(logging.INFO, logger="app.services.sweeper"):
        removed = sweeper.run_once()

    assert removed == 2
    assert _session_count(database) == 0
    assert _swept_total() == before + 2
    assert "Cleaned up 2 expired sessions" in caplog.text


def test_rejects_non_positive_interval(database: Database) -> None:
    with pytest.raises(ValueError):
        SessionSweeper(database, interval_seconds=0)


def test_start_and_stop_on_event_loop(database: Database, clock: FakeClock) -> None:
    clock.advance(hours=25)
    sweeper = SessionSweeper(database, interval_seconds=0.01, clock=clock)

    async def scenario() -> None:
        sweeper.start()
        sweeper.start()
        assert sweeper.running
        for _ in range(200):
            if _session_count(database) == 0:
                break
            await asyncio.sleep(0.01)
        await sweeper.stop()

    asyncio.run(scenario())

    assert not sweeper.running
    assert _session_count(database) == 0


def test_failed_run_does_not_stop_the_loop(
    database: Database, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    calls: list[int] = []

    def _flaky(self: SessionSweeper) -> int:
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("database unavailable")
        return 0

    monkeypatch.setattr(SessionSweeper, "run_once", _flaky)
    sweeper = SessionSweeper(database, interval_seconds=0.01)

    async def scenario() -> None:
        sweeper.start()
        for _ in range(200):
            if len(calls) >= 2:
                break
            await asyncio.sleep(0.01)
        await sweeper.stop()

    with caplog.at_level(logging.ERROR, logger="app.services.sweeper"):
        asyncio.run(scenario())

    assert len(calls) >= 2
    assert "Expired session sweep failed" in caplog.text


def test_stop_without_start_is_noop(database: Database) -> None:
    sweeper = SessionSweeper(database)

    asyncio.run(sweeper.stop())

    assert not sweeper.running
