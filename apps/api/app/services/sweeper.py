"""Periodic removal of expired sessions, owned by the application lifespan."""

from __future__ import annotations

import asyncio
import contextlib
import logging

from app.core.clock import Clock, utcnow
from app.db.session import Database
from app.monitoring.middleware import record_sessions_swept
from app.services.sessions import SessionManager

logger = logging.getLogger(__name__)


class SessionSweeper:
    """Runs ``SessionManager.sweep`` every ``interval_seconds``.

    The sweep is an idempotent bulk delete, so overlapping with request
    traffic or with another sweeper is harmless. A failed run is logged and
    the next tick simply tries again.
    """

    def __init__(
        self,
        database: Database,
        *,
        interval_seconds: float = 3600,
        clock: Clock = utcnow,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._database = database
        self._interval = interval_seconds
        self._clock = clock
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self) -> int:
        """Sweep once using a dedicated store session; return rows removed."""
        with self._database.session() as session:
            removed = SessionManager(session, clock=self._clock).sweep()

        record_sessions_swept(removed)
        if removed > 0:
            logger.info("Cleaned up %d expired sessions", removed)
        return removed

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await asyncio.to_thread(self.run_once)
            except Exception:
                logger.exception("Expired session sweep failed; retrying next interval")

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.running:
            return
        logger.info("Starting session sweeper (interval=%ss)", self._interval)
        self._task = asyncio.create_task(self._loop(), name="session-sweeper")

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Session sweeper stopped")
