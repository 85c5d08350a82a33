"""Run a single expired-session sweep, for use from an external scheduler."""

from __future__ import annotations

import argparse

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.db.session import Database
from app.services.sweeper import SessionSweeper


def _resolve_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Delete expired admin sessions")
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print the number of removed sessions",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _resolve_cli_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    database = Database(settings.database_url, echo=settings.database_echo)
    try:
        removed = SessionSweeper(database).run_once()
    finally:
        database.dispose()

    if not args.quiet:
        print(f"Removed {removed} expired sessions")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation only
    raise SystemExit(main())
