"""Entry-point script delegating to app.scripts.sweep_sessions."""

from __future__ import annotations

from app.scripts.sweep_sessions import main


if __name__ == "__main__":  # pragma: no cover - manual invocation only
    raise SystemExit(main())
