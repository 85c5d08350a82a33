"""Utility script for inserting an administrator account."""

from __future__ import annotations

import argparse
import getpass

from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.errors import DuplicateKeyError
from app.core.logging import configure_logging
from app.db.session import Database
from app.schemas.auth import UserRead
from app.services.credentials import CredentialStore


def create_admin_user(
    session: Session,
    *,
    username: str,
    email: str,
    password: str,
    full_name: str,
    hash_rounds: int = 10,
) -> UserRead:
    """Persist an administrator with a securely hashed password.

    Raises:
        ValueError: If the username or email is already taken.
    """

    store = CredentialStore(session, hash_rounds=hash_rounds)
    try:
        return store.create_identity(
            username=username.strip(),
            email=email.strip(),
            password=password,
            full_name=full_name.strip(),
        )
    except DuplicateKeyError as exc:
        raise ValueError(exc.message) from exc


def _resolve_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an admin user")
    parser.add_argument("--username", help="Login name for the admin user")
    parser.add_argument("--email", help="Email address for the admin user")
    parser.add_argument("--full-name", dest="full_name", help="Display name")
    parser.add_argument(
        "--password",
        help="Password for the admin user (omit to securely prompt)",
    )
    parser.add_argument(
        "--prompt",
        action="store_true",
        help="Force interactive prompts for every field",
    )
    return parser.parse_args(argv)


def _ask(value: str | None, label: str, *, force: bool) -> str:
    if force or not value:
        value = input(f"{label}: ").strip()
    if not value:
        raise SystemExit(f"{label} must be provided")
    return value


def main(argv: list[str] | None = None) -> int:
    args = _resolve_cli_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    username = _ask(args.username, "Admin username", force=args.prompt)
    email = _ask(args.email, "Admin email", force=args.prompt)
    full_name = _ask(args.full_name, "Admin full name", force=args.prompt)

    password = args.password
    if args.prompt or password is None:
        password = getpass.getpass("Admin password: ")
    if not password:
        raise SystemExit("Password must be provided")
    if len(password) < settings.password_min_length:
        raise SystemExit(
            f"Password must be at least {settings.password_min_length} characters long"
        )

    database = Database(settings.database_url, echo=settings.database_echo)
    database.create_all()
    try:
        with database.session() as session:
            try:
                user = create_admin_user(
                    session,
                    username=username,
                    email=email,
                    password=password,
                    full_name=full_name,
                    hash_rounds=settings.password_hash_rounds,
                )
            except ValueError as exc:
                raise SystemExit(str(exc)) from exc
    finally:
        database.dispose()

    print(f"Admin user created with id={user.id}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation only
    raise SystemExit(main())
