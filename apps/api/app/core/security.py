"""Security helpers for password hashing and session token handling."""

from __future__ import annotations

import secrets

import bcrypt

from app.core.errors import PasswordHashError, UnauthenticatedError

_BCRYPT_MAX_BYTES = 72
_TOKEN_BYTES = 32
_BEARER_PREFIX = "Bearer "


def _password_bytes(password: str) -> bytes:
    # bcrypt ignores everything past 72 bytes; newer releases raise instead.
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def create_password_hash(password: str, rounds: int = 10) -> str:
    """Hash a password using bcrypt with the given work factor."""

    if not password:
        raise ValueError("Password must not be empty")

    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, stored_hash: str) -> bool:
    """Check a candidate password against a stored bcrypt hash.

    A mismatch returns ``False``; a stored hash bcrypt cannot parse raises
    ``PasswordHashError``.
    """

    try:
        return bcrypt.checkpw(_password_bytes(password), stored_hash.encode("utf-8"))
    except (ValueError, TypeError) as exc:
        raise PasswordHashError("Stored password hash is malformed") from exc


def generate_session_token() -> str:
    """Return 32 random bytes rendered as 64 lowercase hex characters."""
    return secrets.token_hex(_TOKEN_BYTES)


def parse_bearer_token(authorization: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""

    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        raise UnauthenticatedError("Access denied. No token provided.")

    token = authorization[len(_BEARER_PREFIX):].strip()
    if not token:
        raise UnauthenticatedError("Access denied. No token provided.")
    return token
