"""Unit tests for core security helpers."""

from __future__ import annotations

import re

import pytest

from app.core.errors import PasswordHashError, UnauthenticatedError
from app.core.security import (
    create_password_hash,
    generate_session_token,
    parse_bearer_token,
    verify_password,
)


def test_password_hash_round_trip_never_stores_plaintext() -> None:
    hashed = create_password_hash("secret1", rounds=4)

    assert hashed != "secret1"
    assert hashed.startswith("$2")
    assert verify_password("secret1", hashed) is True
    assert verify_password("secret2", hashed) is False


def test_password_hashes_are_salted() -> None:
    assert create_password_hash("secret1", rounds=4) != create_password_hash("secret1", rounds=4)


def test_create_password_hash_rejects_empty_password() -> None:
    with pytest.raises(ValueError):
        create_password_hash("", rounds=4)


def test_verify_password_raises_on_malformed_hash() -> None:
    with pytest.raises(PasswordHashError):
        verify_password("secret1", "not-a-bcrypt-hash")


def test_session_tokens_are_64_lowercase_hex_characters() -> None:
    tokens = {generate_session_token() for _ in range(50)}

    assert len(tokens) == 50
    for token in tokens:
        assert re.fullmatch(r"[0-9a-f]{64}", token)


def test_parse_bearer_token_extracts_token() -> None:
    assert parse_bearer_token("Bearer abc123") == "abc123"


@pytest.mark.parametrize(
    "header",
    [None, "", "abc123", "Basic abc123", "bearer abc123", "Bearer ", "Bearer    "],
)
def test_parse_bearer_token_rejects_bad_headers(header: str | None) -> None:
    with pytest.raises(UnauthenticatedError):
        parse_bearer_token(header)
