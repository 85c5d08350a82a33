"""Tests validating API CORS configuration."""

from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app


settings = Settings(
    cors_allowed_origins="http://localhost:3000, https://bulletin.example.com",
    session_sweep_enabled=False,
    seed_admin_enabled=False,
)
client = TestClient(create_app(settings))


def test_origins_are_parsed_from_comma_separated_setting() -> None:
    assert settings.resolved_cors_allowed_origins == [
        "http://localhost:3000",
        "https://bulletin.example.com",
    ]


def test_preflight_succeeds_for_allowed_origin() -> None:
    response = client.options(
        "/api/auth/login",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert response.headers["access-control-allow-credentials"] == "true"


def test_preflight_allows_authorization_header_for_mutations() -> None:
    response = client.options(
        "/api/events/1",
        headers={
            "Origin": "https://bulletin.example.com",
            "Access-Control-Request-Method": "DELETE",
            "Access-Control-Request-Headers": "authorization",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "https://bulletin.example.com"


def test_preflight_is_rejected_for_disallowed_origin() -> None:
    response = client.options(
        "/api/auth/login",
        headers={
            "Origin": "http://malicious.local",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers
