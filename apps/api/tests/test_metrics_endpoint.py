"""Tests for Prometheus metrics exposure."""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.db.session import Database
from app.main import create_app
from app.monitoring import record_sessions_swept


@pytest.fixture()
def client() -> Iterator[TestClient]:
    settings = Settings(
        database_path=":memory:", session_sweep_enabled=False, seed_admin_enabled=False
    )
    app = create_app(settings, Database(settings.database_url))
    with TestClient(app) as test_client:
        yield test_client


def test_metrics_endpoint_exposes_prometheus_data(client: TestClient) -> None:
    client.get("/health")

    response = client.get("/metrics")

    assert response.status_code == 200
    content = response.text
    assert "bulletin_requests_total" in content
    assert "bulletin_request_duration_seconds" in content
    assert "bulletin_sessions_swept_total" in content
    assert response.headers["content-type"].startswith("text/plain")
    assert response.headers["cache-control"] == "no-store"


def test_metrics_counts_increment_on_request(client: TestClient) -> None:
    client.get("/health")
    content = client.get("/metrics").text

    assert "method=\"GET\",path=\"/health\"" in content
    assert "path=\"/metrics\"" not in content


def test_metrics_label_by_route_template(client: TestClient) -> None:
    client.delete("/api/events/7")
    client.delete("/api/events/8")
    client.get("/no/such/route")
    content = client.get("/metrics").text

    assert 'method="DELETE",path="/api/events/{event_id}",status="401"' in content
    assert "/api/events/7" not in content
    assert 'path="<unmatched>",status="404"' in content


def test_sessions_swept_counter_accumulates(client: TestClient) -> None:
    def swept() -> int:
        for line in client.get("/metrics").text.splitlines():
            if line.startswith("bulletin_sessions_swept_total "):
                return int(line.rsplit(" ", 1)[1])
        raise AssertionError("swept counter missing")

    before = swept()
    record_sessions_swept(3)

    assert swept() == before + 3
