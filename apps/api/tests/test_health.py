from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app


settings = Settings(app_version="9.9.9", session_sweep_enabled=False, seed_admin_enabled=False)
app = create_app(settings)
client = TestClient(app)


def test_root_health_status():
    response = client.get("/")
    assert response.status_code == 200
    payload = response.json()
    assert payload == {
        "status": "ok",
        "service": "Event Bulletin API",
        "version": "9.9.9",
    }


def test_explicit_health_endpoint_matches_root():
    root_response = client.get("/")
    health_response = client.get("/health")

    assert root_response.status_code == 200
    assert health_response.status_code == 200
    assert root_response.json() == health_response.json()
