import os
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

# Must be set before rideshift.config is imported
os.environ.setdefault("MOCK_LATENCY_SCALE", "0")
os.environ.setdefault("SEED_DEMO_DATA", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.pop("REDIS_URL", None)


@pytest.fixture(scope="session")
def app():
    """
    Import the FastAPI app once per test session.
    """
    from rideshift.main import app as rideshift_app

    return rideshift_app


@pytest.fixture()
def client(app):
    """
    TestClient run as a context manager so the lifespan creates a fresh
    in-memory database for every test and drops it afterwards.
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def seeded_client(app, monkeypatch):
    """
    Same as ``client`` but with the demo rows loaded at startup.
    """
    from rideshift.config import settings

    monkeypatch.setattr(settings, "seed_demo_data", True)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def make_ride(client):
    def _make_ride(**overrides: Any) -> Dict[str, Any]:
        body = {
            "requester_id": "rider-1",
            "pickup_location": "Times Square, New York",
            "dropoff_location": "Central Park, New York",
        }
        body.update(overrides)
        resp = client.post("/api/rides", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make_ride


@pytest.fixture()
def make_driver(client):
    def _make_driver(user_id: str = "driver-1") -> Dict[str, Any]:
        resp = client.post(
            "/api/drivers",
            json={
                "user_id": user_id,
                "vehicle_details": "2019 Honda Civic, Grey",
                "license_number": "DL000111",
            },
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make_driver


@pytest.fixture()
def make_proposal(client):
    def _make_proposal(new_rate: float = 0.12, proposer_id: str = "voter-0") -> Dict[str, Any]:
        resp = client.post(
            "/api/governance",
            json={"proposer_id": proposer_id, "new_rate": new_rate},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make_proposal
