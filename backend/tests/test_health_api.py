"""
Tests for /api/v1/health, /api/v1/profile and /api/v1/status
============================================================
Covers:
- POST /health/sync stores a day, re-sync overwrites
- POST /health/sync rejects negative values (422)
- GET /health/{day}: found and 404
- GET /profile returns (and stores) the default profile
- GET /profile answers with the default when storage cannot be read
- GET /status

Run: pytest backend/tests/test_health_api.py -v
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from moodjournal.calendar_context import CalendarContext
from moodjournal.db.kv_store import InMemoryKeyValueStore, StorageError
from moodjournal.services.health_signals import HealthSignalRegistry
from moodjournal.services.personality import ProfileStore


@pytest.fixture
def registry() -> HealthSignalRegistry:
    return HealthSignalRegistry(CalendarContext())


@pytest.fixture
def client(registry):
    with patch("moodjournal.routers.health.get_health_registry", return_value=registry):
        from moodjournal.main import app
        yield TestClient(app)


class TestHealthSync:

    def test_sync_and_read_back(self, client, registry):
        resp = client.post(
            "/api/v1/health/sync",
            json={"date": "2026-03-01", "step_count": 8500, "sleep_hours": 7.25},
        )

        assert resp.status_code == 200
        assert len(registry) == 1

        day = client.get("/api/v1/health/2026-03-01").json()
        assert day["step_count"] == 8500
        assert day["sleep_hours"] == 7.25
        assert day["average_heart_rate"] == 0.0

    def test_resync_overwrites(self, client, registry):
        client.post("/api/v1/health/sync", json={"date": "2026-03-01", "step_count": 100})
        client.post("/api/v1/health/sync", json={"date": "2026-03-01", "step_count": 12000})

        assert len(registry) == 1
        assert client.get("/api/v1/health/2026-03-01").json()["step_count"] == 12000

    def test_negative_values_rejected(self, client, registry):
        resp = client.post(
            "/api/v1/health/sync", json={"date": "2026-03-01", "sleep_hours": -2}
        )
        assert resp.status_code == 422
        assert len(registry) == 0

    def test_missing_day(self, client):
        resp = client.get("/api/v1/health/2026-03-09")
        assert resp.status_code == 404
        assert resp.json()["detail"]["code"] == "health_not_found"


class TestProfile:

    def test_default_profile_created(self):
        kv = InMemoryKeyValueStore()
        with patch("moodjournal.routers.profile.get_profile_store", return_value=ProfileStore(kv)):
            from moodjournal.main import app
            resp = TestClient(app).get("/api/v1/profile")

        assert resp.status_code == 200
        data = resp.json()
        assert data["traits"]["description"] == "Balanced personality"
        assert data["learning_style"]["pace"] == "moderate"
        assert kv.get("personality:profile") is not None

    def test_unreadable_storage_still_answers(self):
        kv = MagicMock()
        kv.get.side_effect = StorageError("personality:profile", "connection reset")
        with patch("moodjournal.routers.profile.get_profile_store", return_value=ProfileStore(kv)):
            from moodjournal.main import app
            resp = TestClient(app).get("/api/v1/profile")

        assert resp.status_code == 200
        assert resp.json()["traits"]["openness"] == 0.5


class TestStatus:

    def test_status(self):
        from moodjournal.main import app
        resp = TestClient(app).get("/api/v1/status")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok", "service": "moodjournal-api"}
