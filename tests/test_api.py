"""Tests for API routes."""

from collections.abc import Iterator
from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from salat_kit.api.app import create_app
from salat_kit.api.dependencies import get_app_state
from salat_kit.api.routes import _get_hijri_date
from salat_kit.config import AppConfig
from salat_kit.domain.events import SettingsChangedEvent
from salat_kit.domain.models import PrayerKind


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    """Config with fixed prayer times and an İstanbul default location."""
    return AppConfig(
        settings_path=tmp_path / "settings.json",
        prayer_provider="fixed",
        default_latitude=41.0082,
        default_longitude=28.9784,
    )


@pytest.fixture
def client(config: AppConfig) -> Iterator[TestClient]:
    """Test client with lifespan."""
    with TestClient(create_app(config)) as client:
        yield client


@pytest.fixture
def client_without_location(tmp_path: Path) -> Iterator[TestClient]:
    """Test client with no location configured."""
    config = AppConfig(settings_path=tmp_path / "settings.json", prayer_provider="fixed")
    with TestClient(create_app(config)) as client:
        yield client


class TestHealthEndpoint:
    """Health check endpoint tests."""

    def test_health_check(self, client: TestClient) -> None:
        """Test health check returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_status(self, client: TestClient) -> None:
        """Test status reports the running refresh."""
        data = client.get("/api/status").json()
        assert data["scheduler_running"] is True
        assert data["refresh_running"] is True
        assert data["prayer_provider"] == "fixed"
        assert data["has_location"] is True
        assert set(data["scheduled_jobs"]) == {"next_prayer_refresh", "next_prayer_boundary"}


class TestQiblaEndpoints:
    """Qibla endpoint tests."""

    def test_qibla_for_query_coordinates(self, client: TestClient) -> None:
        """Test explicit coordinates."""
        response = client.get("/api/qibla", params={"latitude": 51.5074, "longitude": -0.1278})
        assert response.status_code == 200
        data = response.json()
        assert data["bearing"] == pytest.approx(119.0, abs=0.5)
        assert data["direction"] == "GD"
        assert data["rotation"] is None

    def test_qibla_for_current_location(self, client: TestClient) -> None:
        """Test the configured location is used."""
        data = client.get("/api/qibla").json()
        assert data["bearing"] == pytest.approx(151.6, abs=0.5)
        assert data["latitude"] == 41.0082

    def test_qibla_invalid_latitude(self, client: TestClient) -> None:
        """Test query validation."""
        response = client.get("/api/qibla", params={"latitude": 95, "longitude": 0})
        assert response.status_code == 422

    def test_heading_sample(self, client: TestClient) -> None:
        """Test a heading sample returns the rotation."""
        bearing = client.get("/api/qibla").json()["bearing"]
        data = client.post("/api/heading", json={"heading": bearing}).json()
        assert data["heading"] == pytest.approx(bearing, abs=0.01)
        rotation = data["rotation"]
        assert min(rotation, 360.0 - rotation) < 0.01

        data = client.post("/api/heading", json={"heading": 0}).json()
        assert data["rotation"] == pytest.approx(bearing, abs=0.01)

    def test_update_location(self, client: TestClient, config: AppConfig) -> None:
        """Test a new location is applied and saved."""
        response = client.put(
            "/api/location",
            json={"latitude": 51.5074, "longitude": -0.1278, "city": "London"},
        )
        assert response.status_code == 200
        assert response.json()["data"]["bearing"] == pytest.approx(119.0, abs=0.5)

        settings = client.get("/api/settings").json()
        assert settings["location"]["city"] == "London"
        assert config.settings_path.exists()

    def test_no_location(self, client_without_location: TestClient) -> None:
        """Test endpoints needing a location return 409."""
        assert client_without_location.get("/api/qibla").status_code == 409
        assert client_without_location.get("/api/next").status_code == 409
        assert client_without_location.get("/api/times/today").status_code == 409

    def test_location_enables_prayer_endpoints(self, client_without_location: TestClient) -> None:
        """Test setting a location enables prayer endpoints."""
        client_without_location.put("/api/location", json={"latitude": 41.0, "longitude": 29.0})
        assert client_without_location.get("/api/next").status_code == 200


class TestPrayerEndpoints:
    """Prayer endpoint tests."""

    def test_today(self, client: TestClient) -> None:
        """Test today's fixed times."""
        data = client.get("/api/times/today").json()
        assert [p["kind"] for p in data["prayers"]] == [k.value for k in PrayerKind]
        assert [p["time"] for p in data["prayers"]] == [
            "05:30",
            "07:00",
            "12:30",
            "15:45",
            "18:30",
            "20:00",
        ]
        assert sum(p["active"] for p in data["prayers"]) <= 1

    def test_week(self, client: TestClient) -> None:
        """Test weekly times."""
        data = client.get("/api/times/week").json()
        assert len(data) == 7

    def test_next(self, client: TestClient) -> None:
        """Test next prayer response."""
        data = client.get("/api/next").json()
        assert data["kind"] in [k.value for k in PrayerKind]
        assert data["seconds_remaining"] >= 0
        assert len(data["countdown"].split(":")) == 3

    def test_active(self, client: TestClient) -> None:
        """Test exactly one prayer is active or none before Fajr."""
        active = [
            client.get(f"/api/prayers/{kind.value}/active").json()["active"] for kind in PrayerKind
        ]
        assert sum(active) <= 1

    def test_active_unknown_kind(self, client: TestClient) -> None:
        """Test unknown kind is rejected."""
        assert client.get("/api/prayers/witr/active").status_code == 422

    def test_current(self, client: TestClient) -> None:
        """Test current state."""
        data = client.get("/api/current").json()
        assert data["timezone"] in ("Europe/Istanbul", "Asia/Istanbul")
        assert data["qibla_bearing"] == pytest.approx(151.6, abs=0.5)

    def test_prayer_names(self, client: TestClient) -> None:
        """Test prayer names listing."""
        data = client.get("/api/prayers").json()
        assert data[0] == {"value": "fajr", "display_name": "İmsak", "icon": "🌙"}


class TestSettingsEndpoints:
    """Settings endpoint tests."""

    def test_partial_update(self, client: TestClient) -> None:
        """Test partial settings update."""
        response = client.put("/api/settings", json={"theme": "dark", "use_24h_clock": False})
        assert response.status_code == 200

        settings = client.get("/api/settings").json()
        assert settings["theme"] == "dark"
        assert settings["use_24h_clock"] is False

        times = client.get("/api/times/today").json()
        assert times["prayers"][0]["time"] == "05:30 AM"

    def test_update_publishes_event(self, client: TestClient) -> None:
        """Test SettingsChangedEvent carries the updated field names."""
        received: list[SettingsChangedEvent] = []
        get_app_state().event_bus.subscribe(SettingsChangedEvent, received.append)

        client.put("/api/settings", json={"theme": "light"})

        assert len(received) == 1
        assert received[0].changed_fields == ("theme",)

    def test_invalid_theme(self, client: TestClient) -> None:
        """Test validation of enum values."""
        assert client.put("/api/settings", json={"theme": "blue"}).status_code == 422


class TestHijriDate:
    """Approximate Hijri date tests."""

    def test_known_date(self) -> None:
        """Test a date in the middle of Ramadan 1445."""
        assert _get_hijri_date(date(2024, 3, 20)).endswith("Ramazan 1445")
