"""Tests for the admin seeding endpoints."""

from __future__ import annotations

from conftest import SERVICE_TOKEN

from platepoint.config import settings
from platepoint.routers import admin
from platepoint.services.places import PlacesError


class TestSeedEndpoint:
    def test_status(self, client):
        response = client.get("/api/admin/seed-restaurants")
        assert response.status_code == 200
        assert response.json() == {"message": "Seed restaurants endpoint is available"}

    def test_requires_service_token(self, client):
        response = client.post("/api/admin/seed-restaurants", json={"city": "Montreal"})
        assert response.status_code == 401

    def test_rejects_wrong_service_token(self, client):
        response = client.post(
            "/api/admin/seed-restaurants",
            json={"city": "Montreal"},
            headers={"X-Service-Token": "nope"},
        )
        assert response.status_code == 401

    def test_without_api_key_is_unavailable(self, client):
        response = client.post(
            "/api/admin/seed-restaurants",
            json={"city": "Montreal"},
            headers={"X-Service-Token": SERVICE_TOKEN},
        )
        assert response.status_code == 503

    def test_reports_counts(self, client, monkeypatch):
        seen = {}

        async def fake_seed(city, db, limit=None, client=None):
            seen.update(city=city, limit=limit)
            return {"created": 4, "failed": 1}

        monkeypatch.setattr(admin, "seed_restaurants_for_city", fake_seed)
        response = client.post(
            "/api/admin/seed-restaurants",
            json={"city": "Quebec City", "limit": 5},
            headers={"X-Service-Token": SERVICE_TOKEN},
        )
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Seeded restaurants for Quebec City",
            "created": 4,
            "failed": 1,
        }
        assert seen == {"city": "Quebec City", "limit": 5}

    def test_upstream_failure_is_bad_gateway(self, client, monkeypatch):
        async def failing_seed(city, db, limit=None, client=None):
            raise PlacesError("Places API error: OVER_QUERY_LIMIT")

        monkeypatch.setattr(admin, "seed_restaurants_for_city", failing_seed)
        response = client.post(
            "/api/admin/seed-restaurants",
            json={"city": "Montreal"},
            headers={"X-Service-Token": SERVICE_TOKEN},
        )
        assert response.status_code == 502

    def test_limit_defaults_to_configured_value(self, client, monkeypatch):
        seen = {}

        async def fake_seed(city, db, limit=None, client=None):
            seen["limit"] = limit
            return {"created": 0, "failed": 0}

        monkeypatch.setattr(admin, "seed_restaurants_for_city", fake_seed)
        response = client.post(
            "/api/admin/seed-restaurants",
            json={"city": "Montreal"},
            headers={"X-Service-Token": SERVICE_TOKEN},
        )
        assert response.status_code == 200
        assert seen["limit"] == settings.seed_default_limit
