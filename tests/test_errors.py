"""Tests for database-failure and unhandled-error responses."""

from __future__ import annotations

from conftest import auth_headers, create_restaurant, restaurant_body
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from platepoint.main import app
from platepoint.services import ratings as rating_service
from platepoint.services import restaurants as restaurant_service


async def _failing_aggregate(restaurant_id, db):
    raise OperationalError("UPDATE restaurant_aggregates", {}, Exception("database is locked"))


class TestWriteFailures:
    def test_failed_rating_write_rolls_back(self, client, monkeypatch):
        owner = auth_headers(client, "owner@example.com")
        guest = auth_headers(client, "guest@example.com")
        created = create_restaurant(client, owner)

        monkeypatch.setattr(rating_service, "update_restaurant_aggregate", _failing_aggregate)
        response = client.post(
            "/api/rating",
            json={
                "restaurantId": created["id"],
                "rating_service": 1,
                "rating_foodquality": 1,
                "rating_ambiance": 1,
                "meal": "Lunch",
            },
            headers=guest,
        )
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to add rating"

        detail = client.get(f"/api/restaurants/{created['id']}").json()
        assert detail["restaurant"]["aggregate"]["totalRatings"] == 1
        assert detail["restaurant"]["aggregate"]["avg_overall"] == 8.0
        assert len(detail["ratings"]) == 1

    def test_failed_restaurant_write_rolls_back(self, client, monkeypatch):
        headers = auth_headers(client, "owner@example.com")

        monkeypatch.setattr(restaurant_service, "update_restaurant_aggregate", _failing_aggregate)
        response = client.post("/api/restaurants", json=restaurant_body(), headers=headers)
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to create restaurant"

        assert client.get("/api/restaurants").json() == []
        assert client.get("/api/rating", params={"restaurantId": 1}).json() == []


class TestUnhandledErrors:
    def test_unexpected_exception_is_generic_500(self, monkeypatch):
        async def exploding_rankings(db, limit=3):
            raise RuntimeError("boom")

        monkeypatch.setattr(restaurant_service, "get_rankings", exploding_rankings)
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/restaurants/rankings")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
