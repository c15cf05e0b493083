"""Tests for POST /api/rating and GET /api/rating."""

from __future__ import annotations

from conftest import auth_headers, create_restaurant


def rating_body(restaurant_id: int, **overrides) -> dict:
    body = {
        "restaurantId": restaurant_id,
        "rating_service": 6,
        "rating_foodquality": 7,
        "rating_ambiance": 8,
        "meal": "Lunch",
    }
    body.update(overrides)
    return body


class TestAddRating:
    def test_requires_authentication(self, client):
        headers = auth_headers(client, "owner@example.com")
        created = create_restaurant(client, headers)
        response = client.post("/api/rating", json=rating_body(created["id"]))
        assert response.status_code == 401

    def test_adds_rating_and_refreshes_aggregate(self, client):
        owner = auth_headers(client, "owner@example.com")
        guest = auth_headers(client, "guest@example.com")
        created = create_restaurant(client, owner)  # 8 / 9 / 7

        response = client.post("/api/rating", json=rating_body(created["id"]), headers=guest)
        assert response.status_code == 201
        rating = response.json()
        assert rating["restaurantId"] == created["id"]
        assert rating["visitDate"]

        aggregate = client.get(f"/api/restaurants/{created['id']}").json()["restaurant"]["aggregate"]
        assert aggregate["totalRatings"] == 2
        assert aggregate["avg_service"] == 7.0
        assert aggregate["avg_foodquality"] == 8.0
        assert aggregate["avg_ambiance"] == 7.5
        assert aggregate["avg_overall"] == 7.5

    def test_second_rating_by_same_user_is_conflict(self, client):
        owner = auth_headers(client, "owner@example.com")
        created = create_restaurant(client, owner)
        response = client.post("/api/rating", json=rating_body(created["id"]), headers=owner)
        assert response.status_code == 409

        aggregate = client.get(f"/api/restaurants/{created['id']}").json()["restaurant"]["aggregate"]
        assert aggregate["totalRatings"] == 1

    def test_unknown_restaurant(self, client):
        headers = auth_headers(client, "guest@example.com")
        response = client.post("/api/rating", json=rating_body(4242), headers=headers)
        assert response.status_code == 404

    def test_out_of_range_score(self, client):
        owner = auth_headers(client, "owner@example.com")
        created = create_restaurant(client, owner)
        guest = auth_headers(client, "guest@example.com")
        response = client.post(
            "/api/rating", json=rating_body(created["id"], rating_foodquality=11), headers=guest
        )
        assert response.status_code == 400

    def test_missing_meal(self, client):
        owner = auth_headers(client, "owner@example.com")
        created = create_restaurant(client, owner)
        payload = rating_body(created["id"])
        del payload["meal"]
        response = client.post("/api/rating", json=payload, headers=owner)
        assert response.status_code == 400


class TestListRatings:
    def test_requires_restaurant_id(self, client):
        response = client.get("/api/rating")
        assert response.status_code == 400
        assert response.json()["detail"] == "Restaurant ID is required"

    def test_lists_newest_first(self, client):
        owner = auth_headers(client, "owner@example.com")
        guest = auth_headers(client, "guest@example.com")
        created = create_restaurant(client, owner)
        client.post("/api/rating", json=rating_body(created["id"]), headers=guest)

        response = client.get("/api/rating", params={"restaurantId": created["id"]})
        assert response.status_code == 200
        ratings = response.json()
        assert [r["user"]["email"] for r in ratings] == ["guest@example.com", "owner@example.com"]

    def test_unknown_restaurant_has_no_ratings(self, client):
        response = client.get("/api/rating", params={"restaurantId": 77})
        assert response.status_code == 200
        assert response.json() == []
