"""Tests for restaurant creation, listings and the detail page."""

from __future__ import annotations

from conftest import auth_headers, create_restaurant, restaurant_body


class TestCreateRestaurant:
    def test_requires_authentication(self, client):
        response = client.post("/api/restaurants", json=restaurant_body())
        assert response.status_code == 401

    def test_creates_restaurant_rating_and_aggregate(self, client):
        headers = auth_headers(client, "owner@example.com")
        body = create_restaurant(client, headers)

        assert body["name"] == "Chez Tests"
        assert body["cuisine"] == ["French"]
        assert body["priceRange"] == "$$"
        assert body["isActive"] is True

        rating = body["userRating"]
        assert rating["restaurantId"] == body["id"]
        assert rating["rating_service"] == 8
        assert rating["meal"] == "Dinner"
        assert rating["notes"] == "Great duck."

        aggregate = body["aggregate"]
        assert aggregate["totalRatings"] == 1
        assert aggregate["avg_service"] == 8.0
        assert aggregate["avg_foodquality"] == 9.0
        assert aggregate["avg_ambiance"] == 7.0
        assert aggregate["avg_overall"] == 8.0
        assert body["display_rating"] == 4.0

    def test_body_user_id_is_ignored(self, client):
        headers = auth_headers(client, "real@example.com")
        me = client.post("/api/update-user", json={}, headers=headers).json()["user"]
        body = create_restaurant(
            client, headers, userId="00000000-0000-0000-0000-000000000000"
        )
        assert body["userRating"]["userId"] == me["uuid"]

    def test_missing_name_is_bad_request(self, client):
        headers = auth_headers(client, "owner@example.com")
        payload = restaurant_body()
        del payload["name"]
        response = client.post("/api/restaurants", json=payload, headers=headers)
        assert response.status_code == 400
        assert "name" in response.json()["detail"]

    def test_out_of_range_rating_is_bad_request(self, client):
        headers = auth_headers(client, "owner@example.com")
        for bad in (0, 11):
            response = client.post(
                "/api/restaurants", json=restaurant_body(rating_service=bad), headers=headers
            )
            assert response.status_code == 400

    def test_string_score_is_bad_request(self, client):
        headers = auth_headers(client, "owner@example.com")
        response = client.post(
            "/api/restaurants", json=restaurant_body(rating_ambiance="7"), headers=headers
        )
        assert response.status_code == 400

    def test_unknown_meal_is_bad_request(self, client):
        headers = auth_headers(client, "owner@example.com")
        response = client.post(
            "/api/restaurants", json=restaurant_body(meal="Supper"), headers=headers
        )
        assert response.status_code == 400


class TestListRestaurants:
    def test_empty(self, client):
        response = client.get("/api/restaurants")
        assert response.status_code == 200
        assert response.json() == []

    def test_lists_with_aggregates(self, client):
        headers = auth_headers(client, "owner@example.com")
        first = create_restaurant(client, headers, name="First")
        second = create_restaurant(client, headers, name="Second")

        body = client.get("/api/restaurants").json()
        assert [r["id"] for r in body] == [first["id"], second["id"]]
        assert all(r["aggregate"]["totalRatings"] == 1 for r in body)

    def test_filter_by_rater(self, client):
        alice = auth_headers(client, "alice@example.com")
        bob = auth_headers(client, "bob@example.com")
        mine = create_restaurant(client, alice, name="Alice's pick")
        create_restaurant(client, bob, name="Bob's pick")
        client.post(
            "/api/rating",
            json={
                "restaurantId": mine["id"],
                "rating_service": 5,
                "rating_foodquality": 5,
                "rating_ambiance": 5,
                "meal": "Lunch",
            },
            headers=bob,
        )

        alice_uuid = mine["userRating"]["userId"]
        body = client.get("/api/restaurants", params={"userId": alice_uuid}).json()
        assert [r["name"] for r in body] == ["Alice's pick"]
        assert [r["userId"] for r in body[0]["ratings"]] == [alice_uuid]

    def test_filter_by_rater_with_no_ratings(self, client):
        response = client.get(
            "/api/restaurants", params={"userId": "00000000-0000-0000-0000-000000000000"}
        )
        assert response.status_code == 200
        assert response.json() == []

    def test_filter_with_malformed_user_id(self, client):
        response = client.get("/api/restaurants", params={"userId": "nope"})
        assert response.status_code == 400


class TestRestaurantDetail:
    def test_detail_includes_ratings_with_raters(self, client):
        headers = auth_headers(client, "owner@example.com")
        created = create_restaurant(client, headers)

        response = client.get(f"/api/restaurants/{created['id']}")
        assert response.status_code == 200
        body = response.json()
        assert body["restaurant"]["id"] == created["id"]
        assert body["restaurant"]["display_rating"] == 4.0
        assert len(body["ratings"]) == 1
        assert body["ratings"][0]["user"]["email"] == "owner@example.com"
        assert body["restaurant"]["ratings"][0]["id"] == body["ratings"][0]["id"]

    def test_unknown_restaurant(self, client):
        response = client.get("/api/restaurants/999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Restaurant not found"

    def test_non_numeric_id(self, client):
        assert client.get("/api/restaurants/abc").status_code == 400
