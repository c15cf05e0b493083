"""
Shared fixtures. The environment is configured before any platepoint import
so Settings picks up a throwaway SQLite database and cheap bcrypt rounds.
"""

from __future__ import annotations

import asyncio
import os
import tempfile
from pathlib import Path

_DB_DIR = tempfile.mkdtemp(prefix="platepoint-tests-")

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_DB_DIR) / 'test.db'}"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["SERVICE_TOKEN"] = "test-service-token"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "test"
os.environ["GOOGLE_MAPS_API_KEY"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from platepoint.database import Base, create_all, engine  # noqa: E402
from platepoint.main import app  # noqa: E402
from platepoint.services.restaurants import invalidate_rankings  # noqa: E402

SERVICE_TOKEN = os.environ["SERVICE_TOKEN"]
PASSWORD = "correct-horse-battery"


async def _reset_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await create_all()


@pytest.fixture(autouse=True)
def clean_db():
    """Every test starts from empty tables and an empty rankings cache."""
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(_reset_schema())
    finally:
        loop.close()
    invalidate_rankings()
    yield
    invalidate_rankings()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def signup(client: TestClient, email: str, password: str = PASSWORD, **extra) -> dict:
    response = client.post("/api/auth/signup", json={"email": email, "password": password, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def auth_headers(client: TestClient, email: str, password: str = PASSWORD) -> dict[str, str]:
    """Sign up and log in, returning a bearer header. Clears the cookie jar
    so several users can act through the same client."""
    signup(client, email, password)
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['token']}"}


def restaurant_body(**overrides) -> dict:
    body = {
        "name": "Chez Tests",
        "address": "1 Rue Sainte-Catherine, Montreal",
        "cuisine": ["French"],
        "latitude": 45.5017,
        "longitude": -73.5673,
        "priceRange": "$$",
        "rating_service": 8,
        "rating_foodquality": 9,
        "rating_ambiance": 7,
        "meal": "Dinner",
        "notes": "Great duck.",
    }
    body.update(overrides)
    return body


def create_restaurant(client: TestClient, headers: dict[str, str], **overrides) -> dict:
    response = client.post("/api/restaurants", json=restaurant_body(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()
