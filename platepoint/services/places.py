"""
Google Places seeding — geocode a city, pull nearby restaurants, insert them.

Flow:
  1. Geocoding API: city name → (lat, lng)
  2. Nearby Search (type=restaurant, radius=settings.places_radius_m),
     following next_page_token until `limit` places are collected.
     Google only honours a page token a short while after issuing it, so
     the client sleeps settings.places_page_delay_s between pages.
  3. Each place is mapped to restaurant columns and inserted on its own;
     a failing row is logged and counted, never fatal for the batch.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from platepoint.config import settings
from platepoint.services.restaurants import create_restaurant

logger = logging.getLogger(__name__)

GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
NEARBY_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"

# Google place `types` fragments recognised as cuisines
CUISINE_KEYWORDS = (
    "italian", "chinese", "mexican", "indian", "japanese",
    "american", "thai", "french", "korean", "greek",
)
DEFAULT_CUISINE = "Restaurant"


class PlacesError(Exception):
    """Raised when the Geocoding or Places API returns an unusable response."""


class PlacesNotConfigured(PlacesError):
    """Raised when no Google Maps API key is configured."""


# ── Mapping ────────────────────────────────────────────────────────────────────


def extract_cuisines(place: dict[str, Any]) -> list[str]:
    """
    Map Google place types onto capitalised cuisine names, e.g.
    "italian_restaurant" → "Italian". Falls back to ["Restaurant"].
    """
    cuisines: list[str] = []
    for place_type in place.get("types") or []:
        for keyword in CUISINE_KEYWORDS:
            if keyword in place_type:
                cuisines.append(keyword.capitalize())
                break
    return cuisines or [DEFAULT_CUISINE]


def place_to_restaurant(place: dict[str, Any]) -> dict[str, Any]:
    """Translate a Nearby Search result into restaurant columns."""
    location = place["geometry"]["location"]
    return {
        "name": place["name"],
        "address": place.get("vicinity") or place.get("formatted_address") or "",
        "latitude": float(location["lat"]),
        "longitude": float(location["lng"]),
        "cuisine": extract_cuisines(place),
        "price_range": None,
        "phone": place.get("formatted_phone_number"),
        "website": place.get("website"),
        "photos": [],
        "is_active": True,
    }


# ── API client ─────────────────────────────────────────────────────────────────


class PlacesClient:
    """Thin async wrapper over the Geocoding and Nearby Search endpoints."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        radius_m: Optional[int] = None,
        page_delay_s: Optional[float] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.google_maps_api_key
        if not self.api_key:
            raise PlacesNotConfigured("Google Maps API key missing.")
        self.radius_m = radius_m if radius_m is not None else settings.places_radius_m
        self.page_delay_s = (
            page_delay_s if page_delay_s is not None else settings.places_page_delay_s
        )
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=30.0)

    async def __aenter__(self) -> "PlacesClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_json(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.get(url, params={**params, "key": self.api_key})
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise PlacesError(f"Request to {url} failed: {exc}") from exc

    async def geocode(self, city: str) -> tuple[float, float]:
        data = await self._get_json(GEOCODE_URL, {"address": city})
        results = data.get("results") or []
        if data.get("status") != "OK" or not results:
            raise PlacesError(f"Could not geocode city: {city}")
        try:
            location = results[0]["geometry"]["location"]
            return float(location["lat"]), float(location["lng"])
        except (KeyError, TypeError, ValueError) as exc:
            raise PlacesError(f"Malformed geocode result for {city}: {exc}") from exc

    async def nearby_restaurants(
        self, lat: float, lng: float, limit: int
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {
            "location": f"{lat},{lng}",
            "radius": self.radius_m,
            "type": "restaurant",
        }
        places: list[dict[str, Any]] = []
        page_token: Optional[str] = None

        while True:
            page_params = {"pagetoken": page_token} if page_token else params
            data = await self._get_json(NEARBY_URL, page_params)

            status = data.get("status")
            if status == "ZERO_RESULTS":
                break
            if status != "OK":
                raise PlacesError(f"Places API error: {status}")

            places.extend(data.get("results") or [])
            page_token = data.get("next_page_token")
            if not page_token or len(places) >= limit:
                break
            await asyncio.sleep(self.page_delay_s)

        return places[:limit]

    async def fetch_city_restaurants(self, city: str, limit: int) -> list[dict[str, Any]]:
        """Geocode the city and return up to `limit` mapped restaurants."""
        lat, lng = await self.geocode(city)
        logger.info("Geocoded %s to (%.5f, %.5f)", city, lat, lng)
        places = await self.nearby_restaurants(lat, lng, limit)
        return [place_to_restaurant(p) for p in places]


# ── Seeding ────────────────────────────────────────────────────────────────────


async def seed_restaurants_for_city(
    city: str,
    db: AsyncSession,
    limit: Optional[int] = None,
    client: Optional[PlacesClient] = None,
) -> dict[str, int]:
    """
    Fetch restaurants for `city` from Google Places and insert them.
    Returns {"created": n, "failed": m}. API failures propagate as PlacesError.
    """
    limit = limit or settings.seed_default_limit
    logger.info("Seeding restaurants for city: %s (limit=%d)", city, limit)

    places_client = client or PlacesClient()
    try:
        restaurants = await places_client.fetch_city_restaurants(city, limit)
    finally:
        if client is None:
            await places_client.aclose()

    logger.info("Found %d restaurants for %s. Inserting...", len(restaurants), city)

    created = failed = 0
    for data in restaurants:
        try:
            await create_restaurant(data, db)
            created += 1
        except SQLAlchemyError as exc:
            await db.rollback()
            failed += 1
            logger.error("Failed to add %s: %s", data.get("name"), exc)

    logger.info(
        "Finished seeding %s: %d created, %d failed", city, created, failed
    )
    return {"created": created, "failed": failed}
