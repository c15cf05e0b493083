"""
Restaurant service — creation, listings, detail pages and discovery.

Rankings caching:
  Key:  "rankings:<limit>"
  TTL:  settings.rankings_cache_ttl
  Invalidated on every restaurant or rating write (invalidate_rankings()).
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Optional
from uuid import UUID

from cachetools import TTLCache
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from platepoint.config import settings
from platepoint.models import Rating, Restaurant, RestaurantAggregate, User
from platepoint.models.rating import RATING_INPUT_FIELDS
from platepoint.schemas.restaurant import RankingsResponse, RestaurantRead
from platepoint.services.aggregates import update_restaurant_aggregate
from platepoint.utils.geo import haversine_km

logger = logging.getLogger(__name__)

# Restaurant columns a client may set on creation
_RESTAURANT_FIELDS = (
    "name", "address", "cuisine", "latitude", "longitude",
    "price_range", "phone", "website", "photos",
)

# "Surprise me" picks at random among this many best-rated matches
SURPRISE_POOL_SIZE = 5

_cache_rankings: TTLCache = TTLCache(maxsize=32, ttl=settings.rankings_cache_ttl)


def invalidate_rankings() -> None:
    """Drop every cached rankings payload."""
    _cache_rankings.clear()


def _display_rating(restaurant: Restaurant) -> float:
    return restaurant.aggregate.display_rating if restaurant.aggregate else 0.0


def _with_aggregate():
    return select(Restaurant).options(selectinload(Restaurant.aggregate))


async def _load_restaurant(restaurant_id: int, db: AsyncSession) -> Restaurant:
    """Re-read a restaurant with its aggregate after a write."""
    result = await db.execute(
        _with_aggregate()
        .where(Restaurant.id == restaurant_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


# ── Writes ─────────────────────────────────────────────────────────────────────


async def create_restaurant(data: dict[str, Any], db: AsyncSession) -> Restaurant:
    """Insert a restaurant without a rating (used by seeding)."""
    restaurant = Restaurant(
        **{k: data[k] for k in _RESTAURANT_FIELDS if data.get(k) is not None},
        is_active=data.get("is_active", True),
    )
    db.add(restaurant)
    await db.commit()
    invalidate_rankings()
    return await _load_restaurant(restaurant.id, db)


async def create_restaurant_with_rating(
    data: dict[str, Any], user: User, db: AsyncSession
) -> tuple[Restaurant, Rating]:
    """
    Insert a restaurant and its creator's first rating, then build the
    aggregate — all in one transaction.
    """
    restaurant = Restaurant(
        **{k: data[k] for k in _RESTAURANT_FIELDS if data.get(k) is not None},
        is_active=True,
    )
    db.add(restaurant)
    await db.flush()

    rating = Rating(
        restaurant_id=restaurant.id,
        user_id=user.uuid,
        **{k: data[k] for k in RATING_INPUT_FIELDS if data.get(k) is not None},
    )
    db.add(rating)
    await db.flush()

    await update_restaurant_aggregate(restaurant.id, db)
    await db.commit()
    invalidate_rankings()

    logger.info(
        "Restaurant %s (%s) created by user %s", restaurant.id, restaurant.name, user.uuid
    )
    return await _load_restaurant(restaurant.id, db), rating


# ── Reads ──────────────────────────────────────────────────────────────────────


async def list_restaurants(db: AsyncSession) -> list[Restaurant]:
    """All active restaurants with their aggregate, oldest first."""
    result = await db.execute(
        _with_aggregate()
        .where(Restaurant.is_active.is_(True))
        .order_by(Restaurant.id)
    )
    return list(result.scalars())


async def list_restaurants_rated_by(user_id: UUID, db: AsyncSession) -> list[Restaurant]:
    """
    Restaurants the user has rated (rating, not ownership). Each restaurant's
    `ratings` collection holds only that user's ratings.
    """
    result = await db.execute(
        select(Restaurant)
        .where(Restaurant.ratings.any(Rating.user_id == user_id))
        .options(
            selectinload(Restaurant.aggregate),
            selectinload(Restaurant.ratings.and_(Rating.user_id == user_id)),
        )
        .order_by(Restaurant.id)
    )
    return list(result.scalars())


async def get_restaurant(restaurant_id: int, db: AsyncSession) -> Optional[Restaurant]:
    """Active restaurant with aggregate and all ratings (with raters), or None."""
    result = await db.execute(
        select(Restaurant)
        .where(Restaurant.id == restaurant_id, Restaurant.is_active.is_(True))
        .options(
            selectinload(Restaurant.aggregate),
            selectinload(Restaurant.ratings).selectinload(Rating.user),
        )
    )
    return result.scalar_one_or_none()


# ── Discovery ──────────────────────────────────────────────────────────────────


async def get_rankings(db: AsyncSession, limit: int = 3) -> RankingsResponse:
    """
    Home-page summary: restaurant count, average rating of rated restaurants
    (5-star scale), best-rated and most recently added restaurants.
    """
    cache_key = f"rankings:{limit}"
    if cache_key in _cache_rankings:
        logger.debug("Rankings cache HIT (limit=%d)", limit)
        return RankingsResponse.model_validate_json(_cache_rankings[cache_key])

    total = await db.scalar(
        select(func.count(Restaurant.id)).where(Restaurant.is_active.is_(True))
    )

    rated = (
        Restaurant.is_active.is_(True),
        RestaurantAggregate.total_ratings > 0,
    )
    avg_overall = await db.scalar(
        select(func.avg(RestaurantAggregate.avg_overall))
        .join(Restaurant, Restaurant.id == RestaurantAggregate.restaurant_id)
        .where(*rated)
    )

    top_result = await db.execute(
        _with_aggregate()
        .join(RestaurantAggregate, Restaurant.id == RestaurantAggregate.restaurant_id)
        .where(*rated)
        .order_by(
            RestaurantAggregate.avg_overall.desc(),
            RestaurantAggregate.total_ratings.desc(),
            Restaurant.id,
        )
        .limit(limit)
    )
    top_rated = [RestaurantRead.model_validate(r) for r in top_result.scalars()]

    recent_result = await db.execute(
        _with_aggregate()
        .where(Restaurant.is_active.is_(True))
        .order_by(Restaurant.created_at.desc(), Restaurant.id.desc())
        .limit(limit)
    )
    recently_added = [RestaurantRead.model_validate(r) for r in recent_result.scalars()]

    payload = RankingsResponse(
        total_restaurants=total or 0,
        overall_average_rating=round(float(avg_overall) / 2, 2) if avg_overall is not None else 0.0,
        highest_rated=top_rated[0] if top_rated else None,
        top_rated=top_rated,
        recently_added=recently_added,
    )
    _cache_rankings[cache_key] = payload.model_dump_json()
    return payload


@dataclass
class SurprisePick:
    restaurant: Optional[Restaurant]
    distance_km: Optional[float]
    match_count: int


async def surprise_me(
    latitude: float,
    longitude: float,
    db: AsyncSession,
    distance_km: float = 20.0,
    cuisine: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> SurprisePick:
    """
    Pick a well-rated restaurant near (latitude, longitude).

    Keeps active restaurants within `distance_km` that serve `cuisine` (any
    cuisine when None), sorts them by display rating and chooses uniformly
    among the best SURPRISE_POOL_SIZE.
    """
    wanted = cuisine.strip().lower() if cuisine else None

    matches: list[tuple[Restaurant, float]] = []
    for restaurant in await list_restaurants(db):
        dist = haversine_km(latitude, longitude, restaurant.latitude, restaurant.longitude)
        if dist > distance_km:
            continue
        if wanted and wanted not in {c.lower() for c in (restaurant.cuisine or [])}:
            continue
        matches.append((restaurant, dist))

    if not matches:
        return SurprisePick(restaurant=None, distance_km=None, match_count=0)

    matches.sort(key=lambda m: _display_rating(m[0]), reverse=True)
    pool = matches[:SURPRISE_POOL_SIZE]
    restaurant, dist = (rng or random).choice(pool)

    return SurprisePick(
        restaurant=restaurant,
        distance_km=round(dist, 1),
        match_count=len(matches),
    )

