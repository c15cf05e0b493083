"""
Restaurant endpoints.

  GET  /api/restaurants               — all active restaurants with aggregates
  GET  /api/restaurants?userId=<uuid> — restaurants that user has rated
  POST /api/restaurants               — add a restaurant with its first rating
  GET  /api/restaurants/rankings      — home-page rankings
  GET  /api/restaurants/surprise      — random pick among nearby top-rated
  GET  /api/restaurants/{id}          — detail page: restaurant + ratings
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from platepoint.database import get_db
from platepoint.models import User
from platepoint.routers.deps import get_current_user
from platepoint.schemas.rating import RatingRead, RatingWithUser
from platepoint.schemas.restaurant import (
    RankingsResponse,
    RestaurantCreate,
    RestaurantCreated,
    RestaurantDetail,
    RestaurantDetailResponse,
    RestaurantRatedByUser,
    RestaurantRead,
    SurpriseResponse,
)
from platepoint.services import restaurants as restaurant_service
from platepoint.services.ratings import list_ratings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/restaurants", tags=["restaurants"])


@router.get("", response_model=None)
async def list_restaurants(
    user_id: Optional[UUID] = Query(default=None, alias="userId"),
    db: AsyncSession = Depends(get_db),
) -> list:
    """All active restaurants, or only those rated by `userId` when given."""
    if user_id is not None:
        rated = await restaurant_service.list_restaurants_rated_by(user_id, db)
        logger.debug("Restaurants rated by %s: %d", user_id, len(rated))
        return [RestaurantRatedByUser.model_validate(r) for r in rated]

    restaurants = await restaurant_service.list_restaurants(db)
    return [RestaurantRead.model_validate(r) for r in restaurants]


@router.post("", response_model=RestaurantCreated, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    body: RestaurantCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> RestaurantCreated:
    """Create a restaurant together with the signed-in user's rating of it."""
    try:
        restaurant, rating = await restaurant_service.create_restaurant_with_rating(
            body.model_dump(), user, db
        )
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Failed to create restaurant %r: %s", body.name, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create restaurant",
        ) from exc

    return RestaurantCreated(
        **RestaurantRead.model_validate(restaurant).model_dump(),
        user_rating=RatingRead.model_validate(rating),
    )


@router.get("/rankings", response_model=RankingsResponse)
async def rankings(
    limit: int = Query(default=3, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
) -> RankingsResponse:
    """Top-rated and recently added restaurants plus site-wide averages."""
    return await restaurant_service.get_rankings(db, limit=limit)


@router.get("/surprise", response_model=SurpriseResponse)
async def surprise(
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    distance_km: float = Query(default=20.0, gt=0, le=500, alias="distanceKm"),
    cuisine: Optional[str] = Query(default=None),
    db: AsyncSession = Depends(get_db),
) -> SurpriseResponse:
    """Random pick among the best-rated restaurants within `distanceKm` of (lat, lng)."""
    if cuisine is not None and cuisine.strip().lower() == "any":
        cuisine = None

    pick = await restaurant_service.surprise_me(
        lat, lng, db, distance_km=distance_km, cuisine=cuisine
    )
    return SurpriseResponse(
        recommendation=(
            RestaurantRead.model_validate(pick.restaurant) if pick.restaurant else None
        ),
        distance_km=pick.distance_km,
        match_count=pick.match_count,
    )


@router.get("/{restaurant_id}", response_model=RestaurantDetailResponse)
async def get_restaurant(
    restaurant_id: int,
    db: AsyncSession = Depends(get_db),
) -> RestaurantDetailResponse:
    """Restaurant detail with its aggregate and every rating, newest first."""
    restaurant = await restaurant_service.get_restaurant(restaurant_id, db)
    if restaurant is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Restaurant not found",
        )

    ratings = await list_ratings(restaurant_id, db)
    return RestaurantDetailResponse(
        restaurant=RestaurantDetail.model_validate(restaurant),
        ratings=[RatingWithUser.model_validate(r) for r in ratings],
    )
