"""Rating service — store a rating, then refresh the restaurant aggregate."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from platepoint.models import Rating, Restaurant, User
from platepoint.models.rating import RATING_INPUT_FIELDS
from platepoint.services.aggregates import update_restaurant_aggregate
from platepoint.services.errors import ConflictError, NotFoundError
from platepoint.services.restaurants import invalidate_rankings

logger = logging.getLogger(__name__)


async def add_rating(data: dict[str, Any], user: User, db: AsyncSession) -> Rating:
    """
    Store a rating and refresh the restaurant's aggregate in one transaction.
    Raises NotFoundError for an unknown/inactive restaurant and ConflictError
    when the user has already rated it.
    """
    restaurant_id = data["restaurant_id"]
    restaurant = await db.get(Restaurant, restaurant_id)
    if restaurant is None or not restaurant.is_active:
        raise NotFoundError("Restaurant not found")

    existing = await db.execute(
        select(Rating.id).where(
            Rating.restaurant_id == restaurant_id, Rating.user_id == user.uuid
        )
    )
    if existing.first() is not None:
        raise ConflictError("You have already rated this restaurant")

    rating = Rating(
        restaurant_id=restaurant_id,
        user_id=user.uuid,
        **{k: data[k] for k in RATING_INPUT_FIELDS if data.get(k) is not None},
    )
    db.add(rating)
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError("You have already rated this restaurant") from exc

    await update_restaurant_aggregate(restaurant_id, db)
    await db.commit()
    invalidate_rankings()

    logger.info("Rating %s added to restaurant %s by %s", rating.id, restaurant_id, user.uuid)
    return rating


async def list_ratings(restaurant_id: int, db: AsyncSession) -> list[Rating]:
    """Ratings for a restaurant, newest first, with the rater loaded."""
    result = await db.execute(
        select(Rating)
        .where(Rating.restaurant_id == restaurant_id)
        .options(selectinload(Rating.user))
        .order_by(Rating.created_at.desc(), Rating.id.desc())
    )
    return list(result.scalars())
