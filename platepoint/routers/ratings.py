"""
Rating endpoints.

  POST /api/rating                    — rate an existing restaurant
  GET  /api/rating?restaurantId=<id>  — list a restaurant's ratings
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from platepoint.database import get_db
from platepoint.models import User
from platepoint.routers.deps import get_current_user
from platepoint.schemas.rating import RatingCreate, RatingRead, RatingWithUser
from platepoint.services.errors import ConflictError, NotFoundError
from platepoint.services.ratings import add_rating, list_ratings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/rating", tags=["ratings"])


@router.post("", response_model=RatingRead, status_code=status.HTTP_201_CREATED)
async def create_rating(
    body: RatingCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> RatingRead:
    """One rating per user per restaurant; the aggregate is refreshed in the same transaction."""
    try:
        rating = await add_rating(body.model_dump(), user, db)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error(
            "Failed to add rating for restaurant %d: %s", body.restaurant_id, exc
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add rating",
        ) from exc

    return RatingRead.model_validate(rating)


@router.get("", response_model=list[RatingWithUser])
async def get_ratings(
    restaurant_id: Optional[int] = Query(default=None, alias="restaurantId"),
    db: AsyncSession = Depends(get_db),
) -> list[RatingWithUser]:
    if not restaurant_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Restaurant ID is required",
        )

    ratings = await list_ratings(restaurant_id, db)
    return [RatingWithUser.model_validate(r) for r in ratings]
