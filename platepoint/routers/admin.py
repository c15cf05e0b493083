"""
Admin endpoints — protected by the X-Service-Token header.
Seeds the restaurant table from Google Places for a given city.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from platepoint.database import get_db
from platepoint.routers.deps import verify_service_token
from platepoint.schemas.admin import SeedRequest, SeedResponse
from platepoint.services.places import (
    PlacesError,
    PlacesNotConfigured,
    seed_restaurants_for_city,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/seed-restaurants")
async def seed_status() -> dict:
    return {"message": "Seed restaurants endpoint is available"}


@router.post(
    "/seed-restaurants",
    response_model=SeedResponse,
    dependencies=[Depends(verify_service_token)],
)
async def seed_restaurants(
    body: SeedRequest,
    db: AsyncSession = Depends(get_db),
) -> SeedResponse:
    """Fetch up to `limit` restaurants near `city` and insert them."""
    try:
        counts = await seed_restaurants_for_city(body.city, db, limit=body.limit)
    except PlacesNotConfigured as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        )
    except PlacesError as exc:
        logger.error("Seeding %s failed: %s", body.city, exc)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))

    return SeedResponse(
        success=True,
        message=f"Seeded restaurants for {body.city}",
        created=counts["created"],
        failed=counts["failed"],
    )
