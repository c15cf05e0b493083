"""
Aggregate service — keeps restaurant_aggregates in step with ratings.

update_restaurant_aggregate() runs inside the caller's transaction right
after a rating insert, so the rating and its summary commit together.

Averages:
  avg_<axis>  = sum(axis) / n                      rounded half-up to 2 dp
  avg_overall = (sum(service)+sum(food)+sum(amb)) / 3n   rounded half-up to 2 dp
A restaurant with no ratings has every field at 0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from platepoint.models import Rating, Restaurant, RestaurantAggregate

logger = logging.getLogger(__name__)

_TWO_PLACES = Decimal("0.01")
_ZERO = Decimal("0.00")


@dataclass(frozen=True)
class AggregateValues:
    """Computed summary, independent of the ORM row it is written to."""

    total_ratings: int
    avg_service: Decimal
    avg_foodquality: Decimal
    avg_ambiance: Decimal
    avg_overall: Decimal


def _avg(total: int, count: int) -> Decimal:
    return (Decimal(total) / Decimal(count)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def compute_aggregate(
    count: int, sum_service: int, sum_food: int, sum_ambiance: int
) -> AggregateValues:
    """Pure reduction from counts and sums to the stored averages."""
    if count == 0:
        return AggregateValues(0, _ZERO, _ZERO, _ZERO, _ZERO)
    return AggregateValues(
        total_ratings=count,
        avg_service=_avg(sum_service, count),
        avg_foodquality=_avg(sum_food, count),
        avg_ambiance=_avg(sum_ambiance, count),
        avg_overall=_avg(sum_service + sum_food + sum_ambiance, count * 3),
    )


async def _rating_totals(restaurant_id: int, db: AsyncSession) -> tuple[int, int, int, int]:
    result = await db.execute(
        select(
            func.count(Rating.id),
            func.coalesce(func.sum(Rating.rating_service), 0),
            func.coalesce(func.sum(Rating.rating_foodquality), 0),
            func.coalesce(func.sum(Rating.rating_ambiance), 0),
        ).where(Rating.restaurant_id == restaurant_id)
    )
    count, s_service, s_food, s_ambiance = result.one()
    return int(count), int(s_service), int(s_food), int(s_ambiance)


async def update_restaurant_aggregate(
    restaurant_id: int, db: AsyncSession
) -> RestaurantAggregate:
    """
    Find-or-create the aggregate row and rewrite it from the current ratings.
    Flushes but does not commit — the caller owns the transaction.
    """
    aggregate = await db.get(RestaurantAggregate, restaurant_id)
    if aggregate is None:
        aggregate = RestaurantAggregate(restaurant_id=restaurant_id)
        db.add(aggregate)

    values = compute_aggregate(*await _rating_totals(restaurant_id, db))

    aggregate.total_ratings = values.total_ratings
    aggregate.avg_service = values.avg_service
    aggregate.avg_foodquality = values.avg_foodquality
    aggregate.avg_ambiance = values.avg_ambiance
    aggregate.avg_overall = values.avg_overall
    await db.flush()

    logger.debug(
        "Aggregate for restaurant %s: n=%d overall=%s",
        restaurant_id, values.total_ratings, values.avg_overall,
    )
    return aggregate


async def rebuild_all_aggregates(db: AsyncSession) -> int:
    """
    Recompute the aggregate of every restaurant and commit.
    Used after bulk imports; returns the number of restaurants processed.
    """
    result = await db.execute(select(Restaurant.id).order_by(Restaurant.id))
    restaurant_ids = list(result.scalars())

    for restaurant_id in restaurant_ids:
        await update_restaurant_aggregate(restaurant_id, db)

    await db.commit()
    logger.info("Rebuilt aggregates for %d restaurants", len(restaurant_ids))
    return len(restaurant_ids)
