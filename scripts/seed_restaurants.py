"""
seed_restaurants.py — load restaurants for a city from Google Places.

Requires GOOGLE_MAPS_API_KEY in the environment (or .env).

Usage:
    python scripts/seed_restaurants.py                  # Montreal, 50 places
    python scripts/seed_restaurants.py Toronto          # another city
    python scripts/seed_restaurants.py Toronto --limit 20
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from platepoint.config import settings
from platepoint.database import AsyncSessionLocal, create_all, engine
from platepoint.services.places import PlacesError, seed_restaurants_for_city

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed restaurants from Google Places.")
    parser.add_argument("city", nargs="?", default="Montreal", help="City to seed (default: Montreal)")
    parser.add_argument(
        "--limit",
        type=int,
        default=settings.seed_default_limit,
        help=f"Maximum restaurants to insert (default: {settings.seed_default_limit})",
    )
    return parser.parse_args(argv)


async def main(city: str, limit: int) -> int:
    await create_all()
    try:
        async with AsyncSessionLocal() as session:
            counts = await seed_restaurants_for_city(city, session, limit=limit)
    except PlacesError as exc:
        logger.error("Seeding failed: %s", exc)
        return 1
    finally:
        await engine.dispose()

    logger.info("Done: %d created, %d failed", counts["created"], counts["failed"])
    return 0


if __name__ == "__main__":
    args = _parse_args()
    sys.exit(asyncio.run(main(args.city, args.limit)))
