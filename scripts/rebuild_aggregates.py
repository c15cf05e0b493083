"""
rebuild_aggregates.py — recompute restaurant_aggregates from the ratings table.

Use after bulk imports or manual edits to ratings.

Usage:
    python scripts/rebuild_aggregates.py
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from platepoint.database import AsyncSessionLocal, engine
from platepoint.services.aggregates import rebuild_all_aggregates

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


async def main() -> None:
    async with AsyncSessionLocal() as session:
        count = await rebuild_all_aggregates(session)
    logger.info("Rebuilt aggregates for %d restaurants", count)
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
