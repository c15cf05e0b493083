"""Pydantic schemas for admin seeding endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from platepoint.config import settings


class SeedRequest(BaseModel):
    """Body for POST /api/admin/seed-restaurants."""

    city: str = Field(..., min_length=1, max_length=100)
    limit: int = Field(default=settings.seed_default_limit, ge=1, le=200)


class SeedResponse(BaseModel):
    success: bool
    message: str
    created: int = 0
    failed: int = 0
