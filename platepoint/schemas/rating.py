"""Pydantic schemas for ratings and the per-restaurant aggregate."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from platepoint.schemas.user import UserRef

Meal = Literal["Breakfast", "Brunch", "Lunch", "Dinner"]

# Scores must be real JSON numbers on the 1–10 scale; "7" is rejected.
Score = Annotated[int, Field(ge=1, le=10, strict=True)]


class RatingScores(BaseModel):
    """The three rating axes plus visit details, shared by create bodies."""

    rating_service: Score
    rating_foodquality: Score
    rating_ambiance: Score
    meal: Meal
    notes: Optional[str] = Field(default=None, max_length=5000)
    visit_date: Optional[datetime] = Field(default=None, alias="visitDate")

    model_config = ConfigDict(populate_by_name=True)


class RatingCreate(RatingScores):
    """Body for POST /api/rating. The rater is the authenticated user."""

    restaurant_id: int = Field(..., gt=0, alias="restaurantId")


class RatingRead(BaseModel):
    """A stored rating."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    restaurant_id: int = Field(alias="restaurantId")
    user_id: UUID = Field(alias="userId")
    rating_service: int
    rating_foodquality: int
    rating_ambiance: int
    meal: Meal
    visit_date: datetime = Field(alias="visitDate")
    notes: Optional[str] = None
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class RatingWithUser(RatingRead):
    """Rating listed on a restaurant page, with the rater's identity."""

    user: Optional[UserRef] = None


class AggregateRead(BaseModel):
    """Denormalised rating summary for one restaurant."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    restaurant_id: int = Field(alias="restaurantId")
    total_ratings: int = Field(alias="totalRatings")
    avg_service: float
    avg_foodquality: float
    avg_ambiance: float
    avg_overall: float
    display_rating: float = 0.0
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
