"""Pydantic schemas for restaurant listings, detail pages and discovery."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from platepoint.schemas.rating import (
    AggregateRead,
    RatingRead,
    RatingScores,
    RatingWithUser,
)

PriceRange = Literal["$", "$$", "$$$", "$$$$"]


class RestaurantCreate(RatingScores):
    """
    Body for POST /api/restaurants.
    A restaurant is always added together with its creator's first rating.
    """

    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=255)
    cuisine: list[str] = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    price_range: Optional[PriceRange] = Field(default=None, alias="priceRange")
    phone: Optional[str] = Field(default=None, max_length=50)
    website: Optional[str] = None
    photos: list[str] = Field(default_factory=list)


class RestaurantRead(BaseModel):
    """A restaurant with its aggregate, as shown in lists and on the map."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str
    address: str
    cuisine: list[str] = Field(default_factory=list)
    latitude: float
    longitude: float
    price_range: Optional[PriceRange] = Field(default=None, alias="priceRange")
    phone: Optional[str] = None
    website: Optional[str] = None
    photos: list[str] = Field(default_factory=list)
    is_active: bool = Field(default=True, alias="isActive")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")
    aggregate: Optional[AggregateRead] = None

    # 5-star value; 0 until the restaurant has been rated
    display_rating: float = 0.0

    @model_validator(mode="after")
    def _fill_display_rating(self) -> "RestaurantRead":
        if self.aggregate is not None:
            self.display_rating = self.aggregate.display_rating
        return self


class RestaurantCreated(RestaurantRead):
    """Response for POST /api/restaurants."""

    user_rating: RatingRead = Field(alias="userRating")


class RestaurantRatedByUser(RestaurantRead):
    """Listing entry for GET /api/restaurants?userId= — only that user's ratings."""

    ratings: list[RatingRead] = Field(default_factory=list)


class RestaurantDetail(RestaurantRead):
    ratings: list[RatingWithUser] = Field(default_factory=list)


class RestaurantDetailResponse(BaseModel):
    """Response for GET /api/restaurants/{id}."""

    restaurant: RestaurantDetail
    ratings: list[RatingWithUser]


class RankingsResponse(BaseModel):
    """Home-page summary computed from the aggregate table."""

    model_config = ConfigDict(populate_by_name=True)

    total_restaurants: int = Field(alias="totalRestaurants")
    overall_average_rating: float = Field(alias="overallAverageRating")
    highest_rated: Optional[RestaurantRead] = Field(default=None, alias="highestRated")
    top_rated: list[RestaurantRead] = Field(default_factory=list, alias="topRated")
    recently_added: list[RestaurantRead] = Field(default_factory=list, alias="recentlyAdded")


class SurpriseResponse(BaseModel):
    """Response for GET /api/restaurants/surprise."""

    model_config = ConfigDict(populate_by_name=True)

    recommendation: Optional[RestaurantRead] = None
    distance_km: Optional[float] = Field(default=None, alias="distanceKm")
    match_count: int = Field(alias="matchCount")
