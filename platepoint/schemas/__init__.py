"""Pydantic schemas package."""

from platepoint.schemas.user import (
    LoginRequest,
    LoginResponse,
    SignupRequest,
    TokenPayload,
    UpdateUserResponse,
    UserRead,
    UserRef,
    UserUpdate,
)
from platepoint.schemas.rating import (
    AggregateRead,
    RatingCreate,
    RatingRead,
    RatingWithUser,
)
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
from platepoint.schemas.admin import SeedRequest, SeedResponse

__all__ = [
    "LoginRequest", "LoginResponse", "SignupRequest", "TokenPayload",
    "UpdateUserResponse", "UserRead", "UserRef", "UserUpdate",
    "AggregateRead", "RatingCreate", "RatingRead", "RatingWithUser",
    "RankingsResponse", "RestaurantCreate", "RestaurantCreated",
    "RestaurantDetail", "RestaurantDetailResponse", "RestaurantRatedByUser",
    "RestaurantRead", "SurpriseResponse",
    "SeedRequest", "SeedResponse",
]
