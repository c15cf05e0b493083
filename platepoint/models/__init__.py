"""SQLAlchemy ORM models package."""

from platepoint.database import Base
from platepoint.models.user import User
from platepoint.models.restaurant import Restaurant
from platepoint.models.rating import Rating
from platepoint.models.aggregate import RestaurantAggregate

__all__ = ["Base", "User", "Restaurant", "Rating", "RestaurantAggregate"]
