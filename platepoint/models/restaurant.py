"""Restaurant ORM model."""

from sqlalchemy import (
    Column, Integer, Text, String, Boolean,
    JSON, TIMESTAMP, Double, Enum, Index,
)
from sqlalchemy.orm import relationship

from platepoint.database import Base
from platepoint.utils.timeutil import utcnow

PRICE_RANGES = ("$", "$$", "$$$", "$$$$")


class Restaurant(Base):
    """
    A restaurant added by a user or seeded from Google Places.
    Ratings live in their own table; the averages shown in listings come
    from the one-to-one RestaurantAggregate row.
    """

    __tablename__ = "restaurants"
    __table_args__ = (
        Index("restaurants_location_index", "latitude", "longitude"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    address = Column(String(255), nullable=False)

    cuisine = Column(JSON, nullable=False, default=list)
    latitude = Column(Double, nullable=False)
    longitude = Column(Double, nullable=False)

    price_range = Column(Enum(*PRICE_RANGES, name="price_range"), nullable=True)
    phone = Column(String(50), nullable=True)
    website = Column(Text, nullable=True)
    photos = Column(JSON, nullable=True, default=list)

    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    # Relationships
    ratings = relationship(
        "Rating", back_populates="restaurant", cascade="all, delete-orphan"
    )
    aggregate = relationship(
        "RestaurantAggregate",
        back_populates="restaurant",
        uselist=False,
        cascade="all, delete-orphan",
    )
