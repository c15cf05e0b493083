"""RestaurantAggregate ORM model — denormalised rating summary per restaurant."""

from decimal import Decimal

from sqlalchemy import Column, Integer, Numeric, TIMESTAMP, ForeignKey
from sqlalchemy.orm import relationship

from platepoint.database import Base
from platepoint.utils.timeutil import utcnow


class RestaurantAggregate(Base):
    """
    Rewritten by services.aggregates after every rating write; never edited
    by request handlers directly. Averages are on the 10-point rating scale.
    """

    __tablename__ = "restaurant_aggregates"

    restaurant_id = Column(
        Integer,
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        primary_key=True,
    )
    total_ratings = Column(Integer, nullable=False, default=0)

    avg_service = Column(Numeric(4, 2), nullable=False, default=0)
    avg_foodquality = Column(Numeric(4, 2), nullable=False, default=0)
    avg_ambiance = Column(Numeric(4, 2), nullable=False, default=0)
    avg_overall = Column(Numeric(4, 2), nullable=False, default=0, index=True)

    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    # Relationships
    restaurant = relationship("Restaurant", back_populates="aggregate")

    @property
    def display_rating(self) -> float:
        """avg_overall converted to the 5-star scale shown in the UI."""
        return float(Decimal(self.avg_overall or 0) / 2)
