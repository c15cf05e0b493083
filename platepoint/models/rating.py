"""Rating ORM model — one user's scores for one restaurant visit."""

from sqlalchemy import (
    Column, Integer, Text, TIMESTAMP, ForeignKey, Enum, Uuid,
    CheckConstraint, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from platepoint.database import Base
from platepoint.utils.timeutil import utcnow

MEALS = ("Breakfast", "Brunch", "Lunch", "Dinner")
RATING_AXES = ("rating_service", "rating_foodquality", "rating_ambiance")
# Columns a client supplies when rating a visit
RATING_INPUT_FIELDS = (*RATING_AXES, "meal", "notes", "visit_date")
RATING_MIN = 1
RATING_MAX = 10


class Rating(Base):
    """
    Scores are integers on a 1–10 scale for each axis.
    A user rates a given restaurant at most once.
    """

    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint(
            "restaurant_id", "user_id", name="ratings_restaurant_user_unique"
        ),
        *(
            CheckConstraint(
                f"{axis} BETWEEN {RATING_MIN} AND {RATING_MAX}",
                name=f"ck_{axis}_range",
            )
            for axis in RATING_AXES
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    restaurant_id = Column(
        Integer,
        ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    rating_service = Column(Integer, nullable=False)
    rating_foodquality = Column(Integer, nullable=False)
    rating_ambiance = Column(Integer, nullable=False)

    meal = Column(Enum(*MEALS, name="meal_type"), nullable=False)
    visit_date = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    notes = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    # Relationships
    restaurant = relationship("Restaurant", back_populates="ratings")
    user = relationship("User", back_populates="ratings")
