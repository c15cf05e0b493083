"""User ORM model — account identity and login credentials."""

import uuid

from sqlalchemy import Column, String, Text, TIMESTAMP, Uuid
from sqlalchemy.orm import relationship

from platepoint.database import Base
from platepoint.utils.timeutil import utcnow


class User(Base):
    """
    A registered account. Ratings reference users by uuid, never by e-mail,
    so e-mail changes through /api/update-user do not touch rating rows.
    """

    __tablename__ = "users"

    uuid = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(Text, nullable=False)

    display_name = Column(String(100), nullable=True)
    home_city = Column(String(100), nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    # Relationships
    ratings = relationship(
        "Rating", back_populates="user", cascade="all, delete-orphan"
    )
