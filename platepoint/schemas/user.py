"""Pydantic schemas for sign-up, login and profile endpoints."""

from __future__ import annotations

from uuid import UUID
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _normalise_email(value: str) -> str:
    return value.strip().lower()


class SignupRequest(BaseModel):
    """Body for POST /api/auth/signup."""

    email: str = Field(..., max_length=320, pattern=_EMAIL_PATTERN)
    password: str = Field(..., min_length=8, max_length=72)
    display_name: Optional[str] = Field(default=None, max_length=100)
    home_city: Optional[str] = Field(default=None, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def _lower_email(cls, v: object) -> object:
        return _normalise_email(v) if isinstance(v, str) else v


class LoginRequest(BaseModel):
    """Body for POST /api/auth/login."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def _lower_email(cls, v: object) -> object:
        return _normalise_email(v) if isinstance(v, str) else v


class UserUpdate(BaseModel):
    """
    Body for POST /api/update-user.
    Only the listed fields may change; anything else is rejected.
    """

    model_config = ConfigDict(extra="forbid")

    email: Optional[str] = Field(default=None, max_length=320, pattern=_EMAIL_PATTERN)
    password: Optional[str] = Field(default=None, min_length=8, max_length=72)
    display_name: Optional[str] = Field(default=None, max_length=100)
    home_city: Optional[str] = Field(default=None, max_length=100)

    @field_validator("email", mode="before")
    @classmethod
    def _lower_email(cls, v: object) -> object:
        return _normalise_email(v) if isinstance(v, str) else v


class UserRead(BaseModel):
    """Public view of a user — never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    uuid: UUID
    email: str
    display_name: Optional[str] = None
    home_city: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class UserRef(BaseModel):
    """Rater identity embedded in rating listings."""

    model_config = ConfigDict(from_attributes=True)

    uuid: UUID
    email: str


class TokenPayload(BaseModel):
    """Claims carried in the session JWT."""

    uuid: UUID
    email: str
    iat: Optional[int] = None
    exp: Optional[int] = None


class LoginResponse(BaseModel):
    message: str
    token: str
    user: UserRead


class UpdateUserResponse(BaseModel):
    success: bool
    user: UserRead
