"""User service — registration, login and profile updates."""

from __future__ import annotations

import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from platepoint.models import User
from platepoint.services.errors import ConflictError, NotFoundError
from platepoint.services.security import (
    hash_password,
    sign_token,
    verify_password,
    verify_token,
)

logger = logging.getLogger(__name__)


async def get_user_by_email(email: str, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def register_user(
    email: str,
    password: str,
    db: AsyncSession,
    display_name: Optional[str] = None,
    home_city: Optional[str] = None,
) -> User:
    """Create an account. Raises ConflictError if the e-mail is taken."""
    if await get_user_by_email(email, db) is not None:
        raise ConflictError("Email is already registered")

    user = User(
        email=email.strip().lower(),
        password_hash=hash_password(password),
        display_name=display_name,
        home_city=home_city,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as exc:
        # Lost a race with a concurrent sign-up for the same address
        await db.rollback()
        raise ConflictError("Email is already registered") from exc

    logger.info("Registered user %s", user.uuid)
    return user


async def login_user(
    email: str, password: str, db: AsyncSession
) -> Optional[tuple[User, str]]:
    """Return (user, signed JWT) for valid credentials, otherwise None."""
    user = await get_user_by_email(email, db)
    if user is None or not verify_password(password, user.password_hash):
        return None
    token = sign_token({"uuid": str(user.uuid), "email": user.email})
    return user, token


async def authenticate_token(token: str, db: AsyncSession) -> Optional[User]:
    """Resolve a session token to its user; None for bad tokens or deleted users."""
    payload = verify_token(token)
    if payload is None:
        return None
    return await db.get(User, payload.uuid)


async def update_user(uid: UUID, fields: dict[str, Any], db: AsyncSession) -> User:
    """
    Apply a partial profile update. `fields` holds only the keys the client
    sent; a new password is re-hashed before it is stored.
    """
    user = await db.get(User, uid)
    if user is None:
        raise NotFoundError("User not found")

    if fields.get("email") and fields["email"] != user.email:
        if await get_user_by_email(fields["email"], db) is not None:
            raise ConflictError("Email is already registered")
        user.email = fields["email"]

    if fields.get("password"):
        user.password_hash = hash_password(fields["password"])

    for key in ("display_name", "home_city"):
        if key in fields:
            setattr(user, key, fields[key])

    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        raise ConflictError("Email is already registered") from exc

    await db.refresh(user)
    logger.info("Updated user %s (%s)", uid, ", ".join(sorted(fields)) or "no fields")
    return user
