"""Shared router dependencies — session user resolution and service token check."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from platepoint.config import settings
from platepoint.database import get_db
from platepoint.models import User
from platepoint.services.users import authenticate_token

logger = logging.getLogger(__name__)


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def session_tokens(request: Request) -> list[str]:
    """Candidate session tokens: the auth cookie first, then an Authorization bearer header."""
    candidates = [
        request.cookies.get(settings.auth_cookie_name),
        bearer_token(request.headers.get("authorization")),
    ]
    return [t for t in dict.fromkeys(candidates) if t]


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the session user or raise 401. A stale cookie does not hide a valid bearer token."""
    tokens = session_tokens(request)
    if not tokens:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    for token in tokens:
        user = await authenticate_token(token, db)
        if user is not None:
            return user

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired session",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def verify_service_token(
    x_service_token: Optional[str] = Header(default=None, alias="X-Service-Token"),
) -> None:
    """Verify that the admin service token matches the configured secret."""
    if not x_service_token or x_service_token != settings.service_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid service token",
            headers={"WWW-Authenticate": "Bearer"},
        )
