"""
Authentication endpoints.

Sessions are JWTs. Login stores the token in an httpOnly `authToken` cookie
(1 h, SameSite=Lax) and also returns it in the body for API clients that
prefer an `Authorization: Bearer` header.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from platepoint.config import settings
from platepoint.database import get_db
from platepoint.routers.deps import bearer_token
from platepoint.schemas.user import (
    LoginRequest,
    LoginResponse,
    SignupRequest,
    UserRead,
)
from platepoint.services.errors import ConflictError
from platepoint.services.security import verify_token
from platepoint.services.users import login_user, register_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    db: AsyncSession = Depends(get_db),
) -> UserRead:
    """Create an account. 409 when the e-mail is already registered."""
    try:
        user = await register_user(
            body.email,
            body.password,
            db,
            display_name=body.display_name,
            home_city=body.home_city,
        )
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return UserRead.model_validate(user)


@router.post("/login")
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Check credentials and set the session cookie."""
    result = await login_user(body.email, body.password, db)
    if result is None:
        logger.info("Failed login for %s", body.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    user, token = result
    payload = LoginResponse(
        message="Login successful",
        token=token,
        user=UserRead.model_validate(user),
    )
    response = JSONResponse(content=payload.model_dump(mode="json"))
    response.set_cookie(
        settings.auth_cookie_name,
        token,
        max_age=settings.jwt_expiry_seconds,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return response


@router.post("/logout")
async def logout() -> JSONResponse:
    response = JSONResponse(content={"message": "Logged out"})
    response.delete_cookie(settings.auth_cookie_name, path="/")
    return response


@router.get("/me")
async def me(request: Request) -> dict:
    """Return the claims of the session cookie; 401 when absent or invalid."""
    token = request.cookies.get(settings.auth_cookie_name)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="No auth token"
        )

    payload = verify_token(token)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized"
        )
    return {"message": "Authenticated", "user": payload.model_dump(mode="json")}


@router.post("/verify")
async def verify(
    authorization: Optional[str] = Header(default=None),
) -> dict:
    """Validate a bearer token and echo the identity it carries."""
    token = bearer_token(authorization)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header missing or malformed",
        )

    payload = verify_token(token)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized"
        )
    return {"user": {"uuid": str(payload.uuid), "email": payload.email}}
