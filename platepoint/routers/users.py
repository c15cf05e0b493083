"""Profile update endpoint for the signed-in user."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from platepoint.database import get_db
from platepoint.models import User
from platepoint.routers.deps import get_current_user
from platepoint.schemas.user import UpdateUserResponse, UserRead, UserUpdate
from platepoint.services.errors import ConflictError, NotFoundError
from platepoint.services.users import update_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/update-user", response_model=UpdateUserResponse)
async def update_current_user(
    body: UserUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> UpdateUserResponse:
    """Partially update the authenticated user's profile."""
    try:
        updated = await update_user(user.uuid, body.model_dump(exclude_unset=True), db)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))

    return UpdateUserResponse(success=True, user=UserRead.model_validate(updated))
