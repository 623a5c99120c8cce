"""Auth router - local profile for Firebase identities."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rentease.core.database import get_db
from rentease.core.security import (
    verify_firebase_token,
    get_current_user,
    require_registered_user,
    AuthenticatedUser,
)
from rentease.models.user import User
from rentease.schemas.auth import (
    RegisterRequest,
    ProfileUpdate,
    UserResponse,
    CurrentUserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    auth_user: AuthenticatedUser = Depends(verify_firebase_token),
):
    """Create the local profile for the verified Firebase identity.

    Idempotent: an already registered identity gets its existing profile back.
    """
    result = await db.execute(
        select(User).where(User.firebase_uid == auth_user.uid)
    )
    user = result.scalar_one_or_none()
    if user:
        return user

    if not auth_user.email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Firebase account has no email address",
        )

    user = User(
        firebase_uid=auth_user.uid,
        email=auth_user.email,
        full_name=data.full_name,
        phone=data.phone,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info(f"[AUTH] Registered user {user.id} for uid {auth_user.uid}")
    return user


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user_info(
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    """Get current authenticated user info."""
    return CurrentUserResponse(
        uid=current_user.uid,
        email=current_user.email,
        email_verified=current_user.email_verified,
        db_user_id=current_user.db_user_id,
        full_name=current_user.full_name,
    )


@router.patch("/me", response_model=UserResponse)
async def update_profile(
    data: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Update own profile."""
    user = await db.get(User, current_user.db_user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(user, field, value)

    await db.commit()
    await db.refresh(user)
    return user
