"""Auth and profile schemas."""

from typing import Optional
from uuid import UUID

from pydantic import Field

from rentease.schemas.base import BaseSchema, IDMixin, TimestampMixin


class RegisterRequest(BaseSchema):
    """Create the local profile for a verified Firebase identity."""

    full_name: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)


class ProfileUpdate(BaseSchema):
    """Update own profile."""

    full_name: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)


class UserResponse(BaseSchema, IDMixin, TimestampMixin):
    """Local user profile."""

    firebase_uid: str
    email: str
    full_name: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool


class CurrentUserResponse(BaseSchema):
    """Current authenticated user info."""

    uid: str
    email: str | None = None
    email_verified: bool = False
    db_user_id: UUID | None = None
    full_name: str | None = None
