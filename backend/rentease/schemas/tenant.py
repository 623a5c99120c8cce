"""Tenant schemas."""

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field, model_validator

from rentease.schemas.base import (
    BaseSchema,
    IDMixin,
    TimestampMixin,
    PropertySummary,
    UpdateSchema,
)
from rentease.models.enums import TenantStatus


class TenantCreate(BaseSchema):
    """Assign a renter to a property."""

    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=50)

    street: str = Field("", max_length=255)
    city: str = Field("", max_length=100)
    state: str = Field("", max_length=50)
    zip_code: str = Field("", max_length=20)

    emergency_contact_name: str = Field("", max_length=100)
    emergency_contact_phone: str = Field("", max_length=50)
    emergency_contact_relationship: str = Field("", max_length=50)

    property_id: UUID
    lease_start_date: date
    lease_end_date: date
    rent_amount: float = Field(..., ge=0)

    @model_validator(mode="after")
    def validate_dates(self):
        """Lease end date must be after start date."""
        if self.lease_end_date <= self.lease_start_date:
            raise ValueError("lease_end_date must be after lease_start_date")
        return self


class TenantUpdate(UpdateSchema):
    """Update tenant. Lease dates are not re-validated against each other."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, min_length=1, max_length=50)
    street: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=50)
    zip_code: Optional[str] = Field(None, max_length=20)
    emergency_contact_name: Optional[str] = Field(None, max_length=100)
    emergency_contact_phone: Optional[str] = Field(None, max_length=50)
    emergency_contact_relationship: Optional[str] = Field(None, max_length=50)
    lease_start_date: Optional[date] = None
    lease_end_date: Optional[date] = None
    rent_amount: Optional[float] = Field(None, ge=0)
    status: Optional[TenantStatus] = None


class TenantResponse(BaseSchema, IDMixin, TimestampMixin):
    """Tenant response."""

    owner_id: UUID
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone: str
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""
    emergency_contact_relationship: str = ""
    property_id: UUID
    lease_start_date: date
    lease_end_date: date
    lease_duration_days: int
    lease_complete: bool
    rent_amount: float
    status: TenantStatus

    # Read-time projections
    display_status: Optional[TenantStatus] = None
    lease_completion_due: bool = False

    # Denormalized property (None when the property has been deleted)
    property: Optional[PropertySummary] = None


class TenantListResponse(BaseSchema):
    """Response for tenant list endpoint."""

    tenants: list[TenantResponse]
    total: int


class LeaseCheckResponse(BaseSchema):
    """Outcome of an on-demand expired lease check."""

    tenants_deactivated: list[UUID] = []
    properties_released: list[UUID] = []
    properties_repaired: list[UUID] = []
    message: str = "Expired lease check completed successfully"
