"""Property schemas."""

from typing import ClassVar, Optional
from uuid import UUID

from pydantic import Field, field_validator

from rentease.schemas.base import (
    BaseSchema,
    IDMixin,
    TimestampMixin,
    TenantSummary,
    UpdateSchema,
)
from rentease.models.enums import PropertyType, PropertyStatus


def _not_occupied(value: Optional[PropertyStatus]) -> Optional[PropertyStatus]:
    if value == PropertyStatus.OCCUPIED:
        raise ValueError("occupied is set by assigning a tenant, not directly")
    return value


class PropertyCreate(BaseSchema):
    """Create a new property."""

    name: str = Field(..., min_length=1, max_length=100)
    property_type: PropertyType

    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=50)
    zip_code: str = Field(..., min_length=1, max_length=20)

    bedrooms: int = Field(..., ge=0)
    bathrooms: float = Field(..., ge=0)
    square_feet: Optional[float] = Field(None, ge=0)
    rent_amount: float = Field(..., ge=0)

    status: PropertyStatus = PropertyStatus.AVAILABLE
    description: Optional[str] = Field(None, max_length=500)
    amenities: list[str] = Field(default_factory=list)

    @field_validator("status")
    @classmethod
    def validate_status(cls, value):
        """Occupancy is only granted through tenant assignment."""
        return _not_occupied(value)


class PropertyUpdate(UpdateSchema):
    """Update property."""

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"square_feet", "description"})

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    property_type: Optional[PropertyType] = None
    street: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    state: Optional[str] = Field(None, min_length=1, max_length=50)
    zip_code: Optional[str] = Field(None, min_length=1, max_length=20)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[float] = Field(None, ge=0)
    square_feet: Optional[float] = Field(None, ge=0)
    rent_amount: Optional[float] = Field(None, ge=0)
    status: Optional[PropertyStatus] = None
    description: Optional[str] = Field(None, max_length=500)
    amenities: Optional[list[str]] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, value):
        """Occupancy is only granted through tenant assignment."""
        return _not_occupied(value)


class PropertyResponse(BaseSchema, IDMixin, TimestampMixin):
    """Property response."""

    owner_id: UUID
    name: str
    property_type: PropertyType
    street: str
    city: str
    state: str
    zip_code: str
    full_address: str
    bedrooms: int
    bathrooms: float
    square_feet: Optional[float] = None
    rent_amount: float
    status: PropertyStatus
    tenant_id: Optional[UUID] = None
    description: Optional[str] = None
    amenities: list[str] = []

    # Denormalized current tenant
    tenant: Optional[TenantSummary] = None


class PropertyListResponse(BaseSchema):
    """Response for property list endpoint."""

    properties: list[PropertyResponse]
    total: int


class PropertyStatsResponse(BaseSchema):
    """Property counts by status."""

    total: int
    available: int
    occupied: int
    unavailable: int
