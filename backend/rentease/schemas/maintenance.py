"""Maintenance schemas."""

from datetime import datetime
from typing import ClassVar, Optional
from uuid import UUID

from pydantic import Field

from rentease.schemas.base import (
    BaseSchema,
    IDMixin,
    TimestampMixin,
    NaiveUTCDateTime,
    PropertySummary,
    TenantSummary,
    UpdateSchema,
)
from rentease.models.enums import MaintenanceStatus, MaintenancePriority, MaintenanceCategory


class MaintenanceCreate(BaseSchema):
    """Create a maintenance request."""

    property_id: UUID
    tenant_id: Optional[UUID] = None
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=500)
    category: MaintenanceCategory
    priority: MaintenancePriority = MaintenancePriority.MEDIUM
    scheduled_date: Optional[NaiveUTCDateTime] = None
    estimated_cost: float = Field(default=0, ge=0)
    assigned_to: str = Field("", max_length=255)
    notes: Optional[str] = Field(None, max_length=500)


class MaintenanceUpdate(UpdateSchema):
    """Update maintenance request."""

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"scheduled_date", "notes"})

    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=500)
    status: Optional[MaintenanceStatus] = None
    category: Optional[MaintenanceCategory] = None
    priority: Optional[MaintenancePriority] = None
    scheduled_date: Optional[NaiveUTCDateTime] = None
    estimated_cost: Optional[float] = Field(None, ge=0)
    actual_cost: Optional[float] = Field(None, ge=0)
    assigned_to: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = Field(None, max_length=500)


class MaintenanceStatusUpdate(BaseSchema):
    """Status-only update."""

    status: MaintenanceStatus


class MaintenanceResponse(BaseSchema, IDMixin, TimestampMixin):
    """Maintenance request response."""

    owner_id: UUID
    property_id: UUID
    tenant_id: Optional[UUID] = None
    title: str
    description: str
    priority: MaintenancePriority
    status: MaintenanceStatus
    category: MaintenanceCategory
    requested_date: datetime
    scheduled_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    estimated_cost: float = 0
    actual_cost: float = 0
    assigned_to: str = ""
    notes: Optional[str] = None
    days_since_request: int = 0
    resolution_time_days: Optional[int] = None

    # Denormalized fields for list views
    property: Optional[PropertySummary] = None
    tenant: Optional[TenantSummary] = None


class MaintenanceListResponse(BaseSchema):
    """Response for maintenance list endpoint."""

    requests: list[MaintenanceResponse]
    total: int


class MaintenanceStatsResponse(BaseSchema):
    """Maintenance request counts by status."""

    total: int
    open: int
    in_progress: int
    resolved: int
