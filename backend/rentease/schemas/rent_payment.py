"""Rent payment schemas."""

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
from rentease.models.enums import PaymentStatus, PaymentMethod


class RentPaymentCreate(BaseSchema):
    """Create a rent payment. status is derived, not accepted."""

    tenant_id: UUID
    property_id: UUID
    amount: float = Field(..., ge=0)
    due_date: NaiveUTCDateTime
    paid_date: Optional[NaiveUTCDateTime] = None
    late_fee: float = Field(default=0, ge=0)
    payment_method: PaymentMethod = PaymentMethod.ONLINE
    reference: str = Field("", max_length=255)
    notes: Optional[str] = Field(None, max_length=500)
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2020)


class RentPaymentUpdate(UpdateSchema):
    """Update rent payment.

    status is re-derived when paid_date or due_date is part of the update;
    otherwise an explicit status (e.g. late) is stored as given.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"paid_date", "notes"})

    amount: Optional[float] = Field(None, ge=0)
    due_date: Optional[NaiveUTCDateTime] = None
    paid_date: Optional[NaiveUTCDateTime] = None
    late_fee: Optional[float] = Field(None, ge=0)
    status: Optional[PaymentStatus] = None
    payment_method: Optional[PaymentMethod] = None
    reference: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = Field(None, max_length=500)
    month: Optional[int] = Field(None, ge=1, le=12)
    year: Optional[int] = Field(None, ge=2020)


class MarkPaidRequest(BaseSchema):
    """Mark a payment as paid now."""

    payment_method: Optional[PaymentMethod] = None
    reference: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = Field(None, max_length=500)


class RentPaymentResponse(BaseSchema, IDMixin, TimestampMixin):
    """Rent payment response."""

    owner_id: UUID
    tenant_id: UUID
    property_id: UUID
    amount: float
    late_fee: float
    total_amount: float
    due_date: datetime
    paid_date: Optional[datetime] = None
    status: PaymentStatus
    days_overdue: int = 0
    payment_method: PaymentMethod
    reference: str = ""
    notes: Optional[str] = None
    month: int
    year: int

    # Denormalized fields for list views
    tenant: Optional[TenantSummary] = None
    property: Optional[PropertySummary] = None


class RentPaymentListResponse(BaseSchema):
    """Response for rent payment list endpoint."""

    payments: list[RentPaymentResponse]
    total: int
