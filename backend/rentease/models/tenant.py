"""Tenant model (one lease per tenant record)."""

import uuid
from datetime import datetime, date

from sqlalchemy import String, DateTime, Date, ForeignKey, Enum as SQLEnum, Boolean, Float, Uuid, Index
from sqlalchemy.orm import Mapped, mapped_column

from rentease.core.database import Base
from rentease.models.enums import TenantStatus


class Tenant(Base):
    """A renter assigned to a property for a lease window."""

    __tablename__ = "tenants"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Identity
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)

    # Previous / mailing address
    street: Mapped[str] = mapped_column(String(255), default="")
    city: Mapped[str] = mapped_column(String(100), default="")
    state: Mapped[str] = mapped_column(String(50), default="")
    zip_code: Mapped[str] = mapped_column(String(20), default="")

    # Emergency contact
    emergency_contact_name: Mapped[str] = mapped_column(String(100), default="")
    emergency_contact_phone: Mapped[str] = mapped_column(String(50), default="")
    emergency_contact_relationship: Mapped[str] = mapped_column(String(50), default="")

    # No FK: the reference is left dangling when the property is deleted.
    property_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    # Lease window
    lease_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    lease_end_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    # Manual gate: an ended lease is only expired once the owner confirms it
    lease_complete: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    rent_amount: Mapped[float] = mapped_column(Float, nullable=False)

    status: Mapped[TenantStatus] = mapped_column(
        SQLEnum(TenantStatus),
        default=TenantStatus.ACTIVE,
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    __table_args__ = (
        # Expired lease scan: owner + status + end date
        Index("ix_tenants_owner_status_end", "owner_id", "status", "lease_end_date"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def lease_duration_days(self) -> int:
        if self.lease_start_date and self.lease_end_date:
            return abs((self.lease_end_date - self.lease_start_date).days)
        return 0
