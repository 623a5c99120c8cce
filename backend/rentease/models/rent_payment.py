"""RentPayment model."""

import math
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, ForeignKey, Enum as SQLEnum, Text, Integer, Float, Uuid, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from rentease.core.database import Base
from rentease.models.enums import PaymentStatus, PaymentMethod


class RentPayment(Base):
    """A rent charge for one billing period.

    status is derived from paid_date / due_date whenever either changes
    (see rentease.services.payments).
    """

    __tablename__ = "rent_payments"

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
    tenant_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    property_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    amount: Mapped[float] = mapped_column(Float, nullable=False)
    late_fee: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    due_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    paid_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    status: Mapped[PaymentStatus] = mapped_column(
        SQLEnum(PaymentStatus),
        default=PaymentStatus.PENDING,
        nullable=False,
        index=True,
    )
    payment_method: Mapped[PaymentMethod] = mapped_column(
        SQLEnum(PaymentMethod),
        default=PaymentMethod.ONLINE,
        nullable=False,
    )
    reference: Mapped[str] = mapped_column(String(255), default="")
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Billing period
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    __table_args__ = (
        CheckConstraint("month >= 1 AND month <= 12", name="ck_rent_payment_month_range"),
        CheckConstraint("year >= 2020", name="ck_rent_payment_year_min"),
    )

    @property
    def total_amount(self) -> float:
        return (self.amount or 0) + (self.late_fee or 0)

    @property
    def days_overdue(self) -> int:
        """Whole days past due, reported only for overdue/late payments."""
        if self.status not in (PaymentStatus.OVERDUE, PaymentStatus.LATE):
            return 0
        days = math.ceil((datetime.utcnow() - self.due_date).total_seconds() / 86400)
        return max(0, days)
