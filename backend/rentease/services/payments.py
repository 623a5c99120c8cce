"""Rent payment status derivation.

status is a derived field: it is recomputed from paid_date / due_date on any
write that changes either of them, and left alone otherwise (editing notes on
a stale pending payment does not flip it to overdue).
"""

from datetime import datetime
from typing import Any, Iterable, Optional
from uuid import UUID

from sqlalchemy import event, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

from rentease.models.enums import PaymentStatus, PaymentMethod
from rentease.models.rent_payment import RentPayment

STATUS_SOURCE_FIELDS = frozenset({"paid_date", "due_date"})


def derive_rent_payment_status(
    payment: Any,
    changed_fields: Iterable[str],
    now: Optional[datetime] = None,
) -> Optional[PaymentStatus]:
    """Recompute a payment's status from its dates.

    Rules, first match wins:
    1. paid_date set -> PAID
    2. due_date before now -> OVERDUE
    3. otherwise -> PENDING

    Returns None when neither paid_date nor due_date is among changed_fields,
    meaning the stored status must be kept.
    """
    if not STATUS_SOURCE_FIELDS.intersection(changed_fields):
        return None

    now = now or datetime.utcnow()
    if payment.paid_date is not None:
        return PaymentStatus.PAID
    if payment.due_date < now:
        return PaymentStatus.OVERDUE
    return PaymentStatus.PENDING


def _changed_fields(target: RentPayment) -> set[str]:
    state = inspect(target)
    return {
        name for name in STATUS_SOURCE_FIELDS
        if state.attrs[name].history.has_changes()
    }


@event.listens_for(RentPayment, "before_insert")
@event.listens_for(RentPayment, "before_update")
def _apply_derived_status(mapper, connection, target: RentPayment) -> None:
    status = derive_rent_payment_status(target, _changed_fields(target))
    if status is not None:
        target.status = status


class PaymentService:
    """Owner-scoped rent payment operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_payment(self, payment_id: UUID, owner_id: UUID) -> Optional[RentPayment]:
        result = await self.db.execute(
            select(RentPayment).where(
                RentPayment.id == payment_id,
                RentPayment.owner_id == owner_id,
            )
        )
        return result.scalar_one_or_none()

    async def mark_paid(
        self,
        payment: RentPayment,
        payment_method: Optional[PaymentMethod] = None,
        reference: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> RentPayment:
        """Record the payment as paid now."""
        payment.paid_date = datetime.utcnow()
        payment.status = PaymentStatus.PAID
        if payment_method is not None:
            payment.payment_method = payment_method
        if reference is not None:
            payment.reference = reference
        if notes is not None:
            payment.notes = notes

        await self.db.commit()
        await self.db.refresh(payment)
        return payment
