"""Rent payments router."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from rentease.core.database import get_db
from rentease.core.security import require_registered_user, AuthenticatedUser
from rentease.models.property import Property
from rentease.models.rent_payment import RentPayment
from rentease.models.tenant import Tenant
from rentease.models.enums import PaymentStatus
from rentease.schemas.base import PropertySummary, TenantSummary
from rentease.schemas.rent_payment import (
    RentPaymentCreate,
    RentPaymentUpdate,
    MarkPaidRequest,
    RentPaymentResponse,
    RentPaymentListResponse,
)
from rentease.services.leases import LeaseService
from rentease.services.payments import PaymentService

router = APIRouter(prefix="/rent-payments", tags=["rent-payments"])


def _payment_response(
    payment: RentPayment,
    tenant: Optional[Tenant] = None,
    prop: Optional[Property] = None,
) -> RentPaymentResponse:
    data = RentPaymentResponse.model_validate(payment)
    if tenant:
        data.tenant = TenantSummary.model_validate(tenant)
    if prop:
        data.property = PropertySummary.model_validate(prop)
    return data


def _with_related(owner_id: UUID):
    return (
        select(RentPayment, Tenant, Property)
        .outerjoin(Tenant, and_(Tenant.id == RentPayment.tenant_id, Tenant.owner_id == owner_id))
        .outerjoin(Property, and_(Property.id == RentPayment.property_id, Property.owner_id == owner_id))
        .where(RentPayment.owner_id == owner_id)
    )


async def _load_response(db: AsyncSession, payment_id: UUID, owner_id: UUID) -> RentPaymentResponse:
    result = await db.execute(_with_related(owner_id).where(RentPayment.id == payment_id))
    row = result.one_or_none()
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rent payment not found")
    payment, tenant, prop = row
    return _payment_response(payment, tenant, prop)


@router.get("", response_model=RentPaymentListResponse)
async def list_rent_payments(
    status: Optional[PaymentStatus] = None,
    tenant_id: Optional[UUID] = None,
    property_id: Optional[UUID] = None,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """List the owner's rent payments, latest due date first."""
    query = _with_related(current_user.db_user_id)
    if status:
        query = query.where(RentPayment.status == status)
    if tenant_id:
        query = query.where(RentPayment.tenant_id == tenant_id)
    if property_id:
        query = query.where(RentPayment.property_id == property_id)

    query = query.order_by(RentPayment.due_date.desc())

    result = await db.execute(query)
    payments = [_payment_response(payment, tenant, prop) for payment, tenant, prop in result.all()]

    return RentPaymentListResponse(payments=payments, total=len(payments))


@router.get("/{payment_id}", response_model=RentPaymentResponse)
async def get_rent_payment(
    payment_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Get a rent payment by ID."""
    return await _load_response(db, payment_id, current_user.db_user_id)


@router.post("", response_model=RentPaymentResponse, status_code=status.HTTP_201_CREATED)
async def create_rent_payment(
    data: RentPaymentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Record a rent charge. Its status is derived from the dates."""
    owner_id = current_user.db_user_id
    leases = LeaseService(db)

    tenant = await leases.get_tenant(data.tenant_id, owner_id)
    if not tenant:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Tenant not found or does not belong to you",
        )

    prop = await leases.get_property(data.property_id, owner_id)
    if not prop:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Property not found or does not belong to you",
        )

    payment = RentPayment(owner_id=owner_id, **data.model_dump())
    db.add(payment)
    await db.commit()
    await db.refresh(payment)

    return _payment_response(payment, tenant, prop)


@router.patch("/{payment_id}/mark-paid", response_model=RentPaymentResponse)
async def mark_rent_payment_paid(
    payment_id: UUID,
    data: Optional[MarkPaidRequest] = None,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Mark a payment as paid now."""
    payments = PaymentService(db)
    payment = await payments.get_payment(payment_id, current_user.db_user_id)

    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rent payment not found")

    data = data or MarkPaidRequest()
    await payments.mark_paid(
        payment,
        payment_method=data.payment_method,
        reference=data.reference,
        notes=data.notes,
    )

    return await _load_response(db, payment_id, current_user.db_user_id)


@router.patch("/{payment_id}", response_model=RentPaymentResponse)
async def update_rent_payment(
    payment_id: UUID,
    data: RentPaymentUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Update a rent payment."""
    payment = await PaymentService(db).get_payment(payment_id, current_user.db_user_id)

    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rent payment not found")

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(payment, field, value)

    await db.commit()
    await db.refresh(payment)

    return await _load_response(db, payment_id, current_user.db_user_id)


@router.delete("/{payment_id}")
async def delete_rent_payment(
    payment_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Delete a rent payment."""
    payment = await PaymentService(db).get_payment(payment_id, current_user.db_user_id)

    if not payment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rent payment not found")

    await db.delete(payment)
    await db.commit()

    return {"payment_id": str(payment_id), "message": "Rent payment deleted successfully"}
