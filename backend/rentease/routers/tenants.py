"""Tenants router."""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from rentease.core.database import get_db
from rentease.core.security import require_registered_user, AuthenticatedUser
from rentease.models.property import Property
from rentease.models.tenant import Tenant
from rentease.models.enums import TenantStatus
from rentease.schemas.base import PropertySummary
from rentease.schemas.tenant import (
    TenantCreate,
    TenantUpdate,
    TenantResponse,
    TenantListResponse,
    LeaseCheckResponse,
)
from rentease.services.leases import LeaseService, display_status, lease_completion_due

router = APIRouter(prefix="/tenants", tags=["tenants"])


def tenant_response(
    tenant: Tenant,
    prop: Optional[Property] = None,
    today: Optional[date] = None,
) -> TenantResponse:
    """Build a tenant response with its read-time projections."""
    today = today or date.today()
    data = TenantResponse.model_validate(tenant)
    data.display_status = display_status(tenant, today)
    data.lease_completion_due = lease_completion_due(tenant, today)
    if prop:
        data.property = PropertySummary.model_validate(prop)
    return data


def _with_property(owner_id: UUID):
    return (
        select(Tenant, Property)
        .outerjoin(
            Property,
            and_(Property.id == Tenant.property_id, Property.owner_id == owner_id),
        )
        .where(Tenant.owner_id == owner_id)
    )


@router.get("", response_model=TenantListResponse)
async def list_tenants(
    status: Optional[TenantStatus] = None,
    property_id: Optional[UUID] = None,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """List the owner's tenants, newest first.

    Expired leases are reconciled first. The status filter matches the
    stored status.
    """
    await LeaseService(db).reconcile_expired_leases(current_user.db_user_id)

    query = _with_property(current_user.db_user_id)
    if status:
        query = query.where(Tenant.status == status)
    if property_id:
        query = query.where(Tenant.property_id == property_id)

    query = query.order_by(Tenant.created_at.desc())

    result = await db.execute(query)
    today = date.today()
    tenants = [tenant_response(tenant, prop, today) for tenant, prop in result.all()]

    return TenantListResponse(tenants=tenants, total=len(tenants))


@router.post("/check-expired-leases", response_model=LeaseCheckResponse)
async def check_expired_leases(
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Run the expired lease check now and report what changed."""
    result = await LeaseService(db).reconcile_expired_leases(current_user.db_user_id)

    if result is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Expired lease check failed",
        )

    return LeaseCheckResponse(
        tenants_deactivated=result.tenant_ids,
        properties_released=result.property_ids,
        properties_repaired=result.repaired_property_ids,
    )


@router.get("/{tenant_id}", response_model=TenantResponse)
async def get_tenant(
    tenant_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Get a tenant by ID."""
    await LeaseService(db).reconcile_expired_leases(current_user.db_user_id)

    result = await db.execute(
        _with_property(current_user.db_user_id).where(Tenant.id == tenant_id)
    )
    row = result.one_or_none()

    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tenant not found")

    tenant, prop = row
    return tenant_response(tenant, prop)


@router.post("", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
async def create_tenant(
    data: TenantCreate,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Create a tenant and mark its property occupied."""
    leases = LeaseService(db)
    prop = await leases.get_property(data.property_id, current_user.db_user_id)

    if not prop:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Property not found or does not belong to you",
        )

    tenant = Tenant(owner_id=current_user.db_user_id, **data.model_dump())
    tenant = await leases.create_tenant(tenant, prop)

    return tenant_response(tenant, prop)


@router.patch("/{tenant_id}", response_model=TenantResponse)
async def update_tenant(
    tenant_id: UUID,
    data: TenantUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Update tenant fields. Occupancy is left to the next reconciliation."""
    leases = LeaseService(db)
    tenant = await leases.get_tenant(tenant_id, current_user.db_user_id)

    if not tenant:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tenant not found")

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(tenant, field, value)

    await db.commit()
    await db.refresh(tenant)

    prop = await leases.get_property(tenant.property_id, current_user.db_user_id)
    return tenant_response(tenant, prop)


@router.delete("/{tenant_id}")
async def delete_tenant(
    tenant_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Delete a tenant and make its property available."""
    leases = LeaseService(db)
    tenant = await leases.get_tenant(tenant_id, current_user.db_user_id)

    if not tenant:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tenant not found")

    await leases.delete_tenant(tenant)

    return {"tenant_id": str(tenant_id), "message": "Tenant deleted successfully"}


@router.patch("/{tenant_id}/lease-complete", response_model=TenantResponse)
async def mark_lease_complete(
    tenant_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Confirm a lease is complete so the next check can release the property."""
    leases = LeaseService(db)
    tenant = await leases.mark_lease_complete(tenant_id, current_user.db_user_id)

    if not tenant:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tenant not found")

    prop = await leases.get_property(tenant.property_id, current_user.db_user_id)
    return tenant_response(tenant, prop)
