"""Properties router."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, func, case
from sqlalchemy.ext.asyncio import AsyncSession

from rentease.core.database import get_db
from rentease.core.security import require_registered_user, AuthenticatedUser
from rentease.models.property import Property
from rentease.models.tenant import Tenant
from rentease.models.enums import PropertyStatus
from rentease.schemas.base import TenantSummary
from rentease.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyListResponse,
    PropertyStatsResponse,
)
from rentease.services.leases import LeaseService

router = APIRouter(prefix="/properties", tags=["properties"])


def _property_response(prop: Property, tenant: Optional[Tenant] = None) -> PropertyResponse:
    data = PropertyResponse.model_validate(prop)
    if tenant:
        data.tenant = TenantSummary.model_validate(tenant)
    return data


@router.get("", response_model=PropertyListResponse)
async def list_properties(
    status: Optional[PropertyStatus] = None,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """List the owner's properties, newest first, with their current tenant.

    Expired leases are reconciled first so occupancy is current.
    """
    await LeaseService(db).reconcile_expired_leases(current_user.db_user_id)

    query = (
        select(Property, Tenant)
        .outerjoin(Tenant, Property.tenant_id == Tenant.id)
        .where(Property.owner_id == current_user.db_user_id)
    )
    if status:
        query = query.where(Property.status == status)

    query = query.order_by(Property.created_at.desc())

    result = await db.execute(query)
    properties = [_property_response(prop, tenant) for prop, tenant in result.all()]

    return PropertyListResponse(properties=properties, total=len(properties))


@router.get("/stats", response_model=PropertyStatsResponse)
async def get_property_stats(
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Property counts by status."""
    result = await db.execute(
        select(
            func.count(Property.id).label("total"),
            func.sum(case((Property.status == PropertyStatus.AVAILABLE, 1), else_=0)).label("available"),
            func.sum(case((Property.status == PropertyStatus.OCCUPIED, 1), else_=0)).label("occupied"),
            func.sum(case((Property.status == PropertyStatus.UNAVAILABLE, 1), else_=0)).label("unavailable"),
        )
        .where(Property.owner_id == current_user.db_user_id)
    )
    stats = result.one()

    return PropertyStatsResponse(
        total=stats.total or 0,
        available=stats.available or 0,
        occupied=stats.occupied or 0,
        unavailable=stats.unavailable or 0,
    )


@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(
    property_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Get a property by ID."""
    await LeaseService(db).reconcile_expired_leases(current_user.db_user_id)

    result = await db.execute(
        select(Property, Tenant)
        .outerjoin(Tenant, Property.tenant_id == Tenant.id)
        .where(
            Property.id == property_id,
            Property.owner_id == current_user.db_user_id,
        )
    )
    row = result.one_or_none()

    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Property not found")

    prop, tenant = row
    return _property_response(prop, tenant)


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(
    data: PropertyCreate,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Create a new property (owner-scoped)."""
    prop = Property(owner_id=current_user.db_user_id, **data.model_dump())
    db.add(prop)
    await db.commit()
    await db.refresh(prop)

    return _property_response(prop)


@router.patch("/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: UUID,
    data: PropertyUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Update a property.

    Moving an occupied property to another status releases its tenant reference.
    """
    leases = LeaseService(db)
    prop = await leases.get_property(property_id, current_user.db_user_id)

    if not prop:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Property not found")

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(prop, field, value)

    if "status" in update_data and prop.status != PropertyStatus.OCCUPIED:
        prop.tenant_id = None

    await db.commit()
    await db.refresh(prop)

    tenant = await leases.get_tenant(prop.tenant_id, current_user.db_user_id) if prop.tenant_id else None
    return _property_response(prop, tenant)


@router.delete("/{property_id}")
async def delete_property(
    property_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Delete a property. Tenants keep their (now dangling) property reference."""
    prop = await LeaseService(db).get_property(property_id, current_user.db_user_id)

    if not prop:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Property not found")

    await db.delete(prop)
    await db.commit()

    return {"property_id": str(property_id), "message": "Property deleted successfully"}
