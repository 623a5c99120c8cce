"""Maintenance router."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select, func, case, and_
from sqlalchemy.ext.asyncio import AsyncSession

from rentease.core.database import get_db
from rentease.core.security import require_registered_user, AuthenticatedUser
from rentease.models.maintenance import MaintenanceRequest
from rentease.models.property import Property
from rentease.models.tenant import Tenant
from rentease.models.enums import MaintenanceStatus, MaintenancePriority
from rentease.schemas.base import PropertySummary, TenantSummary
from rentease.schemas.maintenance import (
    MaintenanceCreate,
    MaintenanceUpdate,
    MaintenanceStatusUpdate,
    MaintenanceResponse,
    MaintenanceListResponse,
    MaintenanceStatsResponse,
)
from rentease.services.leases import LeaseService

router = APIRouter(prefix="/maintenance", tags=["maintenance"])


def maintenance_response(
    request: MaintenanceRequest,
    prop: Optional[Property] = None,
    tenant: Optional[Tenant] = None,
) -> MaintenanceResponse:
    data = MaintenanceResponse.model_validate(request)
    if prop:
        data.property = PropertySummary.model_validate(prop)
    if tenant:
        data.tenant = TenantSummary.model_validate(tenant)
    return data


def with_related(owner_id: UUID):
    """Maintenance requests of one owner joined to their property and tenant."""
    return (
        select(MaintenanceRequest, Property, Tenant)
        .outerjoin(
            Property,
            and_(Property.id == MaintenanceRequest.property_id, Property.owner_id == owner_id),
        )
        .outerjoin(
            Tenant,
            and_(Tenant.id == MaintenanceRequest.tenant_id, Tenant.owner_id == owner_id),
        )
        .where(MaintenanceRequest.owner_id == owner_id)
    )


def set_status(request: MaintenanceRequest, new_status: MaintenanceStatus) -> None:
    """Apply a status change, stamping completed_date on entry into RESOLVED."""
    if new_status == MaintenanceStatus.RESOLVED and request.status != MaintenanceStatus.RESOLVED:
        request.completed_date = datetime.utcnow()
    request.status = new_status


async def _load_response(db: AsyncSession, request_id: UUID, owner_id: UUID) -> MaintenanceResponse:
    result = await db.execute(with_related(owner_id).where(MaintenanceRequest.id == request_id))
    row = result.one_or_none()
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Maintenance request not found")
    request, prop, tenant = row
    return maintenance_response(request, prop, tenant)


async def _get_request(db: AsyncSession, request_id: UUID, owner_id: UUID) -> MaintenanceRequest:
    result = await db.execute(
        select(MaintenanceRequest).where(
            MaintenanceRequest.id == request_id,
            MaintenanceRequest.owner_id == owner_id,
        )
    )
    request = result.scalar_one_or_none()
    if not request:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Maintenance request not found")
    return request


@router.get("/stats", response_model=MaintenanceStatsResponse)
async def get_maintenance_stats(
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Maintenance request counts by status."""
    result = await db.execute(
        select(
            func.count(MaintenanceRequest.id).label("total"),
            func.sum(case((MaintenanceRequest.status == MaintenanceStatus.OPEN, 1), else_=0)).label("open"),
            func.sum(case((MaintenanceRequest.status == MaintenanceStatus.IN_PROGRESS, 1), else_=0)).label("in_progress"),
            func.sum(case((MaintenanceRequest.status == MaintenanceStatus.RESOLVED, 1), else_=0)).label("resolved"),
        )
        .where(MaintenanceRequest.owner_id == current_user.db_user_id)
    )
    stats = result.one()

    return MaintenanceStatsResponse(
        total=stats.total or 0,
        open=stats.open or 0,
        in_progress=stats.in_progress or 0,
        resolved=stats.resolved or 0,
    )


@router.get("", response_model=MaintenanceListResponse)
async def list_maintenance_requests(
    status: Optional[MaintenanceStatus] = None,
    priority: Optional[MaintenancePriority] = None,
    property_id: Optional[UUID] = None,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """List maintenance requests, most recently requested first."""
    query = with_related(current_user.db_user_id)
    if status:
        query = query.where(MaintenanceRequest.status == status)
    if priority:
        query = query.where(MaintenanceRequest.priority == priority)
    if property_id:
        query = query.where(MaintenanceRequest.property_id == property_id)

    query = query.order_by(MaintenanceRequest.requested_date.desc())

    result = await db.execute(query)
    requests = [maintenance_response(r, prop, tenant) for r, prop, tenant in result.all()]

    return MaintenanceListResponse(requests=requests, total=len(requests))


@router.get("/{request_id}", response_model=MaintenanceResponse)
async def get_maintenance_request(
    request_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Get a maintenance request by ID."""
    return await _load_response(db, request_id, current_user.db_user_id)


@router.post("", response_model=MaintenanceResponse, status_code=status.HTTP_201_CREATED)
async def create_maintenance_request(
    data: MaintenanceCreate,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Create a maintenance request against one of the owner's properties."""
    owner_id = current_user.db_user_id
    leases = LeaseService(db)

    prop = await leases.get_property(data.property_id, owner_id)
    if not prop:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Property not found or does not belong to you",
        )

    tenant = None
    if data.tenant_id:
        tenant = await leases.get_tenant(data.tenant_id, owner_id)
        if not tenant:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Tenant not found or does not belong to you",
            )

    request = MaintenanceRequest(owner_id=owner_id, **data.model_dump())
    db.add(request)
    await db.commit()
    await db.refresh(request)

    return maintenance_response(request, prop, tenant)


@router.patch("/{request_id}", response_model=MaintenanceResponse)
async def update_maintenance_request(
    request_id: UUID,
    data: MaintenanceUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Update a maintenance request."""
    request = await _get_request(db, request_id, current_user.db_user_id)

    update_data = data.model_dump(exclude_unset=True)
    new_status = update_data.pop("status", None)
    for field, value in update_data.items():
        setattr(request, field, value)
    if new_status is not None:
        set_status(request, new_status)

    await db.commit()
    await db.refresh(request)

    return await _load_response(db, request_id, current_user.db_user_id)


@router.patch("/{request_id}/status", response_model=MaintenanceResponse)
async def update_maintenance_status(
    request_id: UUID,
    data: MaintenanceStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Change only the status of a maintenance request."""
    request = await _get_request(db, request_id, current_user.db_user_id)

    set_status(request, data.status)

    await db.commit()
    await db.refresh(request)

    return await _load_response(db, request_id, current_user.db_user_id)


@router.delete("/{request_id}")
async def delete_maintenance_request(
    request_id: UUID,
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Delete a maintenance request."""
    request = await _get_request(db, request_id, current_user.db_user_id)

    await db.delete(request)
    await db.commit()

    return {"request_id": str(request_id), "message": "Maintenance request deleted successfully"}
