"""Dashboard router - aggregate stats for landlord overview."""

from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from rentease.core.database import get_db
from rentease.core.security import require_registered_user, AuthenticatedUser
from rentease.models.maintenance import MaintenanceRequest
from rentease.models.property import Property
from rentease.models.rent_payment import RentPayment
from rentease.models.tenant import Tenant
from rentease.models.enums import MaintenanceStatus, PaymentStatus, TenantStatus
from rentease.routers.maintenance import maintenance_response, with_related
from rentease.schemas.dashboard import DashboardStatsResponse
from rentease.services.leases import LeaseService, display_status

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

RECENT_MAINTENANCE_LIMIT = 5


@router.get("/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats(
    db: AsyncSession = Depends(get_db),
    current_user: AuthenticatedUser = Depends(require_registered_user),
):
    """Get aggregate dashboard statistics for the owner.

    Returns:
    - Total properties
    - Active tenants (by display status, so open lease windows count)
    - Pending rent payments
    - Open maintenance requests, plus the five most recent requests
    """
    owner_id = current_user.db_user_id
    await LeaseService(db).reconcile_expired_leases(owner_id)

    total_properties = await db.scalar(
        select(func.count(Property.id)).where(Property.owner_id == owner_id)
    )

    tenant_rows = await db.execute(
        select(Tenant.status, Tenant.lease_end_date).where(Tenant.owner_id == owner_id)
    )
    today = date.today()
    active_tenants = sum(
        1 for row in tenant_rows.all()
        if display_status(row, today) == TenantStatus.ACTIVE
    )

    pending_payments = await db.scalar(
        select(func.count(RentPayment.id)).where(
            RentPayment.owner_id == owner_id,
            RentPayment.status == PaymentStatus.PENDING,
        )
    )

    open_maintenance = await db.scalar(
        select(func.count(MaintenanceRequest.id)).where(
            MaintenanceRequest.owner_id == owner_id,
            MaintenanceRequest.status == MaintenanceStatus.OPEN,
        )
    )

    recent = await db.execute(
        with_related(owner_id)
        .order_by(MaintenanceRequest.requested_date.desc())
        .limit(RECENT_MAINTENANCE_LIMIT)
    )

    return DashboardStatsResponse(
        total_properties=total_properties or 0,
        active_tenants=active_tenants,
        pending_payments=pending_payments or 0,
        open_maintenance=open_maintenance or 0,
        recent_maintenance=[maintenance_response(r, prop, tenant) for r, prop, tenant in recent.all()],
    )
