"""Dashboard schemas."""

from rentease.schemas.base import BaseSchema
from rentease.schemas.maintenance import MaintenanceResponse


class DashboardStatsResponse(BaseSchema):
    """Landlord overview.

    active_tenants counts tenants by display status, so a tenant whose lease
    window is still open counts as active whatever its stored status.
    """

    total_properties: int
    active_tenants: int
    pending_payments: int
    open_maintenance: int
    recent_maintenance: list[MaintenanceResponse] = []
