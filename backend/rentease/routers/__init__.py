"""API Routers for RentEase."""

from rentease.routers.auth import router as auth_router
from rentease.routers.properties import router as properties_router
from rentease.routers.tenants import router as tenants_router
from rentease.routers.rent_payments import router as rent_payments_router
from rentease.routers.maintenance import router as maintenance_router
from rentease.routers.dashboard import router as dashboard_router

__all__ = [
    "auth_router",
    "properties_router",
    "tenants_router",
    "rent_payments_router",
    "maintenance_router",
    "dashboard_router",
]
