"""SQLAlchemy models for RentEase."""

from rentease.models.user import User
from rentease.models.property import Property
from rentease.models.tenant import Tenant
from rentease.models.rent_payment import RentPayment
from rentease.models.maintenance import MaintenanceRequest

__all__ = [
    "User",
    "Property",
    "Tenant",
    "RentPayment",
    "MaintenanceRequest",
]
