"""Services for RentEase."""

from rentease.services.leases import (
    LeaseService,
    ReconcileResult,
    display_status,
    lease_completion_due,
)
from rentease.services.payments import PaymentService, derive_rent_payment_status
from rentease.services.jobs import run_lease_sweep, create_scheduler, start_scheduler

__all__ = [
    "LeaseService",
    "ReconcileResult",
    "display_status",
    "lease_completion_due",
    "PaymentService",
    "derive_rent_payment_status",
    "run_lease_sweep",
    "create_scheduler",
    "start_scheduler",
]
