"""Enumeration types for the RentEase domain model."""

from enum import Enum


class PropertyType(str, Enum):
    """Type of property."""
    APARTMENT = "apartment"
    HOUSE = "house"
    CONDO = "condo"
    TOWNHOUSE = "townhouse"
    COMMERCIAL = "commercial"


class PropertyStatus(str, Enum):
    """Availability of a property.

    OCCUPIED holds only while the property points at an active tenant.
    """
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    OCCUPIED = "occupied"


class TenantStatus(str, Enum):
    """Persisted status of a tenant."""
    ACTIVE = "active"
    INACTIVE = "inactive"      # Set by the expired lease reconciler
    MOVED_OUT = "moved_out"    # Manual
    EVICTED = "evicted"        # Manual


class PaymentStatus(str, Enum):
    """Status of a rent payment (derived from paid/due dates on write)."""
    PENDING = "pending"
    PAID = "paid"
    LATE = "late"
    OVERDUE = "overdue"


class PaymentMethod(str, Enum):
    """How a rent payment was made."""
    CASH = "cash"
    CHECK = "check"
    BANK_TRANSFER = "bank_transfer"
    ONLINE = "online"
    OTHER = "other"


class MaintenancePriority(str, Enum):
    """Priority of a maintenance request."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class MaintenanceStatus(str, Enum):
    """Status of a maintenance request."""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"      # Stamps completed_date on entry
    CANCELLED = "cancelled"


class MaintenanceCategory(str, Enum):
    """Trade category of a maintenance request."""
    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    HVAC = "hvac"
    APPLIANCE = "appliance"
    STRUCTURAL = "structural"
    OTHER = "other"
