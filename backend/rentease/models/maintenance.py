"""MaintenanceRequest model."""

import math
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, ForeignKey, Enum as SQLEnum, Text, Float, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from rentease.core.database import Base
from rentease.models.enums import MaintenanceStatus, MaintenancePriority, MaintenanceCategory


class MaintenanceRequest(Base):
    """A maintenance request raised against a property."""

    __tablename__ = "maintenance_requests"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    property_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    tenant_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True, index=True)

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    priority: Mapped[MaintenancePriority] = mapped_column(
        SQLEnum(MaintenancePriority),
        default=MaintenancePriority.MEDIUM,
        nullable=False,
    )
    status: Mapped[MaintenanceStatus] = mapped_column(
        SQLEnum(MaintenanceStatus),
        default=MaintenanceStatus.OPEN,
        nullable=False,
        index=True,
    )
    category: Mapped[MaintenanceCategory] = mapped_column(
        SQLEnum(MaintenanceCategory),
        nullable=False,
    )

    # Scheduling
    requested_date: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    scheduled_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    completed_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # Costs
    estimated_cost: Mapped[float] = mapped_column(Float, default=0)
    actual_cost: Mapped[float] = mapped_column(Float, default=0)

    assigned_to: Mapped[str] = mapped_column(String(255), default="")
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    @property
    def days_since_request(self) -> int:
        if not self.requested_date:
            return 0
        return math.ceil((datetime.utcnow() - self.requested_date).total_seconds() / 86400)

    @property
    def resolution_time_days(self) -> Optional[int]:
        if self.completed_date and self.requested_date:
            return math.ceil((self.completed_date - self.requested_date).total_seconds() / 86400)
        return None
