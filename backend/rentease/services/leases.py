"""Lease lifecycle service.

Keeps Tenant.status and the Property.tenant_id back-reference consistent:

- Expired lease reconciliation (active + lease_complete + ended -> inactive,
  property -> available), run on demand by listing routes and daily by the
  scheduler.
- Occupancy side effects of tenant creation and deletion.
- Read-time display status projection.

Reconciliation is best-effort enrichment of a read. It never raises: a failure
is logged and the caller proceeds with possibly stale occupancy.
"""

import asyncio
import logging
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from sqlalchemy import select, update, or_
from sqlalchemy.ext.asyncio import AsyncSession

from rentease.models.property import Property
from rentease.models.tenant import Tenant
from rentease.models.enums import PropertyStatus, TenantStatus

logger = logging.getLogger(__name__)

# Per-owner guard around the select-then-update sequence. Only serialises
# passes inside one process; cross-process passes rely on the updates being
# idempotent. An entry lives only while a pass holds or awaits it.
_owner_locks: dict[uuid.UUID, tuple[asyncio.Lock, int]] = {}


@asynccontextmanager
async def _owner_lock(owner_id: uuid.UUID):
    lock, users = _owner_locks.get(owner_id, (None, 0))
    if lock is None:
        lock = asyncio.Lock()
    _owner_locks[owner_id] = (lock, users + 1)
    try:
        async with lock:
            yield
    finally:
        lock, users = _owner_locks[owner_id]
        if users == 1:
            del _owner_locks[owner_id]
        else:
            _owner_locks[owner_id] = (lock, users - 1)


@dataclass
class ReconcileResult:
    """What a reconciliation pass changed for one owner."""

    owner_id: uuid.UUID
    reference_date: date
    tenant_ids: list[uuid.UUID] = field(default_factory=list)
    property_ids: list[uuid.UUID] = field(default_factory=list)
    repaired_property_ids: list[uuid.UUID] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.tenant_ids or self.property_ids or self.repaired_property_ids)


def display_status(tenant: Tenant, today: Optional[date] = None) -> TenantStatus:
    """Point-in-time status shown to users.

    ACTIVE while the lease window is open, regardless of the stored value;
    the stored status once the lease end date has passed.
    """
    today = today or date.today()
    if tenant.lease_end_date >= today:
        return TenantStatus.ACTIVE
    return tenant.status


def lease_completion_due(tenant: Tenant, today: Optional[date] = None) -> bool:
    """True when the lease has ended but the owner has not confirmed completion."""
    today = today or date.today()
    return tenant.lease_end_date < today and not tenant.lease_complete


class LeaseService:
    """Service for lease lifecycle transitions, scoped by owner."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def reconcile_expired_leases(
        self,
        owner_id: uuid.UUID,
        today: Optional[date] = None,
    ) -> Optional[ReconcileResult]:
        """Deactivate completed, ended leases for one owner and free their properties.

        A tenant is reconcilable when it belongs to owner_id, is ACTIVE, has
        lease_end_date strictly before `today` and lease_complete set.

        Args:
            owner_id: Owner partition to reconcile. Never derived here.
            today: Reference date. Defaults to the local server date; the
                scheduled sweep passes the UTC date.

        Returns:
            ReconcileResult, or None if the pass failed (already logged).
        """
        today = today or date.today()

        try:
            async with _owner_lock(owner_id):
                result = await self._reconcile(owner_id, today)
                await self.db.commit()
        except Exception as e:
            logger.error(f"[LEASES] Expired lease check failed for owner {owner_id}: {e}")
            try:
                await self.db.rollback()
            except Exception as rollback_error:
                logger.error(f"[LEASES] Rollback failed for owner {owner_id}: {rollback_error}")
            return None

        if result.tenant_ids:
            logger.info(
                f"[LEASES] Owner {owner_id}: {len(result.tenant_ids)} completed expired "
                f"lease(s) set inactive, {len(result.property_ids)} property(ies) now available"
            )
        if result.repaired_property_ids:
            logger.warning(
                f"[LEASES] Owner {owner_id}: repaired occupancy of "
                f"{len(result.repaired_property_ids)} property(ies) without an active tenant"
            )
        return result

    async def _reconcile(self, owner_id: uuid.UUID, today: date) -> ReconcileResult:
        result = ReconcileResult(owner_id=owner_id, reference_date=today)
        now = datetime.utcnow()

        rows = await self.db.execute(
            select(Tenant.id, Tenant.property_id).where(
                Tenant.owner_id == owner_id,
                Tenant.status == TenantStatus.ACTIVE,
                Tenant.lease_end_date < today,
                Tenant.lease_complete.is_(True),
            )
        )
        expired = rows.all()

        if expired:
            result.tenant_ids = [row.id for row in expired]
            # Distinct, order preserved
            candidate_property_ids = list(dict.fromkeys(row.property_id for row in expired))

            await self.db.execute(
                update(Tenant)
                .where(
                    Tenant.id.in_(result.tenant_ids),
                    Tenant.owner_id == owner_id,
                )
                .values(status=TenantStatus.INACTIVE, updated_at=now)
            )

            # A property that has since been handed to another tenant keeps it
            vacated = await self.db.execute(
                select(Property.id).where(
                    Property.id.in_(candidate_property_ids),
                    Property.owner_id == owner_id,
                    or_(
                        Property.tenant_id.is_(None),
                        Property.tenant_id.in_(result.tenant_ids),
                    ),
                )
            )
            result.property_ids = list(vacated.scalars().all())

            if result.property_ids:
                await self.db.execute(
                    update(Property)
                    .where(Property.id.in_(result.property_ids))
                    .values(status=PropertyStatus.AVAILABLE, tenant_id=None, updated_at=now)
                )

        result.repaired_property_ids = await self._repair_stale_occupancy(owner_id, now)
        return result

    async def _repair_stale_occupancy(self, owner_id: uuid.UUID, now: datetime) -> list[uuid.UUID]:
        """Free OCCUPIED properties whose tenant is missing or no longer active.

        Re-derives occupancy from property state, so a half-applied update or a
        manual tenant status change heals on the next pass.
        """
        rows = await self.db.execute(
            select(Property.id)
            .outerjoin(Tenant, Tenant.id == Property.tenant_id)
            .where(
                Property.owner_id == owner_id,
                Property.status == PropertyStatus.OCCUPIED,
                or_(Tenant.id.is_(None), Tenant.status != TenantStatus.ACTIVE),
            )
        )
        stale_ids = list(rows.scalars().all())
        if not stale_ids:
            return []

        await self.db.execute(
            update(Property)
            .where(Property.id.in_(stale_ids), Property.owner_id == owner_id)
            .values(status=PropertyStatus.AVAILABLE, tenant_id=None, updated_at=now)
        )
        return stale_ids

    async def get_property(self, property_id: uuid.UUID, owner_id: uuid.UUID) -> Optional[Property]:
        result = await self.db.execute(
            select(Property).where(
                Property.id == property_id,
                Property.owner_id == owner_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_tenant(self, tenant_id: uuid.UUID, owner_id: uuid.UUID) -> Optional[Tenant]:
        result = await self.db.execute(
            select(Tenant).where(
                Tenant.id == tenant_id,
                Tenant.owner_id == owner_id,
            )
        )
        return result.scalar_one_or_none()

    async def create_tenant(self, tenant: Tenant, prop: Property) -> Tenant:
        """Insert a tenant and mark its property occupied by it."""
        self.db.add(tenant)
        await self.db.flush()

        prop.status = PropertyStatus.OCCUPIED
        prop.tenant_id = tenant.id

        await self.db.commit()
        await self.db.refresh(tenant)
        return tenant

    async def delete_tenant(self, tenant: Tenant) -> None:
        """Vacate the tenant's property, then delete the tenant."""
        await self.db.execute(
            update(Property)
            .where(
                Property.id == tenant.property_id,
                Property.owner_id == tenant.owner_id,
            )
            .values(status=PropertyStatus.AVAILABLE, tenant_id=None, updated_at=datetime.utcnow())
        )
        await self.db.delete(tenant)
        await self.db.commit()

    async def mark_lease_complete(self, tenant_id: uuid.UUID, owner_id: uuid.UUID) -> Optional[Tenant]:
        """Arm the lease-complete gate. Status and property are left for the next pass."""
        tenant = await self.get_tenant(tenant_id, owner_id)
        if not tenant:
            return None

        tenant.lease_complete = True
        await self.db.commit()
        await self.db.refresh(tenant)

        logger.info(f"[LEASES] Lease marked complete for tenant {tenant_id}")
        return tenant
