"""Tests for the scheduled expired lease sweep."""

from datetime import timedelta

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from rentease.core.config import Settings
from rentease.models.enums import PropertyStatus, TenantStatus
from rentease.services.jobs import LEASE_SWEEP_JOB_ID, create_scheduler, run_lease_sweep


def _settings(**overrides) -> Settings:
    values = dict(
        database_url="sqlite+aiosqlite:///:memory:",
        firebase_project_id="rentease-test",
        lease_sweep_enabled=True,
    )
    values.update(overrides)
    return Settings(**values)


class TestRunLeaseSweep:
    async def test_sweeps_every_owner(
        self, db, session_factory, owner, other_owner, make_property, make_tenant, today
    ):
        mine = await make_property(owner.id)
        theirs = await make_property(other_owner.id, name="Oak House")
        my_tenant = await make_tenant(mine, lease_end_date=today - timedelta(days=1), lease_complete=True)
        their_tenant = await make_tenant(theirs, lease_end_date=today - timedelta(days=1), lease_complete=True)

        results = await run_lease_sweep(session_factory=session_factory, today=today)

        assert {r.owner_id for r in results} == {owner.id, other_owner.id}
        assert all(r.reference_date == today for r in results)

        for tenant, prop in ((my_tenant, mine), (their_tenant, theirs)):
            await db.refresh(tenant)
            await db.refresh(prop)
            assert tenant.status == TenantStatus.INACTIVE
            assert prop.status == PropertyStatus.AVAILABLE

    async def test_owner_without_changes_is_reported_unchanged(
        self, session_factory, owner, make_property, make_tenant, today
    ):
        await make_tenant(await make_property(owner.id))

        results = await run_lease_sweep(session_factory=session_factory, today=today)

        assert len(results) == 1
        assert not results[0].changed

    async def test_no_owners(self, session_factory):
        assert await run_lease_sweep(session_factory=session_factory) == []


class TestCreateScheduler:
    def test_registers_daily_job(self):
        scheduler = create_scheduler(_settings(lease_sweep_hour=0, lease_sweep_minute=0))

        assert isinstance(scheduler, AsyncIOScheduler)
        job = scheduler.get_job(LEASE_SWEEP_JOB_ID)
        assert job is not None
        assert isinstance(job.trigger, CronTrigger)
        assert job.coalesce is True
        assert job.max_instances == 1

        fields = {f.name: str(f) for f in job.trigger.fields}
        assert fields["hour"] == "0"
        assert fields["minute"] == "0"
        assert str(job.trigger.timezone) == "UTC"

    def test_disabled_sweep_registers_nothing(self):
        scheduler = create_scheduler(_settings(lease_sweep_enabled=False))
        assert scheduler.get_jobs() == []
