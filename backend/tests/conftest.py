"""Shared fixtures: per-test SQLite database, seeded owners, API client."""

import os
import tempfile
from datetime import date, datetime, timedelta
from pathlib import Path

# Settings are read at import time by rentease.core.database and rentease.main
_IMPORT_DIR = Path(tempfile.mkdtemp(prefix="rentease-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_IMPORT_DIR / 'import.db'}"
os.environ["FIREBASE_PROJECT_ID"] = "rentease-test"
os.environ["ALLOWED_ORIGINS"] = "http://localhost:3000"
os.environ["DEBUG"] = "true"
os.environ["LEASE_SWEEP_ENABLED"] = "false"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from rentease.core.database import Base, get_db
from rentease.core.security import AuthenticatedUser, verify_firebase_token
from rentease.models import User, Property, Tenant, RentPayment, MaintenanceRequest
from rentease.models.enums import (
    PropertyType,
    PropertyStatus,
    TenantStatus,
    MaintenanceCategory,
)
import rentease.services  # noqa: F401  registers the rent payment status hooks


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


async def _create_user(db: AsyncSession, uid: str, email: str, full_name: str) -> User:
    user = User(firebase_uid=uid, email=email, full_name=full_name)
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def owner(db):
    return await _create_user(db, "owner-uid", "owner@example.com", "Olivia Owner")


@pytest_asyncio.fixture
async def other_owner(db):
    return await _create_user(db, "other-uid", "other@example.com", "Oscar Other")


@pytest.fixture
def today():
    return date.today()


@pytest.fixture
def make_property(db):
    """Insert a property for an owner."""

    async def _make(owner_id, **overrides) -> Property:
        values = dict(
            owner_id=owner_id,
            name="Maple Court 4B",
            property_type=PropertyType.APARTMENT,
            street="12 Maple Street",
            city="Springfield",
            state="IL",
            zip_code="62701",
            bedrooms=2,
            bathrooms=1.5,
            rent_amount=1450.0,
        )
        values.update(overrides)
        prop = Property(**values)
        db.add(prop)
        await db.commit()
        await db.refresh(prop)
        return prop

    return _make


@pytest.fixture
def make_tenant(db, today):
    """Insert a tenant on a property; by default the property becomes occupied by it."""

    async def _make(prop: Property, occupy: bool = True, **overrides) -> Tenant:
        values = dict(
            owner_id=prop.owner_id,
            first_name="Tara",
            last_name="Tenant",
            email="tara@example.com",
            phone="555-0100",
            property_id=prop.id,
            lease_start_date=today - timedelta(days=365),
            lease_end_date=today + timedelta(days=30),
            rent_amount=prop.rent_amount,
            status=TenantStatus.ACTIVE,
        )
        values.update(overrides)
        tenant = Tenant(**values)
        db.add(tenant)
        await db.flush()
        if occupy:
            prop.status = PropertyStatus.OCCUPIED
            prop.tenant_id = tenant.id
        await db.commit()
        await db.refresh(tenant)
        await db.refresh(prop)
        return tenant

    return _make


@pytest.fixture
def make_payment(db):
    """Insert a rent payment for a tenant."""

    async def _make(tenant: Tenant, **overrides) -> RentPayment:
        due = overrides.pop("due_date", datetime.utcnow() + timedelta(days=10))
        values = dict(
            owner_id=tenant.owner_id,
            tenant_id=tenant.id,
            property_id=tenant.property_id,
            amount=tenant.rent_amount,
            due_date=due,
            month=due.month,
            year=due.year,
        )
        values.update(overrides)
        payment = RentPayment(**values)
        db.add(payment)
        await db.commit()
        await db.refresh(payment)
        return payment

    return _make


@pytest.fixture
def make_maintenance(db):
    """Insert a maintenance request for a property."""

    async def _make(prop: Property, **overrides) -> MaintenanceRequest:
        values = dict(
            owner_id=prop.owner_id,
            property_id=prop.id,
            title="Leaking kitchen tap",
            description="Drips constantly",
            category=MaintenanceCategory.PLUMBING,
        )
        values.update(overrides)
        request = MaintenanceRequest(**values)
        db.add(request)
        await db.commit()
        await db.refresh(request)
        return request

    return _make


@pytest.fixture
def identity(owner):
    """Firebase identity the API client authenticates as. Tests may mutate it."""
    return {"uid": owner.firebase_uid, "email": owner.email}


@pytest_asyncio.fixture
async def client(session_factory, identity):
    from rentease.main import app

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def override_verify_firebase_token():
        return AuthenticatedUser(
            uid=identity["uid"],
            email=identity.get("email"),
            email_verified=True,
        )

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[verify_firebase_token] = override_verify_firebase_token

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test/v1") as ac:
        yield ac

    app.dependency_overrides.clear()
