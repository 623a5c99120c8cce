"""API tests for /tenants."""

from datetime import timedelta

import pytest

from rentease.models.enums import PropertyStatus, TenantStatus
from rentease.models.tenant import Tenant


def tenant_data(property_id, start, end, **overrides):
    data = {
        "first_name": "Leo",
        "last_name": "Park",
        "email": "leo.park@example.com",
        "phone": "555-0142",
        "property_id": str(property_id),
        "lease_start_date": start.isoformat(),
        "lease_end_date": end.isoformat(),
        "rent_amount": 1450,
    }
    data.update(overrides)
    return data


class TestTenantCreate:
    async def test_create_occupies_property(self, client, owner, make_property, today):
        prop = await make_property(owner.id)

        response = await client.post(
            "/tenants", json=tenant_data(prop.id, today, today + timedelta(days=365))
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "active"
        assert body["full_name"] == "Leo Park"
        assert body["lease_complete"] is False
        assert body["property"]["id"] == str(prop.id)

        prop_body = (await client.get(f"/properties/{prop.id}")).json()
        assert prop_body["status"] == "occupied"
        assert prop_body["tenant_id"] == body["id"]

    async def test_foreign_property_is_rejected(self, client, other_owner, make_property, today):
        theirs = await make_property(other_owner.id)

        response = await client.post(
            "/tenants", json=tenant_data(theirs.id, today, today + timedelta(days=30))
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Property not found or does not belong to you"

    async def test_end_must_follow_start(self, client, owner, make_property, today):
        prop = await make_property(owner.id)

        response = await client.post("/tenants", json=tenant_data(prop.id, today, today))

        assert response.status_code == 422

    async def test_invalid_email_is_rejected(self, client, owner, make_property, today):
        prop = await make_property(owner.id)

        response = await client.post(
            "/tenants",
            json=tenant_data(prop.id, today, today + timedelta(days=30), email="not-an-email"),
        )

        assert response.status_code == 422


class TestTenantReads:
    async def test_display_status_during_lease(self, client, db, owner, make_property, make_tenant, today):
        prop = await make_property(owner.id)
        tenant = await make_tenant(prop, lease_end_date=today + timedelta(days=10))
        tenant.status = TenantStatus.INACTIVE
        await db.commit()

        body = (await client.get(f"/tenants/{tenant.id}")).json()

        assert body["status"] == "inactive"
        assert body["display_status"] == "active"
        assert body["lease_completion_due"] is False

    async def test_ended_unconfirmed_lease_is_flagged(self, client, owner, make_property, make_tenant, today):
        prop = await make_property(owner.id)
        tenant = await make_tenant(prop, lease_end_date=today - timedelta(days=3))

        body = (await client.get("/tenants")).json()

        listed = body["tenants"][0]
        assert listed["id"] == str(tenant.id)
        assert listed["status"] == "active"
        assert listed["display_status"] == "active"
        assert listed["lease_completion_due"] is True

    async def test_list_reconciles_expired_leases(self, client, owner, make_property, make_tenant, today):
        prop = await make_property(owner.id)
        await make_tenant(prop, lease_end_date=today - timedelta(days=1), lease_complete=True)

        body = (await client.get("/tenants")).json()

        assert body["total"] == 1
        assert body["tenants"][0]["status"] == "inactive"
        assert body["tenants"][0]["display_status"] == "inactive"

    async def test_deleted_property_leaves_tenant_without_summary(
        self, client, owner, make_property, make_tenant
    ):
        prop = await make_property(owner.id)
        tenant = await make_tenant(prop)
        await client.delete(f"/properties/{prop.id}")

        body = (await client.get(f"/tenants/{tenant.id}")).json()

        assert body["property_id"] == str(prop.id)
        assert body["property"] is None

    async def test_other_owners_tenant_is_not_found(self, client, other_owner, make_property, make_tenant):
        tenant = await make_tenant(await make_property(other_owner.id))

        assert (await client.get(f"/tenants/{tenant.id}")).status_code == 404
        assert (await client.patch(f"/tenants/{tenant.id}/lease-complete")).status_code == 404


class TestLeaseLifecycle:
    async def test_complete_then_check_releases_property(
        self, client, owner, make_property, make_tenant, today
    ):
        prop = await make_property(owner.id)
        tenant = await make_tenant(prop, lease_end_date=today - timedelta(days=2))

        response = await client.patch(f"/tenants/{tenant.id}/lease-complete")
        assert response.status_code == 200
        assert response.json()["lease_complete"] is True
        assert response.json()["status"] == "active"

        response = await client.post("/tenants/check-expired-leases")

        assert response.status_code == 200
        body = response.json()
        assert body["tenants_deactivated"] == [str(tenant.id)]
        assert body["properties_released"] == [str(prop.id)]
        assert body["properties_repaired"] == []

        prop_body = (await client.get(f"/properties/{prop.id}")).json()
        assert prop_body["status"] == "available"

    async def test_check_with_nothing_to_do(self, client, owner, make_property, make_tenant):
        await make_tenant(await make_property(owner.id))

        body = (await client.post("/tenants/check-expired-leases")).json()

        assert body["tenants_deactivated"] == []
        assert body["properties_released"] == []

    async def test_update_fields(self, client, owner, make_property, make_tenant):
        tenant = await make_tenant(await make_property(owner.id))

        response = await client.patch(
            f"/tenants/{tenant.id}", json={"phone": "555-0999", "status": "moved_out"}
        )

        assert response.status_code == 200
        assert response.json()["phone"] == "555-0999"
        assert response.json()["status"] == "moved_out"

    @pytest.mark.parametrize("field", ["lease_end_date", "lease_start_date", "first_name", "status"])
    async def test_null_for_required_field_is_rejected(
        self, client, owner, make_property, make_tenant, field
    ):
        tenant = await make_tenant(await make_property(owner.id))

        response = await client.patch(f"/tenants/{tenant.id}", json={field: None})

        assert response.status_code == 422
        body = (await client.get(f"/tenants/{tenant.id}")).json()
        assert body[field] is not None

    async def test_delete_frees_property(self, client, session_factory, owner, make_property, make_tenant):
        prop = await make_property(owner.id)
        tenant = await make_tenant(prop)

        response = await client.delete(f"/tenants/{tenant.id}")

        assert response.status_code == 200
        assert (await client.get(f"/tenants/{tenant.id}")).status_code == 404
        prop_body = (await client.get(f"/properties/{prop.id}")).json()
        assert prop_body["status"] == "available"
        assert prop_body["tenant_id"] is None

        async with session_factory() as session:
            assert await session.get(Tenant, tenant.id) is None

    async def test_moved_out_tenant_property_is_repaired(
        self, client, owner, make_property, make_tenant
    ):
        prop = await make_property(owner.id)
        tenant = await make_tenant(prop)
        await client.patch(f"/tenants/{tenant.id}", json={"status": "moved_out"})

        body = (await client.post("/tenants/check-expired-leases")).json()

        assert body["properties_repaired"] == [str(prop.id)]
        prop_body = (await client.get(f"/properties/{prop.id}")).json()
        assert prop_body["status"] == PropertyStatus.AVAILABLE.value
