"""API tests for /properties."""

from datetime import timedelta

from rentease.models.enums import PropertyStatus

PROPERTY_DATA = {
    "name": "Birch Lofts 2A",
    "property_type": "apartment",
    "street": "88 Birch Avenue",
    "city": "Portland",
    "state": "OR",
    "zip_code": "97205",
    "bedrooms": 1,
    "bathrooms": 1,
    "rent_amount": 1325,
    "amenities": ["laundry", "parking"],
}


class TestPropertyCrud:
    async def test_create_and_get(self, client):
        response = await client.post("/properties", json=PROPERTY_DATA)

        assert response.status_code == 201
        created = response.json()
        assert created["status"] == "available"
        assert created["tenant_id"] is None
        assert created["full_address"] == "88 Birch Avenue, Portland, OR 97205"
        assert created["amenities"] == ["laundry", "parking"]

        response = await client.get(f"/properties/{created['id']}")
        assert response.status_code == 200
        assert response.json()["name"] == "Birch Lofts 2A"

    async def test_cannot_create_occupied(self, client):
        response = await client.post("/properties", json={**PROPERTY_DATA, "status": "occupied"})
        assert response.status_code == 422

    async def test_list_is_newest_first(self, client):
        for name in ("First", "Second"):
            await client.post("/properties", json={**PROPERTY_DATA, "name": name})

        response = await client.get("/properties")

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [p["name"] for p in body["properties"]] == ["Second", "First"]

    async def test_other_owners_property_is_not_found(self, client, other_owner, make_property):
        theirs = await make_property(other_owner.id)

        assert (await client.get(f"/properties/{theirs.id}")).status_code == 404
        assert (await client.patch(f"/properties/{theirs.id}", json={"rent_amount": 1})).status_code == 404
        assert (await client.delete(f"/properties/{theirs.id}")).status_code == 404

    async def test_update_and_delete(self, client, owner, make_property):
        prop = await make_property(owner.id)

        response = await client.patch(f"/properties/{prop.id}", json={"rent_amount": 1500})
        assert response.status_code == 200
        assert response.json()["rent_amount"] == 1500

        response = await client.delete(f"/properties/{prop.id}")
        assert response.status_code == 200
        assert (await client.get(f"/properties/{prop.id}")).status_code == 404

    async def test_marking_unavailable_releases_tenant(self, client, owner, make_property, make_tenant):
        prop = await make_property(owner.id)
        await make_tenant(prop)

        response = await client.patch(f"/properties/{prop.id}", json={"status": "unavailable"})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "unavailable"
        assert body["tenant_id"] is None
        assert body["tenant"] is None

    async def test_null_for_required_field_is_rejected(self, client, owner, make_property):
        prop = await make_property(owner.id)

        assert (await client.patch(f"/properties/{prop.id}", json={"status": None})).status_code == 422
        assert (await client.patch(f"/properties/{prop.id}", json={"rent_amount": None})).status_code == 422

        response = await client.patch(f"/properties/{prop.id}", json={"description": None})
        assert response.status_code == 200
        assert response.json()["status"] == "available"


class TestPropertyReads:
    async def test_list_includes_current_tenant(self, client, owner, make_property, make_tenant):
        prop = await make_property(owner.id)
        tenant = await make_tenant(prop)

        body = (await client.get("/properties")).json()

        listed = body["properties"][0]
        assert listed["status"] == "occupied"
        assert listed["tenant"]["id"] == str(tenant.id)
        assert listed["tenant"]["first_name"] == "Tara"

    async def test_list_reconciles_expired_leases(
        self, client, db, owner, make_property, make_tenant, today
    ):
        prop = await make_property(owner.id)
        await make_tenant(prop, lease_end_date=today - timedelta(days=1), lease_complete=True)

        body = (await client.get("/properties")).json()

        assert body["properties"][0]["status"] == "available"
        assert body["properties"][0]["tenant"] is None
        await db.refresh(prop)
        assert prop.status == PropertyStatus.AVAILABLE

    async def test_detail_reconciles_expired_leases(self, client, owner, make_property, make_tenant, today):
        prop = await make_property(owner.id)
        await make_tenant(prop, lease_end_date=today - timedelta(days=1), lease_complete=True)

        body = (await client.get(f"/properties/{prop.id}")).json()

        assert body["status"] == "available"
        assert body["tenant_id"] is None

    async def test_stats(self, client, owner, make_property, make_tenant):
        occupied = await make_property(owner.id, name="A")
        await make_tenant(occupied)
        await make_property(owner.id, name="B")
        await make_property(owner.id, name="C", status=PropertyStatus.UNAVAILABLE)

        response = await client.get("/properties/stats")

        assert response.status_code == 200
        assert response.json() == {"total": 3, "available": 1, "occupied": 1, "unavailable": 1}
