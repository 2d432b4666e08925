import pytest
from fastapi import status
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_business_info_defaults_are_public(anon_client: AsyncClient):
    response = await anon_client.get("/api/business-info")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["default_margin"] == 30
    assert response.json()["name"] is None


@pytest.mark.asyncio
async def test_business_info_upsert(client: AsyncClient, anon_client: AsyncClient):
    first = await client.post("/api/business-info", json={"name": "Birria Fusion", "phone": "555-0199"})
    assert first.status_code == status.HTTP_200_OK
    second = await client.put("/api/business-info", json={"default_margin": 35})
    assert second.json()["name"] == "Birria Fusion"
    assert second.json()["default_margin"] == 35

    public = (await anon_client.get("/api/business-info")).json()
    assert public["name"] == "Birria Fusion"
    assert public["id"] == 1


@pytest.mark.asyncio
async def test_business_info_write_needs_login(anon_client: AsyncClient):
    response = await anon_client.post("/api/business-info", json={"name": "Nope"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_settings_round_trip(client: AsyncClient):
    assert (await client.get("/api/settings")).json() == {}

    await client.post("/api/settings", json={"key": "currency", "value": "USD"})
    await client.post("/api/settings", json={"key": "categories", "value": ["Meat", "Dairy"]})
    await client.post("/api/settings/tax_rate", json={"value": 8.25})

    settings = (await client.get("/api/settings")).json()
    assert settings == {"categories": '["Meat", "Dairy"]', "currency": "USD", "tax_rate": "8.25"}

    assert (await client.get("/api/settings/currency")).json() == {"key": "currency", "value": "USD"}
    assert (await client.get("/api/settings/missing")).json() == {"key": "missing", "value": None}


@pytest.mark.asyncio
async def test_settings_bulk_and_delete(client: AsyncClient):
    response = await client.post("/api/settings/bulk", json={"a": "1", "b": "2"})
    assert response.json() == {"success": True, "count": 2}
    await client.post("/api/settings", json={"key": "a", "value": "updated"})

    assert (await client.delete("/api/settings/b")).json() == {"success": True}
    assert (await client.get("/api/settings")).json() == {"a": "updated"}


@pytest.mark.asyncio
async def test_setting_key_is_required(client: AsyncClient):
    response = await client.post("/api/settings", json={"key": "  ", "value": "x"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
