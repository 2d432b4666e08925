import datetime as dt

import pytest
from fastapi import status
from httpx import AsyncClient

# resource path -> a valid create body
RESOURCES = {
    "suppliers": {"name": "Restaurant Depot", "phone": "555-0100"},
    "employees": {"name": "Maria Lopez", "role": "Cook", "hourly_rate": 18.5},
    "reviews": {"reviewer": "Sam", "rating": 5, "platform": "Google"},
    "expenses": {"date": "2026-10-01", "category": "Fuel", "amount": 64.2},
    "tools": {"name": "Tortilla press", "quantity": 2},
    "equipment": {"name": "Flat-top grill", "serial_number": "FT-2200"},
    "licenses": {"name": "Mobile vendor permit", "expiry_date": "2027-01-31"},
    "maintenance-tasks": {"title": "Clean hood filters", "frequency": "weekly"},
    "contacts": {"name": "Downtown Events LLC", "category": "Organizer"},
    "notes": {"title": "Call the commissary"},
    "menu-specials": {"name": "Taco Tuesday", "price": 9.99, "days_of_week": [2]},
    "recipe-book": {"name": "Birria consommé", "servings": 40},
    "menu": {"name": "Churros", "price": 5},
    "ingredients": {"name": "Cinnamon sugar", "cost": 3, "unit": "jar"},
}


@pytest.mark.asyncio
@pytest.mark.parametrize("resource,body", RESOURCES.items())
async def test_create_list_get_delete(client: AsyncClient, resource: str, body: dict):
    response = await client.post(f"/api/{resource}", json=body)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    created = response.json()
    for key, value in body.items():
        assert created[key] == value

    listed = (await client.get(f"/api/{resource}")).json()
    assert [row["id"] for row in listed] == [created["id"]]
    assert (await client.get(f"/api/{resource}/{created['id']}")).json() == created

    response = await client.delete(f"/api/{resource}/{created['id']}")
    assert response.json() == {"success": True}
    assert (await client.get(f"/api/{resource}/{created['id']}")).status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_missing_rows_are_404(client: AsyncClient):
    assert (await client.get("/api/suppliers/123")).status_code == status.HTTP_404_NOT_FOUND
    assert (await client.patch("/api/suppliers/123", json={"name": "x"})).status_code == status.HTTP_404_NOT_FOUND
    assert (await client.delete("/api/suppliers/123")).status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_patch_changes_only_given_fields(client: AsyncClient):
    supplier = (await client.post("/api/suppliers", json={"name": "Sysco", "phone": "555-0101"})).json()
    updated = (await client.patch(f"/api/suppliers/{supplier['id']}", json={"email": "orders@sysco.test"})).json()
    assert updated["phone"] == "555-0101"
    assert updated["email"] == "orders@sysco.test"


@pytest.mark.asyncio
async def test_put_replaces_whole_row(client: AsyncClient):
    supplier = (
        await client.post("/api/suppliers", json={"name": "Sysco", "phone": "555-0101", "category": "Paper"})
    ).json()
    replaced = (await client.put(f"/api/suppliers/{supplier['id']}", json={"name": "Sysco West"})).json()
    assert replaced["name"] == "Sysco West"
    assert replaced["phone"] is None
    assert replaced["category"] == "Food"


@pytest.mark.asyncio
async def test_required_fields_are_validated(client: AsyncClient):
    assert (await client.post("/api/suppliers", json={"phone": "1"})).status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert (await client.post("/api/suppliers", json={"name": "   "})).status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert (await client.post("/api/reviews", json={"reviewer": "A", "rating": 6})).status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_patch_is_validated_against_the_stored_row(client: AsyncClient):
    supplier = (await client.post("/api/suppliers", json={"name": "Sysco", "category": "Paper"})).json()
    for body in ({"name": None}, {"category": None}, {"name": ""}):
        response = await client.patch(f"/api/suppliers/{supplier['id']}", json=body)
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY, body
        assert response.json()["detail"][0]["loc"][0] == "body"
    stored = (await client.get(f"/api/suppliers/{supplier['id']}")).json()
    assert (stored["name"], stored["category"]) == ("Sysco", "Paper")

    # rules spanning two fields see the stored value of the other one
    special = (
        await client.post("/api/menu-specials", json={"name": "Fall tacos", "start_date": "2026-10-01"})
    ).json()
    response = await client.patch(f"/api/menu-specials/{special['id']}", json={"end_date": "2026-09-01"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    event = (await client.post("/api/events", json={"name": "Festival", "date": "2026-11-20"})).json()
    assert (await client.patch(f"/api/events/{event['id']}", json={"date": None})).status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    moved = await client.patch(f"/api/events/{event['id']}", json={"date": "2026-11-21", "fee": 150})
    assert moved.json()["date"] == "2026-11-21"
    assert moved.json()["fee"] == 150


@pytest.mark.asyncio
async def test_search_with_q(client: AsyncClient):
    await client.post("/api/contacts", json={"name": "Alice Baker", "company": "Bakery Co"})
    await client.post("/api/contacts", json={"name": "Bob Grill"})
    found = (await client.get("/api/contacts", params={"q": "BAKER"})).json()
    assert [row["name"] for row in found] == ["Alice Baker"]


@pytest.mark.asyncio
async def test_routes_require_login(anon_client: AsyncClient):
    assert (await anon_client.get("/api/suppliers")).status_code == status.HTTP_401_UNAUTHORIZED
    assert (await anon_client.post("/api/inventory", json={"name": "x", "unit": "y"})).status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
async def test_contact_history(client: AsyncClient):
    contact = (await client.post("/api/contacts", json={"name": "Downtown Events LLC"})).json()
    event = (
        await client.post("/api/events", json={"name": "Festival", "date": "2026-11-20", "contact_id": contact["id"]})
    ).json()
    await client.post("/api/catering", json={"client": "DT Events", "date": "2026-12-01", "contact_id": contact["id"]})
    await client.post("/api/notes", json={"title": "Prefers email", "contact_id": contact["id"]})
    await client.post(f"/api/events/{event['id']}/archive")

    history = (await client.get(f"/api/contacts/{contact['id']}/history")).json()
    assert history["contact"]["name"] == "Downtown Events LLC"
    assert history["events"] == []
    assert [row["original_id"] for row in history["archived_events"]] == [event["id"]]
    assert len(history["catering"]) == 1
    assert [row["title"] for row in history["notes"]] == ["Prefers email"]


@pytest.mark.asyncio
async def test_licenses_expiring_and_maintenance_due(client: AsyncClient):
    today = dt.date.today()
    await client.post("/api/licenses", json={"name": "Health permit", "expiry_date": (today + dt.timedelta(days=10)).isoformat()})
    await client.post("/api/licenses", json={"name": "Business license", "expiry_date": (today + dt.timedelta(days=200)).isoformat()})
    await client.post("/api/maintenance-tasks", json={"title": "Oil change", "next_due": (today + dt.timedelta(days=3)).isoformat()})
    await client.post(
        "/api/maintenance-tasks",
        json={"title": "Done task", "next_due": today.isoformat(), "status": "completed"},
    )

    expiring = (await client.get("/api/licenses/expiring")).json()
    assert [row["name"] for row in expiring] == ["Health permit"]
    assert len((await client.get("/api/licenses/expiring", params={"days": 365})).json()) == 2

    due = (await client.get("/api/maintenance-tasks/due")).json()
    assert [row["title"] for row in due] == ["Oil change"]
