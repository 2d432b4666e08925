import datetime as dt

import pytest
from fastapi import status
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.db.database import ArchivedEvent, Event

EVENT = {
    "name": "Downtown Food Festival",
    "type": "Festival",
    "location": "Main Street",
    "date": "2026-11-20",
    "time": "10am-6pm",
    "fee": 150.0,
    "status": "Applied",
    "notes": "Good foot traffic",
}


async def _count(db: AsyncSession, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


@pytest.mark.asyncio
async def test_archive_moves_exactly_one_row(client: AsyncClient, test_db: AsyncSession):
    first = (await client.post("/api/events", json=EVENT)).json()
    await client.post("/api/events", json={**EVENT, "name": "Farmers Market"})

    response = await client.post(f"/api/events/{first['id']}/archive")
    assert response.status_code == status.HTTP_200_OK
    archived = response.json()["archived"]
    assert archived["original_id"] == first["id"]
    assert archived["name"] == EVENT["name"]
    assert archived["archived_date"] is not None

    assert await _count(test_db, Event) == 1
    assert await _count(test_db, ArchivedEvent) == 1
    assert (await client.get(f"/api/events/{first['id']}")).status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_restore_brings_back_identical_row(client: AsyncClient):
    created = (await client.post("/api/events", json=EVENT)).json()
    archived = (await client.post(f"/api/events/{created['id']}/archive")).json()["archived"]

    listed = (await client.get("/api/archived-events")).json()
    assert [row["id"] for row in listed] == [archived["id"]]

    response = await client.post(f"/api/archived-events/{archived['id']}/restore")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["restored"] == created

    assert (await client.get(f"/api/events/{created['id']}")).json() == created
    assert (await client.get("/api/archived-events")).json() == []


@pytest.mark.asyncio
async def test_restore_alias_on_events(client: AsyncClient):
    created = (await client.post("/api/events", json=EVENT)).json()
    archived = (await client.post(f"/api/events/{created['id']}/archive")).json()["archived"]
    response = await client.post(f"/api/events/{archived['id']}/restore")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["restored"]["id"] == created["id"]


@pytest.mark.asyncio
async def test_archived_id_is_not_reused_by_new_events(client: AsyncClient):
    created = (await client.post("/api/events", json=EVENT)).json()
    archived = (await client.post(f"/api/events/{created['id']}/archive")).json()["archived"]

    newer = (await client.post("/api/events", json={**EVENT, "name": "Night Market"})).json()
    assert newer["id"] != created["id"]

    response = await client.post(f"/api/archived-events/{archived['id']}/restore")
    assert response.status_code == status.HTTP_200_OK


@pytest.mark.asyncio
async def test_restore_conflicts_with_live_row(client: AsyncClient, test_db: AsyncSession):
    created = (await client.post("/api/events", json=EVENT)).json()
    archived = (await client.post(f"/api/events/{created['id']}/archive")).json()["archived"]
    # a live row re-created under the same id by hand
    test_db.add(Event(id=created["id"], name="Squatter", date=dt.date(2026, 12, 1)))
    await test_db.commit()

    response = await client.post(f"/api/archived-events/{archived['id']}/restore")
    assert response.status_code == status.HTTP_409_CONFLICT
    assert await _count(test_db, ArchivedEvent) == 1


@pytest.mark.asyncio
async def test_archive_missing_rows_are_404(client: AsyncClient):
    assert (await client.post("/api/events/42/archive")).status_code == status.HTTP_404_NOT_FOUND
    assert (await client.post("/api/archived-events/42/restore")).status_code == status.HTTP_404_NOT_FOUND
    assert (await client.delete("/api/archived-events/42")).status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_catering_round_trip_keeps_balance(client: AsyncClient):
    order = (
        await client.post(
            "/api/catering",
            json={"client": "ABC Corp", "date": "2026-11-05", "guests": 50, "price": 2500, "deposit": 500},
        )
    ).json()
    assert order["balance_due"] == 2000

    archived = (await client.post(f"/api/catering/{order['id']}/archive")).json()["archived"]
    assert archived["client"] == "ABC Corp"
    assert (await client.get("/api/catering")).json() == []

    restored = (await client.post(f"/api/archived-catering/{archived['id']}/restore")).json()["restored"]
    assert restored == order


@pytest.mark.asyncio
async def test_delete_archived_row(client: AsyncClient):
    created = (await client.post("/api/events", json=EVENT)).json()
    archived = (await client.post(f"/api/events/{created['id']}/archive")).json()["archived"]
    response = await client.delete(f"/api/archived-events/{archived['id']}")
    assert response.json() == {"success": True}
    assert (await client.get("/api/archived-events")).json() == []
