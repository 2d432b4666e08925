import datetime as dt

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_inventory_usage_report(client: AsyncClient):
    flour = (await client.post("/api/inventory", json={"name": "Flour", "unit": "lb", "current_stock": 50})).json()
    await client.post(f"/api/inventory/{flour['id']}/adjust", json={"delta": -8, "change_type": "used"})
    await client.post(f"/api/inventory/{flour['id']}/adjust", json={"delta": 20, "change_type": "restock"})
    await client.post("/api/waste-log", json={"inventory_id": flour["id"], "amount": 2})

    report = (await client.get("/api/reports/inventory-usage")).json()
    assert report == [
        {
            "item_name": "Flour",
            "unit": "lb",
            "total_used": 10,
            "total_added": 70,
            "net_change": 60,
            "entries": 4,
        }
    ]

    tomorrow = (dt.date.today() + dt.timedelta(days=1)).isoformat()
    assert (await client.get("/api/reports/inventory-usage", params={"start": tomorrow})).json() == []


@pytest.mark.asyncio
async def test_waste_report(client: AsyncClient):
    cheese = (
        await client.post("/api/inventory", json={"name": "Cheese", "unit": "lb", "current_stock": 10, "cost_per_unit": 4})
    ).json()
    await client.post("/api/waste-log", json={"inventory_id": cheese["id"], "amount": 1, "reason": "Spoiled"})
    await client.post("/api/waste-log", json={"inventory_id": cheese["id"], "amount": 2, "reason": "Spoiled"})
    await client.post("/api/waste-log", json={"inventory_id": cheese["id"], "amount": 0.5, "reason": "Dropped"})

    report = (await client.get("/api/reports/waste")).json()
    assert report["total_cost"] == 14
    by_reason = {row["reason"]: row for row in report["items"]}
    assert by_reason["Spoiled"]["total_amount"] == 3
    assert by_reason["Spoiled"]["entries"] == 2
    assert by_reason["Dropped"]["total_cost"] == 2


@pytest.mark.asyncio
async def test_financial_summary(client: AsyncClient):
    await client.post("/api/expenses", json={"date": "2026-10-02", "category": "Fuel", "amount": 60})
    await client.post("/api/expenses", json={"date": "2026-10-03", "category": "Food", "amount": 240})
    await client.post("/api/expenses", json={"date": "2026-09-01", "category": "Food", "amount": 999})
    await client.post("/api/events", json={"name": "Festival", "date": "2026-10-10", "fee": 150, "revenue": 1800})
    await client.post(
        "/api/events", json={"name": "Rained out", "date": "2026-10-11", "fee": 50, "status": "Cancelled"}
    )
    await client.post("/api/catering", json={"client": "ABC Corp", "date": "2026-10-20", "price": 2500})

    summary = (await client.get("/api/reports/summary", params={"start": "2026-10-01", "end": "2026-10-31"})).json()
    assert summary["expenses_by_category"] == {"Food": 240, "Fuel": 60}
    assert summary["total_expenses"] == 300
    assert summary["events"] == {"count": 1, "fees": 150, "revenue": 1800}
    assert summary["catering"] == {"count": 1, "revenue": 2500}
    assert summary["total_income"] == 4300
    assert summary["net"] == 4300 - 150 - 300
