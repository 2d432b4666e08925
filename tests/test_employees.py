import datetime as dt

import pytest
from fastapi import status
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.db.database import TimePunch


async def _employee(client: AsyncClient, name: str = "Maria", **extra) -> dict:
    response = await client.post("/api/employees", json={"name": name, **extra})
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


@pytest.mark.asyncio
async def test_clock_in_and_out(client: AsyncClient):
    employee = await _employee(client)

    punch = await client.post("/api/time-punches/clock-in", json={"employee_id": employee["id"]})
    assert punch.status_code == status.HTTP_201_CREATED
    assert punch.json()["clock_out"] is None
    assert punch.json()["hours"] is None

    again = await client.post("/api/time-punches/clock-in", json={"employee_id": employee["id"]})
    assert again.status_code == status.HTTP_409_CONFLICT

    out = await client.post("/api/time-punches/clock-out", json={"employee_id": employee["id"]})
    assert out.status_code == status.HTTP_200_OK
    assert out.json()["id"] == punch.json()["id"]
    assert out.json()["clock_out"] is not None

    none_open = await client.post("/api/time-punches/clock-out", json={"employee_id": employee["id"]})
    assert none_open.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_clock_in_unknown_employee(client: AsyncClient):
    response = await client.post("/api/time-punches/clock-in", json={"employee_id": 999})
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
async def test_hours_total_and_pay(client: AsyncClient, test_db: AsyncSession):
    employee = await _employee(client, hourly_rate=20)
    start = dt.datetime(2026, 10, 1, 9, 0)
    test_db.add_all(
        [
            TimePunch(employee_id=employee["id"], clock_in=start, clock_out=start + dt.timedelta(hours=8)),
            TimePunch(
                employee_id=employee["id"],
                clock_in=start + dt.timedelta(days=1),
                clock_out=start + dt.timedelta(days=1, hours=4, minutes=30),
            ),
            TimePunch(employee_id=employee["id"], clock_in=start + dt.timedelta(days=30)),
        ]
    )
    await test_db.commit()

    hours = (await client.get(f"/api/employees/{employee['id']}/hours")).json()
    assert hours["total_hours"] == 12.5
    assert hours["punches"] == 2
    assert hours["estimated_pay"] == 250

    first_day = (
        await client.get(
            f"/api/employees/{employee['id']}/hours", params={"start": "2026-10-01", "end": "2026-10-01"}
        )
    ).json()
    assert first_day["total_hours"] == 8


@pytest.mark.asyncio
async def test_punch_with_clock_out_before_clock_in_is_rejected(client: AsyncClient):
    employee = await _employee(client)
    response = await client.post(
        "/api/time-punches",
        json={"employee_id": employee["id"], "clock_in": "2026-10-01T10:00:00", "clock_out": "2026-10-01T09:00:00"},
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


async def _swap_setup(client: AsyncClient):
    maria = await _employee(client, "Maria")
    jose = await _employee(client, "Jose")
    shift = (
        await client.post(
            "/api/schedules",
            json={"employee_id": maria["id"], "date": "2026-11-02", "start_time": "10:00", "end_time": "18:00"},
        )
    ).json()
    swap = (
        await client.post(
            "/api/shift-swaps",
            json={"schedule_id": shift["id"], "requester_id": maria["id"], "target_employee_id": jose["id"]},
        )
    ).json()
    return maria, jose, shift, swap


@pytest.mark.asyncio
async def test_approve_swap_moves_shift(client: AsyncClient):
    _, jose, shift, swap = await _swap_setup(client)
    assert swap["status"] == "pending"

    approved = await client.post(f"/api/shift-swaps/{swap['id']}/approve")
    assert approved.status_code == status.HTTP_200_OK
    assert approved.json()["status"] == "approved"
    assert approved.json()["resolved_at"] is not None
    assert (await client.get(f"/api/schedules/{shift['id']}")).json()["employee_id"] == jose["id"]

    again = await client.post(f"/api/shift-swaps/{swap['id']}/reject")
    assert again.status_code == status.HTTP_409_CONFLICT


@pytest.mark.asyncio
async def test_reject_swap_keeps_shift(client: AsyncClient):
    maria, _, shift, swap = await _swap_setup(client)
    rejected = await client.post(f"/api/shift-swaps/{swap['id']}/reject")
    assert rejected.json()["status"] == "rejected"
    assert (await client.get(f"/api/schedules/{shift['id']}")).json()["employee_id"] == maria["id"]


@pytest.mark.asyncio
async def test_schedule_times_are_validated(client: AsyncClient):
    employee = await _employee(client)
    response = await client.post(
        "/api/schedules",
        json={"employee_id": employee["id"], "date": "2026-11-02", "start_time": "25:00", "end_time": "18:00"},
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


@pytest.mark.asyncio
async def test_availability_and_reviews(client: AsyncClient):
    employee = await _employee(client)
    slot = await client.post(
        "/api/availability", json={"employee_id": employee["id"], "day_of_week": 6, "start_time": "08:00"}
    )
    assert slot.status_code == status.HTTP_201_CREATED
    assert slot.json()["is_available"] is True

    bad_day = await client.post("/api/availability", json={"employee_id": employee["id"], "day_of_week": 7})
    assert bad_day.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    review = await client.post(
        "/api/performance-reviews",
        json={"employee_id": employee["id"], "review_date": "2026-09-30", "rating": 4},
    )
    assert review.status_code == status.HTTP_201_CREATED
