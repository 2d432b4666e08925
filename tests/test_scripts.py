import datetime as dt

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.db.database import Event, InventoryHistory, MenuItem
from foodtruck.scripts import seed_sample_data, shift_sample_dates


@pytest.mark.asyncio
async def test_seed_fills_empty_database(test_db: AsyncSession):
    assert not await seed_sample_data.database_has_data(test_db)

    counts = await seed_sample_data.seed_session(test_db, dt.date(2026, 10, 19))
    await test_db.commit()
    assert counts["events"] == 2

    assert await seed_sample_data.database_has_data(test_db)
    menu = (await test_db.execute(select(MenuItem).order_by(MenuItem.id))).scalars().all()
    # 3 x 2.10 beef + 3 x 0.10 tortillas + 0.25 consommé + 0.10 onion
    assert menu[0].cost == pytest.approx(6.95)
    initial = (await test_db.execute(select(func.count()).select_from(InventoryHistory))).scalar_one()
    assert initial == len(seed_sample_data.INVENTORY)


@pytest.mark.asyncio
async def test_seed_refuses_non_empty_database(test_db: AsyncSession, capsys):
    test_db.add(Event(name="Existing", date=dt.date(2026, 1, 1)))
    await test_db.commit()

    await seed_sample_data.seed()
    assert "already has data" in capsys.readouterr().out
    count = (await test_db.execute(select(func.count()).select_from(Event))).scalar_one()
    assert count == 1


def test_seed_args():
    args = seed_sample_data.parse_args(["--force", "--admin-email", "a@b.c", "--admin-password", "pw"])
    assert args.force is True
    assert args.admin_email == "a@b.c"


@pytest.mark.asyncio
async def test_shift_dates_keeps_spacing(test_db: AsyncSession):
    test_db.add_all([Event(name="A", date=dt.date(2025, 1, 22)), Event(name="B", date=dt.date(2025, 1, 26))])
    await test_db.commit()

    first = await shift_sample_dates.earliest_date(test_db)
    assert first == dt.date(2025, 1, 22)
    days = (dt.date(2026, 12, 1) - first).days
    await shift_sample_dates.shift_dates(test_db, days)
    await test_db.commit()

    dates = (await test_db.execute(select(Event.date).order_by(Event.date))).scalars().all()
    assert dates == [dt.date(2026, 12, 1), dt.date(2026, 12, 5)]


def test_shift_args_are_exclusive():
    args = shift_sample_dates.parse_args(["--start-from", "2026-12-01"])
    assert args.start_from == dt.date(2026, 12, 1)
    with pytest.raises(SystemExit):
        shift_sample_dates.parse_args(["--days", "3", "--start-from", "2026-12-01"])
