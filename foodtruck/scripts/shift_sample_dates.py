"""
Move upcoming-event and catering dates so demo data stays in the future.

    python -m foodtruck.scripts.shift_sample_dates --days 30
    python -m foodtruck.scripts.shift_sample_dates --start-from 2026-12-01

With --start-from, every row is shifted by the same amount so that the earliest
event or catering order lands on that date; relative spacing is kept.
"""

import argparse
import asyncio
import datetime as dt

from sqlalchemy import func, select

from foodtruck.db.database import async_session_maker, CateringOrder, Event


async def earliest_date(session) -> dt.date | None:
    dates = []
    for model in (Event, CateringOrder):
        value = (await session.execute(select(func.min(model.date)))).scalar_one_or_none()
        if value is not None:
            dates.append(value)
    return min(dates) if dates else None


async def shift_dates(session, days: int) -> dict:
    """Shift every event and catering date by `days`; the caller commits."""
    counts = {}
    for model in (Event, CateringOrder):
        rows = (await session.execute(select(model))).scalars().all()
        for row in rows:
            row.date = row.date + dt.timedelta(days=days)
        counts[model.__tablename__] = len(rows)
    await session.flush()
    return counts


async def main(days: int | None = None, start_from: dt.date | None = None) -> None:
    async with async_session_maker() as session:
        if start_from is not None:
            first = await earliest_date(session)
            if first is None:
                print("No events or catering orders found.")
                return
            days = (start_from - first).days
        counts = await shift_dates(session, days or 0)
        await session.commit()
    print(f"Shifted dates by {days} days. " + ", ".join(f"{k}: {v}" for k, v in counts.items()))


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Shift event and catering dates")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--days", type=int, help="number of days to add (negative moves back)")
    group.add_argument("--start-from", type=dt.date.fromisoformat, help="date the earliest row should move to")
    return parser.parse_args(argv)


if __name__ == "__main__":
    args = parse_args()
    asyncio.run(main(days=args.days, start_from=args.start_from))
