"""Aggregate reports over the ledger, waste log and finances."""
import datetime as dt
from typing import Optional

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.db.database import CateringOrder, Event, Expense, InventoryHistory, InventoryItem, WasteLog


def _day_bounds(start: Optional[dt.date], end: Optional[dt.date]):
    """Turn an inclusive date range into datetime bounds for timestamp columns."""
    lower = dt.datetime.combine(start, dt.time.min) if start else None
    upper = dt.datetime.combine(end + dt.timedelta(days=1), dt.time.min) if end else None
    return lower, upper


def _in_range(column, lower, upper):
    clauses = []
    if lower is not None:
        clauses.append(column >= lower)
    if upper is not None:
        clauses.append(column < upper)
    return clauses


async def inventory_usage_report(
    db: AsyncSession, start: Optional[dt.date] = None, end: Optional[dt.date] = None
) -> list[dict]:
    """History rows grouped by item: how much was used, added and the net change."""
    lower, upper = _day_bounds(start, end)
    delta = InventoryHistory.change_amount
    stmt = (
        select(
            InventoryHistory.item_name,
            InventoryItem.unit,
            func.sum(case((delta < 0, -delta), else_=0)).label("total_used"),
            func.sum(case((delta > 0, delta), else_=0)).label("total_added"),
            func.sum(delta).label("net_change"),
            func.count(InventoryHistory.id).label("entries"),
        )
        .outerjoin(InventoryItem, InventoryHistory.inventory_id == InventoryItem.id)
        .where(*_in_range(InventoryHistory.created_at, lower, upper))
        .group_by(InventoryHistory.item_name, InventoryItem.unit)
        .order_by(InventoryHistory.item_name)
    )
    rows = (await db.execute(stmt)).all()
    return [
        {
            "item_name": r.item_name,
            "unit": r.unit,
            "total_used": float(r.total_used or 0),
            "total_added": float(r.total_added or 0),
            "net_change": float(r.net_change or 0),
            "entries": r.entries,
        }
        for r in rows
    ]


async def waste_report(
    db: AsyncSession, start: Optional[dt.date] = None, end: Optional[dt.date] = None
) -> dict:
    lower, upper = _day_bounds(start, end)
    stmt = (
        select(
            WasteLog.item_name,
            WasteLog.unit,
            WasteLog.reason,
            func.sum(WasteLog.amount).label("total_amount"),
            func.sum(func.coalesce(WasteLog.cost, 0)).label("total_cost"),
            func.count(WasteLog.id).label("entries"),
        )
        .where(*_in_range(WasteLog.created_at, lower, upper))
        .group_by(WasteLog.item_name, WasteLog.unit, WasteLog.reason)
        .order_by(WasteLog.item_name, WasteLog.reason)
    )
    rows = [
        {
            "item_name": r.item_name,
            "unit": r.unit,
            "reason": r.reason,
            "total_amount": float(r.total_amount or 0),
            "total_cost": round(float(r.total_cost or 0), 2),
            "entries": r.entries,
        }
        for r in (await db.execute(stmt)).all()
    ]
    return {"items": rows, "total_cost": round(sum(r["total_cost"] for r in rows), 2)}


async def financial_summary(
    db: AsyncSession, start: Optional[dt.date] = None, end: Optional[dt.date] = None
) -> dict:
    """Expenses by category against event and catering income for the period."""
    def date_filter(column):
        clauses = []
        if start:
            clauses.append(column >= start)
        if end:
            clauses.append(column <= end)
        return clauses

    expense_rows = (
        await db.execute(
            select(Expense.category, func.sum(Expense.amount).label("total"))
            .where(*date_filter(Expense.date))
            .group_by(Expense.category)
            .order_by(Expense.category)
        )
    ).all()
    expenses_by_category = {r.category: round(float(r.total or 0), 2) for r in expense_rows}
    total_expenses = round(sum(expenses_by_category.values()), 2)

    not_cancelled = func.lower(Event.status) != "cancelled"
    event_row = (
        await db.execute(
            select(
                func.coalesce(func.sum(Event.fee), 0).label("fees"),
                func.coalesce(func.sum(Event.revenue), 0).label("revenue"),
                func.count(Event.id).label("count"),
            ).where(not_cancelled, *date_filter(Event.date))
        )
    ).one()
    catering_row = (
        await db.execute(
            select(
                func.coalesce(func.sum(CateringOrder.price), 0).label("revenue"),
                func.count(CateringOrder.id).label("count"),
            ).where(func.lower(CateringOrder.status) != "cancelled", *date_filter(CateringOrder.date))
        )
    ).one()

    event_fees = round(float(event_row.fees), 2)
    event_revenue = round(float(event_row.revenue), 2)
    catering_revenue = round(float(catering_row.revenue), 2)
    income = event_revenue + catering_revenue
    return {
        "start": start.isoformat() if start else None,
        "end": end.isoformat() if end else None,
        "expenses_by_category": expenses_by_category,
        "total_expenses": total_expenses,
        "events": {"count": event_row.count, "fees": event_fees, "revenue": event_revenue},
        "catering": {"count": catering_row.count, "revenue": catering_revenue},
        "total_income": round(income, 2),
        # event fees are paid to organizers
        "net": round(income - event_fees - total_expenses, 2),
    }
