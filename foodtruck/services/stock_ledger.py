"""Inventory stock ledger.

`inventory.current_stock` is a cached running total; every change to it goes
through this module so that one `inventory_history` row describes it. The
functions only flush; the caller owns the transaction and commits once.
"""
import logging
from dataclasses import asdict, dataclass
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.core.errors import InventoryItemNotFound, StockConflict, ValidationFailed
from foodtruck.db.database import InventoryHistory, InventoryItem, WasteLog

logger = logging.getLogger(__name__)

STOCK_WRITE_RETRIES = 5


@dataclass
class StockChange:
    item_id: int
    previous_stock: float
    new_stock: float
    delta: float
    history_id: Optional[int]

    def as_dict(self) -> dict:
        data = asdict(self)
        data["change_amount"] = data.pop("delta")
        data["inventory_id"] = data.pop("item_id")
        return data


async def _get_item(db: AsyncSession, item_id: int) -> InventoryItem:
    item = await db.get(InventoryItem, item_id)
    if item is None:
        raise InventoryItemNotFound(item_id)
    return item


async def _append_history(
    db: AsyncSession,
    item: InventoryItem,
    *,
    previous_stock: float,
    new_stock: float,
    delta: float,
    change_type: str,
    reason: Optional[str],
    notes: Optional[str],
) -> InventoryHistory:
    row = InventoryHistory(
        inventory_id=item.id,
        item_name=item.name,
        change_type=change_type,
        change_amount=delta,
        previous_stock=previous_stock,
        new_stock=new_stock,
        reason=reason,
        notes=notes,
    )
    db.add(row)
    await db.flush()
    return row


async def _compare_and_set(db: AsyncSession, item_id: int, target) -> tuple:
    """Move an item's stock from the value just read to `target(previous)`.

    The `UPDATE` only matches while the stock still holds the value that was read,
    so a concurrent writer makes it miss and the read is repeated. Returns the
    observed previous stock and the stored new stock.
    """
    for _ in range(STOCK_WRITE_RETRIES):
        previous_stock = (
            await db.execute(select(InventoryItem.current_stock).where(InventoryItem.id == item_id))
        ).scalar_one()
        new_stock = target(previous_stock)
        if new_stock == previous_stock:
            return previous_stock, new_stock

        result = await db.execute(
            update(InventoryItem)
            .where(InventoryItem.id == item_id, InventoryItem.current_stock == previous_stock)
            .values(current_stock=new_stock)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            return previous_stock, new_stock
        logger.info("Stock of item %s changed concurrently; retrying", item_id)
    raise StockConflict(f"Stock of inventory item {item_id} kept changing; try again")


async def adjust_stock(
    db: AsyncSession,
    item_id: int,
    delta: float,
    *,
    change_type: str = "adjustment",
    reason: Optional[str] = None,
    notes: Optional[str] = None,
) -> StockChange:
    """Add a signed delta to an item's stock and log it.

    Concurrent adjustments never overwrite each other, and the history row keeps
    the stock value actually replaced. Negative stock is allowed. A zero delta
    writes nothing and returns the current stock.
    """
    item = await _get_item(db, item_id)
    if delta == 0:
        current = item.current_stock or 0
        return StockChange(item.id, current, current, 0, None)

    previous_stock, new_stock = await _compare_and_set(db, item_id, lambda previous: previous + delta)
    await db.refresh(item, attribute_names=["current_stock", "updated_at"])

    history = await _append_history(
        db,
        item,
        previous_stock=previous_stock,
        new_stock=new_stock,
        delta=delta,
        change_type=change_type,
        reason=reason,
        notes=notes,
    )
    logger.debug("Stock of item %s: %s -> %s (%s)", item_id, previous_stock, new_stock, change_type)
    return StockChange(item.id, previous_stock, new_stock, delta, history.id)


async def set_stock(
    db: AsyncSession,
    item_id: int,
    new_stock: float,
    *,
    change_type: str = "adjustment",
    reason: Optional[str] = None,
    notes: Optional[str] = None,
) -> StockChange:
    """Set an item's stock to an absolute value (a count or a direct edit)."""
    item = await _get_item(db, item_id)
    previous_stock, _ = await _compare_and_set(db, item_id, lambda previous: new_stock)
    if previous_stock == new_stock:
        return StockChange(item.id, previous_stock, new_stock, 0, None)

    await db.refresh(item, attribute_names=["current_stock", "updated_at"])
    delta = new_stock - previous_stock
    history = await _append_history(
        db,
        item,
        previous_stock=previous_stock,
        new_stock=new_stock,
        delta=delta,
        change_type=change_type,
        reason=reason,
        notes=notes,
    )
    return StockChange(item.id, previous_stock, new_stock, delta, history.id)


async def record_initial_stock(db: AsyncSession, item: InventoryItem) -> Optional[InventoryHistory]:
    if not item.current_stock:
        return None
    return await _append_history(
        db,
        item,
        previous_stock=0,
        new_stock=item.current_stock,
        delta=item.current_stock,
        change_type="initial",
        reason="Initial stock",
        notes=None,
    )


async def record_waste(
    db: AsyncSession,
    item_id: int,
    amount: float,
    *,
    reason: str = "Spoiled",
    unit: Optional[str] = None,
    cost: Optional[float] = None,
    notes: Optional[str] = None,
) -> dict:
    """Log wasted stock and take it off the item's balance.

    Returns the waste row together with the stock change, so callers always
    get `id`, `history_id` and `new_stock`.
    """
    if amount is None or amount <= 0:
        raise ValidationFailed("Waste amount must be greater than zero")

    item = await _get_item(db, item_id)
    if cost is None and item.cost_per_unit:
        cost = round(amount * item.cost_per_unit, 2)

    waste = WasteLog(
        inventory_id=item.id,
        item_name=item.name,
        amount=amount,
        unit=unit or item.unit,
        reason=reason,
        cost=cost,
        notes=notes,
    )
    db.add(waste)
    await db.flush()

    change = await adjust_stock(db, item.id, -amount, change_type="waste", reason=reason, notes=notes)
    return {
        **waste.to_schema,
        "history_id": change.history_id,
        "previous_stock": change.previous_stock,
        "new_stock": change.new_stock,
    }
