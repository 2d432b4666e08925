import datetime as dt
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.core.errors import InventoryItemNotFound
from foodtruck.db.database import (
    get_async_session,
    Ingredient as IngredientModel,
    InventoryHistory as InventoryHistoryModel,
    InventoryItem as InventoryItemModel,
    WasteLog as WasteLogModel,
)
from foodtruck.schemas.inventory import (
    InventoryItemCreate,
    InventoryItemUpdate,
    StockAdjustment,
    WasteCreate,
)
from foodtruck.services import reports, stock_ledger

router = APIRouter()
history_router = APIRouter()
waste_router = APIRouter()
reports_router = APIRouter()


async def _get_item(db: AsyncSession, item_id: int) -> InventoryItemModel:
    item = await db.get(InventoryItemModel, item_id)
    if not item:
        raise InventoryItemNotFound(item_id)
    return item


@router.get("", response_model=List[Dict])
async def list_inventory(
    category: Optional[str] = None,
    low_stock: bool = False,
    q: Optional[str] = None,
    db: AsyncSession = Depends(get_async_session),
):
    """List inventory rows, optionally filtered by category, search term or low stock."""
    stmt = select(InventoryItemModel)
    if category:
        stmt = stmt.where(InventoryItemModel.category == category)
    if low_stock:
        stmt = stmt.where(InventoryItemModel.current_stock <= InventoryItemModel.min_stock)
    if q and q.strip():
        stmt = stmt.where(func.lower(InventoryItemModel.name).contains(q.strip().lower()))
    stmt = stmt.order_by(InventoryItemModel.category, func.lower(InventoryItemModel.name))
    res = await db.execute(stmt)
    return [item.to_schema for item in res.scalars().all()]


@router.get("/{item_id}", response_model=Dict)
async def get_inventory_item(item_id: int, db: AsyncSession = Depends(get_async_session)):
    item = await _get_item(db, item_id)
    return item.to_schema


@router.post("", response_model=Dict, status_code=status.HTTP_201_CREATED)
async def create_inventory_item(payload: InventoryItemCreate, db: AsyncSession = Depends(get_async_session)):
    """Create an inventory row, linked to an existing ingredient or standalone.

    An opening `current_stock` is recorded as an `initial` history entry.
    """
    name, unit = payload.name, payload.unit
    ingredient_id = payload.ingredient_id

    if ingredient_id is not None:
        ingredient = await db.get(IngredientModel, ingredient_id)
        if not ingredient:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Ingredient with id {ingredient_id} not found",
            )
        name = name or ingredient.name
        unit = unit or ingredient.unit
    elif payload.create_ingredient:
        ingredient = IngredientModel(name=name, unit=unit, cost=0, servings=1, supplier_id=payload.supplier_id)
        db.add(ingredient)
        await db.flush()
        ingredient_id = ingredient.id

    item = InventoryItemModel(
        ingredient_id=ingredient_id,
        supplier_id=payload.supplier_id,
        name=name,
        unit=unit,
        category=payload.category,
        barcode=payload.barcode,
        cost_per_unit=payload.cost_per_unit,
        current_stock=payload.current_stock,
        min_stock=payload.min_stock,
        max_stock=payload.max_stock,
    )
    db.add(item)
    await db.flush()
    await stock_ledger.record_initial_stock(db, item)
    await db.commit()
    await db.refresh(item)
    return item.to_schema


@router.put("/{item_id}", response_model=Dict)
async def update_inventory_item(
    item_id: int,
    payload: InventoryItemUpdate,
    db: AsyncSession = Depends(get_async_session),
):
    """Update fields of an inventory row.

    A `current_stock` value goes through the ledger: the difference to the stored
    stock is logged with the given `change_type`.
    """
    item = await _get_item(db, item_id)
    data = payload.model_dump(exclude_unset=True)
    new_stock = data.pop("current_stock", None)
    change_type = data.pop("change_type", "adjustment")
    reason = data.pop("reason", None)
    notes = data.pop("notes", None)

    for key, value in data.items():
        setattr(item, key, value)
    await db.flush()

    change = None
    if new_stock is not None:
        change = await stock_ledger.set_stock(
            db, item_id, new_stock, change_type=change_type, reason=reason, notes=notes
        )
    await db.commit()
    await db.refresh(item)
    out = item.to_schema
    if change is not None:
        out["stock_change"] = change.as_dict()
    return out


@router.delete("/{item_id}")
async def delete_inventory_item(item_id: int, db: AsyncSession = Depends(get_async_session)):
    item = await _get_item(db, item_id)
    await db.delete(item)
    await db.commit()
    return {"success": True}


@router.post("/{item_id}/adjust", response_model=Dict)
async def adjust_inventory_item(
    item_id: int,
    payload: StockAdjustment,
    db: AsyncSession = Depends(get_async_session),
):
    """Apply a signed stock change (restock, usage, correction)."""
    change = await stock_ledger.adjust_stock(
        db,
        item_id,
        payload.delta,
        change_type=payload.change_type,
        reason=payload.reason,
        notes=payload.notes,
    )
    await db.commit()
    return change.as_dict()


@router.get("/{item_id}/history", response_model=List[Dict])
async def get_item_history(item_id: int, db: AsyncSession = Depends(get_async_session)):
    await _get_item(db, item_id)
    res = await db.execute(
        select(InventoryHistoryModel)
        .where(InventoryHistoryModel.inventory_id == item_id)
        .order_by(InventoryHistoryModel.created_at.desc(), InventoryHistoryModel.id.desc())
    )
    return [row.to_schema for row in res.scalars().all()]


# /api/inventory-history and /api/inventory-transactions

@history_router.get("", response_model=List[Dict])
async def list_history(
    inventory_id: Optional[int] = None,
    start: Optional[dt.date] = None,
    end: Optional[dt.date] = None,
    limit: int = Query(default=500, ge=1, le=5000),
    db: AsyncSession = Depends(get_async_session),
):
    stmt = select(InventoryHistoryModel)
    if inventory_id is not None:
        stmt = stmt.where(InventoryHistoryModel.inventory_id == inventory_id)
    if start:
        stmt = stmt.where(InventoryHistoryModel.created_at >= dt.datetime.combine(start, dt.time.min))
    if end:
        stmt = stmt.where(
            InventoryHistoryModel.created_at < dt.datetime.combine(end + dt.timedelta(days=1), dt.time.min)
        )
    stmt = stmt.order_by(InventoryHistoryModel.created_at.desc(), InventoryHistoryModel.id.desc()).limit(limit)
    res = await db.execute(stmt)
    return [row.to_schema for row in res.scalars().all()]


# /api/waste-log

@waste_router.get("", response_model=List[Dict])
async def list_waste(
    inventory_id: Optional[int] = None,
    db: AsyncSession = Depends(get_async_session),
):
    stmt = select(WasteLogModel)
    if inventory_id is not None:
        stmt = stmt.where(WasteLogModel.inventory_id == inventory_id)
    res = await db.execute(stmt.order_by(WasteLogModel.created_at.desc(), WasteLogModel.id.desc()))
    return [row.to_schema for row in res.scalars().all()]


@waste_router.post("", response_model=Dict, status_code=status.HTTP_201_CREATED)
async def create_waste(payload: WasteCreate, db: AsyncSession = Depends(get_async_session)):
    """Record wasted stock; the amount is taken off the item in the same transaction."""
    result = await stock_ledger.record_waste(
        db,
        payload.inventory_id,
        payload.amount,
        reason=payload.reason,
        unit=payload.unit,
        cost=payload.cost,
        notes=payload.notes,
    )
    await db.commit()
    return result


@waste_router.delete("/{waste_id}")
async def delete_waste(waste_id: int, db: AsyncSession = Depends(get_async_session)):
    """Remove a waste entry. Stock is not restored; the history keeps the change."""
    row = await db.get(WasteLogModel, waste_id)
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Waste entry not found")
    await db.delete(row)
    await db.commit()
    return {"success": True}


# /api/reports

@reports_router.get("/inventory-usage", response_model=List[Dict])
async def inventory_usage(
    start: Optional[dt.date] = None,
    end: Optional[dt.date] = None,
    db: AsyncSession = Depends(get_async_session),
):
    return await reports.inventory_usage_report(db, start, end)


@reports_router.get("/waste", response_model=Dict)
async def waste_summary(
    start: Optional[dt.date] = None,
    end: Optional[dt.date] = None,
    db: AsyncSession = Depends(get_async_session),
):
    return await reports.waste_report(db, start, end)


@reports_router.get("/summary", response_model=Dict)
async def financial_summary(
    start: Optional[dt.date] = None,
    end: Optional[dt.date] = None,
    db: AsyncSession = Depends(get_async_session),
):
    return await reports.financial_summary(db, start, end)
