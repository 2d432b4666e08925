import datetime as dt
from typing import Dict, List

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.db.database import (
    get_async_session,
    EquipmentTracking as EquipmentModel,
    Expense as ExpenseModel,
    License as LicenseModel,
    MaintenanceTask as MaintenanceTaskModel,
    RecipeBookEntry as RecipeBookModel,
    Review as ReviewModel,
    Tool as ToolModel,
)
from foodtruck.routers.crud import build_crud_router
from foodtruck.schemas.operations import (
    EquipmentCreate,
    EquipmentUpdate,
    ExpenseCreate,
    ExpenseUpdate,
    LicenseCreate,
    LicenseUpdate,
    MaintenanceTaskCreate,
    MaintenanceTaskUpdate,
    ReviewCreate,
    ReviewUpdate,
    ToolCreate,
    ToolUpdate,
)
from foodtruck.schemas.recipe_book import RecipeBookCreate, RecipeBookUpdate

licenses_router = APIRouter()
maintenance_router = APIRouter()


@licenses_router.get("/expiring", response_model=List[Dict])
async def expiring_licenses(
    days: int = Query(default=30, ge=0),
    db: AsyncSession = Depends(get_async_session),
):
    """Licenses whose expiry date falls within the next `days` days (already expired included)."""
    horizon = dt.date.today() + dt.timedelta(days=days)
    res = await db.execute(
        select(LicenseModel)
        .where(LicenseModel.expiry_date.is_not(None), LicenseModel.expiry_date <= horizon)
        .order_by(LicenseModel.expiry_date.asc())
    )
    return [row.to_schema for row in res.scalars().all()]


@maintenance_router.get("/due", response_model=List[Dict])
async def due_maintenance(
    days: int = Query(default=7, ge=0),
    db: AsyncSession = Depends(get_async_session),
):
    """Open maintenance tasks due within the next `days` days, overdue ones first."""
    horizon = dt.date.today() + dt.timedelta(days=days)
    res = await db.execute(
        select(MaintenanceTaskModel)
        .where(
            MaintenanceTaskModel.next_due.is_not(None),
            MaintenanceTaskModel.next_due <= horizon,
            func.lower(MaintenanceTaskModel.status) != "completed",
        )
        .order_by(MaintenanceTaskModel.next_due.asc())
    )
    return [row.to_schema for row in res.scalars().all()]


build_crud_router(
    LicenseModel,
    LicenseCreate,
    LicenseUpdate,
    label="License",
    search_fields=("name", "issuer"),
    order_by=(LicenseModel.expiry_date.asc(),),
    router=licenses_router,
)

build_crud_router(
    MaintenanceTaskModel,
    MaintenanceTaskCreate,
    MaintenanceTaskUpdate,
    label="Maintenance task",
    search_fields=("title", "equipment"),
    order_by=(MaintenanceTaskModel.next_due.asc(),),
    router=maintenance_router,
)

reviews_router = build_crud_router(
    ReviewModel,
    ReviewCreate,
    ReviewUpdate,
    label="Review",
    search_fields=("reviewer", "platform"),
    order_by=(ReviewModel.review_date.desc(), ReviewModel.id.desc()),
)

expenses_router = build_crud_router(
    ExpenseModel,
    ExpenseCreate,
    ExpenseUpdate,
    label="Expense",
    search_fields=("description", "vendor", "category"),
    order_by=(ExpenseModel.date.desc(), ExpenseModel.id.desc()),
)

tools_router = build_crud_router(
    ToolModel,
    ToolCreate,
    ToolUpdate,
    label="Tool",
    search_fields=("name", "category"),
    order_by=(func.lower(ToolModel.name).asc(),),
)

equipment_router = build_crud_router(
    EquipmentModel,
    EquipmentCreate,
    EquipmentUpdate,
    label="Equipment",
    search_fields=("name", "serial_number"),
    order_by=(func.lower(EquipmentModel.name).asc(),),
)

recipe_book_router = build_crud_router(
    RecipeBookModel,
    RecipeBookCreate,
    RecipeBookUpdate,
    label="Recipe",
    search_fields=("name",),
    order_by=(func.lower(RecipeBookModel.name).asc(),),
)
