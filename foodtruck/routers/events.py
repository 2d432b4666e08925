from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.db.database import (
    get_async_session,
    ArchivedCatering as ArchivedCateringModel,
    ArchivedEvent as ArchivedEventModel,
    CateringOrder as CateringOrderModel,
    Event as EventModel,
)
from foodtruck.routers.crud import build_crud_router
from foodtruck.schemas.events import CateringCreate, CateringUpdate, EventCreate, EventUpdate
from foodtruck.services import archive

events_router = APIRouter()
archived_events_router = APIRouter()
catering_router = APIRouter()
archived_catering_router = APIRouter()


def _archive_routes(live_router: APIRouter, archived_router: APIRouter, live_model, archive_model, label: str):
    """Archive/restore routes for one live table and its archive table."""

    @live_router.post("/{item_id}/archive", response_model=Dict)
    async def archive_row(item_id: int, db: AsyncSession = Depends(get_async_session)):
        archived = await archive.archive(db, live_model, item_id)
        await db.commit()
        return {"success": True, "archived": archived.to_schema}

    @live_router.post("/{archived_id}/restore", response_model=Dict)
    async def restore_row_alias(archived_id: int, db: AsyncSession = Depends(get_async_session)):
        """Same as POST /archived-.../{archived_id}/restore."""
        row = await archive.restore(db, live_model, archived_id)
        await db.commit()
        return {"success": True, "restored": row.to_schema}

    @archived_router.get("", response_model=List[Dict])
    async def list_archived(db: AsyncSession = Depends(get_async_session)):
        res = await db.execute(
            select(archive_model).order_by(archive_model.archived_date.desc(), archive_model.id.desc())
        )
        return [row.to_schema for row in res.scalars().all()]

    @archived_router.get("/{archived_id}", response_model=Dict)
    async def get_archived(archived_id: int, db: AsyncSession = Depends(get_async_session)):
        row = await db.get(archive_model, archived_id)
        if not row:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Archived {label} not found")
        return row.to_schema

    @archived_router.post("/{archived_id}/restore", response_model=Dict)
    async def restore_row(archived_id: int, db: AsyncSession = Depends(get_async_session)):
        row = await archive.restore(db, live_model, archived_id)
        await db.commit()
        return {"success": True, "restored": row.to_schema}

    @archived_router.delete("/{archived_id}")
    async def delete_archived(archived_id: int, db: AsyncSession = Depends(get_async_session)):
        """Permanently delete an archived row."""
        row = await db.get(archive_model, archived_id)
        if not row:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Archived {label} not found")
        await db.delete(row)
        await db.commit()
        return {"success": True}


_archive_routes(events_router, archived_events_router, EventModel, ArchivedEventModel, "event")
_archive_routes(catering_router, archived_catering_router, CateringOrderModel, ArchivedCateringModel, "catering order")

build_crud_router(
    EventModel,
    EventCreate,
    EventUpdate,
    label="Event",
    search_fields=("name", "location"),
    order_by=(EventModel.date.asc(), EventModel.id.asc()),
    router=events_router,
)

build_crud_router(
    CateringOrderModel,
    CateringCreate,
    CateringUpdate,
    label="Catering order",
    search_fields=("client",),
    order_by=(CateringOrderModel.date.asc(), CateringOrderModel.id.asc()),
    router=catering_router,
)
