from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.db.database import (
    get_async_session,
    ArchivedCatering as ArchivedCateringModel,
    ArchivedEvent as ArchivedEventModel,
    CateringOrder as CateringOrderModel,
    Contact as ContactModel,
    Event as EventModel,
    Note as NoteModel,
)
from foodtruck.routers.crud import build_crud_router, get_or_404
from foodtruck.schemas.contacts import ContactCreate, ContactUpdate, NoteCreate, NoteUpdate

contacts_router = APIRouter()


async def _rows_for_contact(db: AsyncSession, model, contact_id: int, *order_by):
    res = await db.execute(select(model).where(model.contact_id == contact_id).order_by(*order_by))
    return [row.to_schema for row in res.scalars().all()]


@contacts_router.get("/{contact_id}/history", response_model=Dict)
async def get_contact_history(contact_id: int, db: AsyncSession = Depends(get_async_session)):
    """A contact with its events, catering orders (live and archived) and notes."""
    contact = await get_or_404(db, ContactModel, contact_id, "Contact")
    return {
        "contact": contact.to_schema,
        "events": await _rows_for_contact(db, EventModel, contact_id, EventModel.date.desc()),
        "archived_events": await _rows_for_contact(db, ArchivedEventModel, contact_id, ArchivedEventModel.date.desc()),
        "catering": await _rows_for_contact(db, CateringOrderModel, contact_id, CateringOrderModel.date.desc()),
        "archived_catering": await _rows_for_contact(
            db, ArchivedCateringModel, contact_id, ArchivedCateringModel.date.desc()
        ),
        "notes": await _rows_for_contact(db, NoteModel, contact_id, NoteModel.pinned.desc(), NoteModel.created_at.desc()),
    }


build_crud_router(
    ContactModel,
    ContactCreate,
    ContactUpdate,
    label="Contact",
    search_fields=("name", "company", "email"),
    order_by=(func.lower(ContactModel.name).asc(),),
    router=contacts_router,
)

notes_router = build_crud_router(
    NoteModel,
    NoteCreate,
    NoteUpdate,
    label="Note",
    search_fields=("title", "content"),
    order_by=(NoteModel.pinned.desc(), NoteModel.updated_at.desc()),
)
