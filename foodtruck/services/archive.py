"""Move events and catering orders into their archive tables and back.

Each operation copies the row, then deletes the source, inside the caller's
transaction. Restored rows keep their original id.
"""
import logging

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.core.errors import ArchiveConflict, NotFoundError
from foodtruck.db.database import ArchivedCatering, ArchivedEvent, CateringOrder, Event

logger = logging.getLogger(__name__)

# live model -> archive model
ARCHIVES = {
    Event: ArchivedEvent,
    CateringOrder: ArchivedCatering,
}

_LABELS = {Event: "Event", CateringOrder: "Catering order"}


def _shared_values(row) -> dict:
    """Column values of `row` except the primary key."""
    return {
        attr.key: getattr(row, attr.key)
        for attr in sa_inspect(row).mapper.column_attrs
        if attr.key != "id"
    }


async def archive(db: AsyncSession, live_model, row_id: int):
    archive_model = ARCHIVES[live_model]
    row = await db.get(live_model, row_id)
    if row is None:
        raise NotFoundError(f"{_LABELS[live_model]} {row_id} not found")

    archived = archive_model(original_id=row.id, **_shared_values(row))
    db.add(archived)
    await db.delete(row)
    await db.flush()
    logger.info("Archived %s %s as %s", live_model.__tablename__, row_id, archived.id)
    return archived


async def restore(db: AsyncSession, live_model, archived_id: int):
    archive_model = ARCHIVES[live_model]
    archived = await db.get(archive_model, archived_id)
    if archived is None:
        raise NotFoundError(f"Archived {_LABELS[live_model].lower()} {archived_id} not found")

    if await db.get(live_model, archived.original_id) is not None:
        raise ArchiveConflict(
            f"{_LABELS[live_model]} {archived.original_id} already exists; cannot restore over it"
        )

    values = _shared_values(archived)
    values.pop("original_id")
    values.pop("archived_date")
    row = live_model(id=archived.original_id, **values)
    db.add(row)
    await db.delete(archived)
    await db.flush()
    logger.info("Restored %s %s from archive %s", live_model.__tablename__, row.id, archived_id)
    return row


async def archive_event(db: AsyncSession, event_id: int) -> ArchivedEvent:
    return await archive(db, Event, event_id)


async def restore_event(db: AsyncSession, archived_id: int) -> Event:
    return await restore(db, Event, archived_id)


async def archive_catering(db: AsyncSession, order_id: int) -> ArchivedCatering:
    return await archive(db, CateringOrder, order_id)


async def restore_catering(db: AsyncSession, archived_id: int) -> CateringOrder:
    return await restore(db, CateringOrder, archived_id)
