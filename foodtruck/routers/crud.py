"""Generic list/get/create/replace/patch/delete routes for one table."""
from typing import Callable, Dict, List, Optional, Sequence, Type

from fastapi import APIRouter, Depends, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.core.errors import NotFoundError
from foodtruck.db.database import get_async_session


def column_values(model, payload: BaseModel) -> dict:
    columns = {c.key for c in model.__table__.columns}
    return {k: v for k, v in payload.model_dump().items() if k in columns}


async def get_or_404(db: AsyncSession, model, item_id, label: str):
    obj = await db.get(model, item_id)
    if obj is None:
        raise NotFoundError(f"{label} not found")
    return obj


def merged_payload(create_schema: Type[BaseModel], obj, changes: dict) -> dict:
    """Validate a partial update against the whole row it produces.

    Returns the validated values of the changed fields only.
    """
    try:
        merged = create_schema.model_validate({**obj.to_schema, **changes})
    except ValidationError as exc:
        raise RequestValidationError(
            [{**err, "loc": ("body", *err["loc"])} for err in exc.errors(include_url=False, include_context=False)]
        )
    validated = merged.model_dump()
    return {key: validated.get(key, value) for key, value in changes.items()}


def build_crud_router(
    model,
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    *,
    label: str,
    search_fields: Sequence[str] = (),
    order_by: Optional[Sequence] = None,
    to_db: Optional[Callable[[dict], dict]] = None,
    on_delete: Optional[Callable] = None,
    on_change: Optional[Callable] = None,
    router: Optional[APIRouter] = None,
) -> APIRouter:
    """Build the standard routes for `model`.

    - `search_fields`: columns matched case-insensitively by the `q` query parameter.
    - `to_db`: converts validated payload data into column values (e.g. JSON-encode a list).
    - `on_delete`: awaited with (db, obj) before the row is deleted.
    - `on_change`: awaited with (db, obj) after a PUT or PATCH, before the commit.
    - `router`: add the routes to an existing router, after its own special routes,
      so that paths like `/active` are matched before `/{item_id}`.
    """
    if router is None:
        router = APIRouter()
    convert = to_db or (lambda data: data)
    ordering = order_by if order_by is not None else (model.id.asc(),)

    @router.get("", response_model=List[Dict])
    async def list_items(
        q: Optional[str] = None,
        db: AsyncSession = Depends(get_async_session),
    ):
        stmt = select(model)
        term = (q or "").strip().lower()
        if term and search_fields:
            stmt = stmt.where(
                or_(*[func.lower(getattr(model, f)).contains(term) for f in search_fields])
            )
        res = await db.execute(stmt.order_by(*ordering))
        return [obj.to_schema for obj in res.scalars().all()]

    @router.get("/{item_id}", response_model=Dict)
    async def get_item(item_id: int, db: AsyncSession = Depends(get_async_session)):
        obj = await get_or_404(db, model, item_id, label)
        return obj.to_schema

    @router.post("", response_model=Dict, status_code=status.HTTP_201_CREATED)
    async def create_item(payload: create_schema, db: AsyncSession = Depends(get_async_session)):
        obj = model(**convert(column_values(model, payload)))
        db.add(obj)
        await db.commit()
        await db.refresh(obj)
        return obj.to_schema

    @router.put("/{item_id}", response_model=Dict)
    async def replace_item(
        item_id: int,
        payload: create_schema,
        db: AsyncSession = Depends(get_async_session),
    ):
        obj = await get_or_404(db, model, item_id, label)
        # fields left out of the body fall back to the schema defaults
        for key, value in convert(column_values(model, payload)).items():
            setattr(obj, key, value)
        if on_change is not None:
            await db.flush()
            await on_change(db, obj)
        await db.commit()
        await db.refresh(obj)
        return obj.to_schema

    @router.patch("/{item_id}", response_model=Dict)
    async def update_item(
        item_id: int,
        payload: update_schema,
        db: AsyncSession = Depends(get_async_session),
    ):
        obj = await get_or_404(db, model, item_id, label)
        data = convert(merged_payload(create_schema, obj, payload.model_dump(exclude_unset=True)))
        for key, value in data.items():
            setattr(obj, key, value)
        if on_change is not None:
            await db.flush()
            await on_change(db, obj)
        await db.commit()
        await db.refresh(obj)
        return obj.to_schema

    @router.delete("/{item_id}")
    async def delete_item(item_id: int, db: AsyncSession = Depends(get_async_session)):
        obj = await get_or_404(db, model, item_id, label)
        if on_delete is not None:
            await on_delete(db, obj)
        await db.delete(obj)
        await db.commit()
        return {"success": True}

    return router
