import json
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.core.auth import current_active_user
from foodtruck.db.database import (
    get_async_session,
    BusinessInfo as BusinessInfoModel,
    Setting as SettingModel,
)
from foodtruck.db.users import User
from foodtruck.schemas.business import BusinessInfoIn, SettingIn, SettingValueIn

router = APIRouter()
settings_router = APIRouter()

BUSINESS_INFO_ID = 1


def _default_business_info() -> dict:
    return {
        "id": BUSINESS_INFO_ID,
        "name": None,
        "phone": None,
        "email": None,
        "website": None,
        "address": None,
        "logo_path": None,
        "default_margin": 30,
    }


@router.get("", response_model=Dict)
async def get_business_info(db: AsyncSession = Depends(get_async_session)):
    """Business profile; defaults when nothing was saved yet."""
    info = await db.get(BusinessInfoModel, BUSINESS_INFO_ID)
    return info.to_schema if info else _default_business_info()


async def _upsert_business_info(payload: BusinessInfoIn, db: AsyncSession) -> dict:
    info = await db.get(BusinessInfoModel, BUSINESS_INFO_ID)
    if info is None:
        info = BusinessInfoModel(id=BUSINESS_INFO_ID)
        db.add(info)
    for key, value in payload.model_dump(exclude_unset=True).items():
        if key == "default_margin" and value is None:
            continue
        setattr(info, key, value)
    await db.commit()
    await db.refresh(info)
    return info.to_schema


@router.post("", response_model=Dict)
async def save_business_info(
    payload: BusinessInfoIn,
    user: User = Depends(current_active_user),
    db: AsyncSession = Depends(get_async_session),
):
    return await _upsert_business_info(payload, db)


@router.put("", response_model=Dict)
async def replace_business_info(
    payload: BusinessInfoIn,
    user: User = Depends(current_active_user),
    db: AsyncSession = Depends(get_async_session),
):
    return await _upsert_business_info(payload, db)


# /api/settings: text values; anything else is stored JSON-encoded

def encode_value(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value)


async def _put_setting(db: AsyncSession, key: str, value: Any) -> SettingModel:
    row = await db.get(SettingModel, key)
    if row is None:
        row = SettingModel(key=key)
        db.add(row)
    row.value = encode_value(value)
    return row


@settings_router.get("", response_model=Dict)
async def list_settings(db: AsyncSession = Depends(get_async_session)):
    res = await db.execute(select(SettingModel).order_by(SettingModel.key))
    return {row.key: row.value for row in res.scalars().all()}


@settings_router.post("", response_model=Dict)
async def save_setting(payload: SettingIn, db: AsyncSession = Depends(get_async_session)):
    row = await _put_setting(db, payload.key, payload.value)
    await db.commit()
    return {"success": True, "key": row.key, "value": row.value}


@settings_router.post("/bulk", response_model=Dict)
async def save_settings_bulk(
    values: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_async_session),
):
    """Save several settings in one transaction."""
    for key, value in values.items():
        key = key.strip()
        if key:
            await _put_setting(db, key, value)
    await db.commit()
    return {"success": True, "count": len(values)}


@settings_router.get("/{key}", response_model=Dict)
async def get_setting(key: str, db: AsyncSession = Depends(get_async_session)):
    row = await db.get(SettingModel, key)
    return {"key": key, "value": row.value if row else None}


@settings_router.post("/{key}", response_model=Dict)
async def save_setting_by_key(
    key: str,
    payload: SettingValueIn,
    db: AsyncSession = Depends(get_async_session),
):
    row = await _put_setting(db, key, payload.value)
    await db.commit()
    return {"success": True, "key": row.key, "value": row.value}


@settings_router.delete("/{key}")
async def delete_setting(key: str, db: AsyncSession = Depends(get_async_session)):
    row = await db.get(SettingModel, key)
    if row is not None:
        await db.delete(row)
        await db.commit()
    return {"success": True}
