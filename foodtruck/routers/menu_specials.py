import datetime as dt
import json
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.db.database import get_async_session, MenuSpecial as MenuSpecialModel
from foodtruck.routers.crud import build_crud_router
from foodtruck.schemas.menu_specials import MenuSpecialCreate, MenuSpecialUpdate

public_router = APIRouter()


def weekday_index(day: dt.date) -> int:
    """0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7


def _encode_days(data: dict) -> dict:
    if "days_of_week" in data:
        days = data["days_of_week"]
        data["days_of_week"] = json.dumps(days) if days else None
    return data


@public_router.get("/active", response_model=List[Dict])
async def active_specials(on: Optional[dt.date] = None, db: AsyncSession = Depends(get_async_session)):
    """Specials running on a day (today by default)."""
    day = on or dt.date.today()
    res = await db.execute(
        select(MenuSpecialModel)
        .where(
            func.lower(MenuSpecialModel.status) == "active",
            or_(MenuSpecialModel.start_date.is_(None), MenuSpecialModel.start_date <= day),
            or_(MenuSpecialModel.end_date.is_(None), MenuSpecialModel.end_date >= day),
        )
        .order_by(MenuSpecialModel.id)
    )
    weekday = weekday_index(day)
    return [
        special.to_schema
        for special in res.scalars().all()
        if not special.weekdays or weekday in special.weekdays
    ]


router = build_crud_router(
    MenuSpecialModel,
    MenuSpecialCreate,
    MenuSpecialUpdate,
    label="Menu special",
    search_fields=("name",),
    order_by=(MenuSpecialModel.start_date.desc(), MenuSpecialModel.id.desc()),
    to_db=_encode_days,
)
