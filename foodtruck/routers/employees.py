import datetime as dt
import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.core.errors import ConflictError, NotFoundError
from foodtruck.db.database import (
    get_async_session,
    utcnow,
    Availability as AvailabilityModel,
    Employee as EmployeeModel,
    PerformanceReview as PerformanceReviewModel,
    Schedule as ScheduleModel,
    ShiftSwap as ShiftSwapModel,
    TimePunch as TimePunchModel,
)
from foodtruck.routers.crud import build_crud_router, get_or_404
from foodtruck.schemas.employees import (
    AvailabilityCreate,
    AvailabilityUpdate,
    ClockRequest,
    EmployeeCreate,
    EmployeeUpdate,
    PerformanceReviewCreate,
    PerformanceReviewUpdate,
    ScheduleCreate,
    ScheduleUpdate,
    ShiftSwapCreate,
    ShiftSwapResolve,
    ShiftSwapUpdate,
    TimePunchCreate,
    TimePunchUpdate,
)

logger = logging.getLogger(__name__)

employees_router = APIRouter()
time_punches_router = APIRouter()
shift_swaps_router = APIRouter()


async def _open_punch(db: AsyncSession, employee_id: int) -> Optional[TimePunchModel]:
    res = await db.execute(
        select(TimePunchModel)
        .where(TimePunchModel.employee_id == employee_id, TimePunchModel.clock_out.is_(None))
        .order_by(TimePunchModel.clock_in.desc())
        .limit(1)
    )
    return res.scalar_one_or_none()


@employees_router.get("/{employee_id}/hours", response_model=Dict)
async def get_employee_hours(
    employee_id: int,
    start: Optional[dt.date] = None,
    end: Optional[dt.date] = None,
    db: AsyncSession = Depends(get_async_session),
):
    """Total closed-punch hours, and pay when an hourly rate is set."""
    employee = await get_or_404(db, EmployeeModel, employee_id, "Employee")
    stmt = select(TimePunchModel).where(
        TimePunchModel.employee_id == employee_id, TimePunchModel.clock_out.is_not(None)
    )
    if start:
        stmt = stmt.where(TimePunchModel.clock_in >= dt.datetime.combine(start, dt.time.min))
    if end:
        stmt = stmt.where(TimePunchModel.clock_in < dt.datetime.combine(end + dt.timedelta(days=1), dt.time.min))
    punches = (await db.execute(stmt)).scalars().all()
    total = round(sum(p.hours or 0 for p in punches), 2)
    return {
        "employee_id": employee.id,
        "name": employee.name,
        "start": start.isoformat() if start else None,
        "end": end.isoformat() if end else None,
        "punches": len(punches),
        "total_hours": total,
        "estimated_pay": round(total * employee.hourly_rate, 2) if employee.hourly_rate else None,
    }


@time_punches_router.post("/clock-in", response_model=Dict, status_code=status.HTTP_201_CREATED)
async def clock_in(payload: ClockRequest, db: AsyncSession = Depends(get_async_session)):
    await get_or_404(db, EmployeeModel, payload.employee_id, "Employee")
    if await _open_punch(db, payload.employee_id):
        raise ConflictError("Employee is already clocked in")
    punch = TimePunchModel(employee_id=payload.employee_id, clock_in=utcnow(), notes=payload.notes)
    db.add(punch)
    await db.commit()
    await db.refresh(punch)
    return punch.to_schema


@time_punches_router.post("/clock-out", response_model=Dict)
async def clock_out(payload: ClockRequest, db: AsyncSession = Depends(get_async_session)):
    punch = await _open_punch(db, payload.employee_id)
    if not punch:
        raise NotFoundError("No open time punch for this employee")
    punch.clock_out = utcnow()
    if payload.notes:
        punch.notes = payload.notes
    await db.commit()
    await db.refresh(punch)
    return punch.to_schema


async def _resolve_swap(db: AsyncSession, swap_id: int, new_status: str) -> ShiftSwapModel:
    swap = await get_or_404(db, ShiftSwapModel, swap_id, "Shift swap")
    if swap.status != "pending":
        raise ConflictError(f"Shift swap is already {swap.status}")
    swap.status = new_status
    swap.resolved_at = utcnow()
    return swap


@shift_swaps_router.post("/{swap_id}/approve", response_model=Dict)
async def approve_swap(
    swap_id: int,
    payload: Optional[ShiftSwapResolve] = None,
    db: AsyncSession = Depends(get_async_session),
):
    """Approve a pending swap and hand the shift to the target employee."""
    swap = await _resolve_swap(db, swap_id, "approved")
    if payload and payload.target_employee_id is not None:
        swap.target_employee_id = payload.target_employee_id
    if swap.target_employee_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A target employee is required to approve a swap",
        )
    await get_or_404(db, EmployeeModel, swap.target_employee_id, "Employee")
    schedule = await get_or_404(db, ScheduleModel, swap.schedule_id, "Schedule")
    schedule.employee_id = swap.target_employee_id
    await db.commit()
    await db.refresh(swap)
    logger.info("Shift swap %s approved; schedule %s moved to employee %s", swap.id, schedule.id, schedule.employee_id)
    return swap.to_schema


@shift_swaps_router.post("/{swap_id}/reject", response_model=Dict)
async def reject_swap(swap_id: int, db: AsyncSession = Depends(get_async_session)):
    swap = await _resolve_swap(db, swap_id, "rejected")
    await db.commit()
    await db.refresh(swap)
    return swap.to_schema


build_crud_router(
    EmployeeModel,
    EmployeeCreate,
    EmployeeUpdate,
    label="Employee",
    search_fields=("name", "role"),
    order_by=(func.lower(EmployeeModel.name).asc(),),
    router=employees_router,
)

build_crud_router(
    TimePunchModel,
    TimePunchCreate,
    TimePunchUpdate,
    label="Time punch",
    order_by=(TimePunchModel.clock_in.desc(),),
    router=time_punches_router,
)

build_crud_router(
    ShiftSwapModel,
    ShiftSwapCreate,
    ShiftSwapUpdate,
    label="Shift swap",
    order_by=(ShiftSwapModel.created_at.desc(),),
    router=shift_swaps_router,
)

schedules_router = build_crud_router(
    ScheduleModel,
    ScheduleCreate,
    ScheduleUpdate,
    label="Schedule",
    search_fields=("position",),
    order_by=(ScheduleModel.date.asc(), ScheduleModel.start_time.asc()),
)

availability_router = build_crud_router(
    AvailabilityModel,
    AvailabilityCreate,
    AvailabilityUpdate,
    label="Availability",
    order_by=(AvailabilityModel.employee_id.asc(), AvailabilityModel.day_of_week.asc()),
)

performance_reviews_router = build_crud_router(
    PerformanceReviewModel,
    PerformanceReviewCreate,
    PerformanceReviewUpdate,
    label="Performance review",
    search_fields=("reviewer",),
    order_by=(PerformanceReviewModel.review_date.desc(),),
)
