import datetime as dt
import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .common import strip_required

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _check_hhmm(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    if not _HHMM.match(v):
        raise ValueError("time must be HH:MM (24h)")
    return v


class EmployeeCreate(BaseModel):
    name: str
    role: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    hire_date: Optional[dt.date] = None
    status: str = "active"
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return strip_required(v)


class EmployeeUpdate(BaseModel):
    name: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    hourly_rate: Optional[float] = Field(default=None, ge=0)
    hire_date: Optional[dt.date] = None
    status: Optional[str] = None
    notes: Optional[str] = None


class TimePunchCreate(BaseModel):
    employee_id: int
    clock_in: dt.datetime
    clock_out: Optional[dt.datetime] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _order(self):
        if self.clock_out is not None and self.clock_out < self.clock_in:
            raise ValueError("clock_out must be after clock_in")
        return self


class TimePunchUpdate(BaseModel):
    clock_in: Optional[dt.datetime] = None
    clock_out: Optional[dt.datetime] = None
    notes: Optional[str] = None


class ClockRequest(BaseModel):
    employee_id: int
    notes: Optional[str] = None


class ScheduleCreate(BaseModel):
    employee_id: int
    date: dt.date
    start_time: str
    end_time: str
    position: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _hhmm(cls, v: str) -> str:
        return _check_hhmm(v)


class ScheduleUpdate(BaseModel):
    employee_id: Optional[int] = None
    date: Optional[dt.date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    position: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _hhmm(cls, v: Optional[str]) -> Optional[str]:
        return _check_hhmm(v)


class AvailabilityCreate(BaseModel):
    employee_id: int
    day_of_week: int = Field(ge=0, le=6)
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_available: bool = True
    notes: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _hhmm(cls, v: Optional[str]) -> Optional[str]:
        return _check_hhmm(v)


class AvailabilityUpdate(BaseModel):
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_available: Optional[bool] = None
    notes: Optional[str] = None


class ShiftSwapCreate(BaseModel):
    schedule_id: int
    requester_id: int
    target_employee_id: Optional[int] = None
    reason: Optional[str] = None


class ShiftSwapUpdate(BaseModel):
    target_employee_id: Optional[int] = None
    reason: Optional[str] = None


class ShiftSwapResolve(BaseModel):
    # required on approve when the request named no target
    target_employee_id: Optional[int] = None


class PerformanceReviewCreate(BaseModel):
    employee_id: int
    review_date: dt.date
    rating: int = Field(ge=1, le=5)
    reviewer: Optional[str] = None
    strengths: Optional[str] = None
    improvements: Optional[str] = None
    notes: Optional[str] = None


class PerformanceReviewUpdate(BaseModel):
    review_date: Optional[dt.date] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    reviewer: Optional[str] = None
    strengths: Optional[str] = None
    improvements: Optional[str] = None
    notes: Optional[str] = None

