import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .common import strip_required


class MenuSpecialCreate(BaseModel):
    name: str
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    days_of_week: List[int] = []
    status: str = "active"
    category: str = "weekly"

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("days_of_week")
    @classmethod
    def _weekdays(cls, v: List[int]) -> List[int]:
        if any(d < 0 or d > 6 for d in v):
            raise ValueError("days_of_week entries must be 0 (Sunday) .. 6 (Saturday)")
        return sorted(set(v))

    @model_validator(mode="after")
    def _window(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class MenuSpecialUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    days_of_week: Optional[List[int]] = None
    status: Optional[str] = None
    category: Optional[str] = None

    @field_validator("days_of_week")
    @classmethod
    def _weekdays(cls, v: Optional[List[int]]) -> Optional[List[int]]:
        if v is None:
            return None
        if any(d < 0 or d > 6 for d in v):
            raise ValueError("days_of_week entries must be 0 (Sunday) .. 6 (Saturday)")
        return sorted(set(v))
