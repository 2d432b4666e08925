import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import strip_required


class EventCreate(BaseModel):
    name: str
    type: Optional[str] = None
    location: Optional[str] = None
    date: dt.date
    time: Optional[str] = None
    fee: float = Field(default=0, ge=0)
    revenue: Optional[float] = None
    status: str = "Interested"
    contact_id: Optional[int] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return strip_required(v)


class EventUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    location: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    fee: Optional[float] = Field(default=None, ge=0)
    revenue: Optional[float] = None
    status: Optional[str] = None
    contact_id: Optional[int] = None
    notes: Optional[str] = None


class CateringCreate(BaseModel):
    client: str
    date: dt.date
    guests: Optional[int] = Field(default=None, ge=0)
    price: float = Field(default=0, ge=0)
    status: str = "Inquiry"
    deposit: float = Field(default=0, ge=0)
    setup_time: Optional[str] = None
    contact_id: Optional[int] = None
    menu_notes: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("client")
    @classmethod
    def _client(cls, v: str) -> str:
        return strip_required(v)


class CateringUpdate(BaseModel):
    client: Optional[str] = None
    date: Optional[dt.date] = None
    guests: Optional[int] = Field(default=None, ge=0)
    price: Optional[float] = Field(default=None, ge=0)
    status: Optional[str] = None
    deposit: Optional[float] = Field(default=None, ge=0)
    setup_time: Optional[str] = None
    contact_id: Optional[int] = None
    menu_notes: Optional[str] = None
    notes: Optional[str] = None
