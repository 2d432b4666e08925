import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import strip_required


class ReviewCreate(BaseModel):
    reviewer: str
    rating: int = Field(ge=1, le=5)
    platform: Optional[str] = None
    comment: Optional[str] = None
    review_date: Optional[dt.date] = None
    response: Optional[str] = None

    @field_validator("reviewer")
    @classmethod
    def _reviewer(cls, v: str) -> str:
        return strip_required(v)


class ReviewUpdate(BaseModel):
    reviewer: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    platform: Optional[str] = None
    comment: Optional[str] = None
    review_date: Optional[dt.date] = None
    response: Optional[str] = None


class ExpenseCreate(BaseModel):
    date: dt.date
    category: str = "Other"
    description: Optional[str] = None
    amount: float = Field(ge=0)
    vendor: Optional[str] = None
    payment_method: Optional[str] = None
    receipt_path: Optional[str] = None
    notes: Optional[str] = None


class ExpenseUpdate(BaseModel):
    date: Optional[dt.date] = None
    category: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[float] = Field(default=None, ge=0)
    vendor: Optional[str] = None
    payment_method: Optional[str] = None
    receipt_path: Optional[str] = None
    notes: Optional[str] = None


class ToolCreate(BaseModel):
    name: str
    category: Optional[str] = None
    quantity: int = Field(default=1, ge=0)
    condition: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return strip_required(v)


class ToolUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[int] = Field(default=None, ge=0)
    condition: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None


class EquipmentCreate(BaseModel):
    name: str
    serial_number: Optional[str] = None
    purchase_date: Optional[dt.date] = None
    purchase_price: Optional[float] = Field(default=None, ge=0)
    warranty_expiry: Optional[dt.date] = None
    last_service_date: Optional[dt.date] = None
    next_service_date: Optional[dt.date] = None
    status: str = "operational"
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return strip_required(v)


class EquipmentUpdate(BaseModel):
    name: Optional[str] = None
    serial_number: Optional[str] = None
    purchase_date: Optional[dt.date] = None
    purchase_price: Optional[float] = Field(default=None, ge=0)
    warranty_expiry: Optional[dt.date] = None
    last_service_date: Optional[dt.date] = None
    next_service_date: Optional[dt.date] = None
    status: Optional[str] = None
    notes: Optional[str] = None


class LicenseCreate(BaseModel):
    name: str
    issuer: Optional[str] = None
    license_number: Optional[str] = None
    issue_date: Optional[dt.date] = None
    expiry_date: Optional[dt.date] = None
    cost: Optional[float] = Field(default=None, ge=0)
    file_path: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return strip_required(v)


class LicenseUpdate(BaseModel):
    name: Optional[str] = None
    issuer: Optional[str] = None
    license_number: Optional[str] = None
    issue_date: Optional[dt.date] = None
    expiry_date: Optional[dt.date] = None
    cost: Optional[float] = Field(default=None, ge=0)
    file_path: Optional[str] = None
    notes: Optional[str] = None


class MaintenanceTaskCreate(BaseModel):
    title: str
    equipment: Optional[str] = None
    frequency: Optional[str] = None
    last_done: Optional[dt.date] = None
    next_due: Optional[dt.date] = None
    status: str = "pending"
    notes: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title(cls, v: str) -> str:
        return strip_required(v)


class MaintenanceTaskUpdate(BaseModel):
    title: Optional[str] = None
    equipment: Optional[str] = None
    frequency: Optional[str] = None
    last_done: Optional[dt.date] = None
    next_due: Optional[dt.date] = None
    status: Optional[str] = None
    notes: Optional[str] = None
