from typing import Optional

from pydantic import BaseModel, field_validator

from .common import strip_required


class ContactCreate(BaseModel):
    name: str
    company: Optional[str] = None
    category: str = "Client"
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return strip_required(v)


class ContactUpdate(BaseModel):
    name: Optional[str] = None
    company: Optional[str] = None
    category: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None


class NoteCreate(BaseModel):
    title: str
    content: Optional[str] = None
    category: Optional[str] = None
    contact_id: Optional[int] = None
    pinned: bool = False

    @field_validator("title")
    @classmethod
    def _title(cls, v: str) -> str:
        return strip_required(v)


class NoteUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    contact_id: Optional[int] = None
    pinned: Optional[bool] = None
