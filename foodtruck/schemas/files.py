from typing import Optional

from pydantic import BaseModel, field_validator

from .common import strip_required


class StoredFileCreate(BaseModel):
    name: str
    path: str
    filename: Optional[str] = None
    category: str = "General"
    mime_type: Optional[str] = None
    size: Optional[int] = None
    notes: Optional[str] = None

    @field_validator("name", "path")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        return strip_required(v)


class StoredFileUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    notes: Optional[str] = None


class UploadOut(BaseModel):
    id: int
    filename: str
    path: str
