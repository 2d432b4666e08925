from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class BusinessInfoIn(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    logo_path: Optional[str] = None
    default_margin: Optional[float] = Field(default=None, ge=0, le=100)


class SettingIn(BaseModel):
    key: str
    value: Any = None

    @field_validator("key")
    @classmethod
    def _key(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("key is required")
        return v


class SettingValueIn(BaseModel):
    value: Any = None
