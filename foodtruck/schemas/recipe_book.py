from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .common import strip_required


class RecipeBookCreate(BaseModel):
    name: str
    description: Optional[str] = None
    prep_time: Optional[str] = None
    cook_time: Optional[str] = None
    servings: Optional[int] = Field(default=None, ge=1)
    ingredients: Optional[str] = None
    instructions: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return strip_required(v)


class RecipeBookUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    prep_time: Optional[str] = None
    cook_time: Optional[str] = None
    servings: Optional[int] = Field(default=None, ge=1)
    ingredients: Optional[str] = None
    instructions: Optional[str] = None
