from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .common import strip_optional, strip_required


class MenuItemCreate(BaseModel):
    name: str
    price: float = Field(ge=0)
    cost: float = Field(default=0, ge=0)
    recipe_type: str = "Food"
    portions: int = Field(default=1, ge=1)
    description: Optional[str] = None
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def _name(cls, v: str) -> str:
        return strip_required(v)


class MenuItemUpdate(BaseModel):
    name: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    cost: Optional[float] = Field(default=None, ge=0)
    recipe_type: Optional[str] = None
    portions: Optional[int] = Field(default=None, ge=1)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class RecipeLineIn(BaseModel):
    ingredient_id: int
    quantity: float = Field(gt=0)
    notes: Optional[str] = None

    @field_validator("notes")
    @classmethod
    def _notes(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)


class RecipeSave(BaseModel):
    menu_id: int
    ingredients: List[RecipeLineIn]
