from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .common import strip_required


class IngredientCreate(BaseModel):
    name: str
    cost: float = Field(default=0, ge=0)
    unit: str
    servings: int = Field(default=1, ge=1)
    supplier_id: Optional[int] = None
    is_compound: bool = False
    sub_recipe_id: Optional[int] = None

    @field_validator("name", "unit")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        return strip_required(v)

    @model_validator(mode="after")
    def _compound_needs_recipe(self):
        if self.is_compound and not self.sub_recipe_id:
            raise ValueError("compound ingredients require sub_recipe_id")
        return self


class IngredientUpdate(BaseModel):
    name: Optional[str] = None
    cost: Optional[float] = Field(default=None, ge=0)
    unit: Optional[str] = None
    servings: Optional[int] = Field(default=None, ge=1)
    supplier_id: Optional[int] = None
    is_compound: Optional[bool] = None
    sub_recipe_id: Optional[int] = None
