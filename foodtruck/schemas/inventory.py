from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .common import strip_optional


ChangeType = Literal["initial", "restock", "used", "waste", "adjustment", "count"]


class InventoryItemCreate(BaseModel):
    ingredient_id: Optional[int] = None
    # Without ingredient_id, name + unit are required
    name: Optional[str] = None
    unit: Optional[str] = None
    category: str = "Other"
    barcode: Optional[str] = None
    cost_per_unit: Optional[float] = Field(default=None, ge=0)
    supplier_id: Optional[int] = None
    current_stock: float = 0
    min_stock: float = Field(default=0, ge=0)
    max_stock: float = Field(default=0, ge=0)
    # Also create a recipe-grade ingredient (cost 0) and link it
    create_ingredient: bool = False

    @field_validator("name", "unit", "barcode")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)

    @field_validator("category")
    @classmethod
    def _category(cls, v: Optional[str]) -> str:
        return strip_optional(v) or "Other"

    @model_validator(mode="after")
    def _name_and_unit_without_ingredient(self):
        if self.ingredient_id is None and (not self.name or not self.unit):
            raise ValueError("name and unit are required when ingredient_id is not given")
        if self.ingredient_id is not None and self.create_ingredient:
            raise ValueError("create_ingredient cannot be combined with ingredient_id")
        return self


class InventoryItemUpdate(BaseModel):
    name: Optional[str] = None
    unit: Optional[str] = None
    category: Optional[str] = None
    barcode: Optional[str] = None
    cost_per_unit: Optional[float] = Field(default=None, ge=0)
    supplier_id: Optional[int] = None
    min_stock: Optional[float] = Field(default=None, ge=0)
    max_stock: Optional[float] = Field(default=None, ge=0)

    # Setting current_stock records the difference in inventory_history
    current_stock: Optional[float] = None
    change_type: ChangeType = "adjustment"
    reason: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name", "unit", "category", "min_stock", "max_stock")
    @classmethod
    def _not_null(cls, v):
        # the columns are NOT NULL; leave the field out to keep the stored value
        if v is None:
            raise ValueError("cannot be null")
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("cannot be empty")
        return v


class StockAdjustment(BaseModel):
    delta: float
    change_type: ChangeType = "adjustment"
    reason: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("reason", "notes")
    @classmethod
    def _strip_nullable(cls, v: Optional[str]) -> Optional[str]:
        return strip_optional(v)

    @model_validator(mode="after")
    def _sign_matches_type(self):
        if self.change_type in {"used", "waste"} and self.delta > 0:
            raise ValueError(f"{self.change_type} adjustments must have a negative delta")
        if self.change_type == "restock" and self.delta < 0:
            raise ValueError("restock adjustments must have a positive delta")
        return self


class WasteCreate(BaseModel):
    inventory_id: int
    amount: float = Field(gt=0)
    reason: str = "Spoiled"
    unit: Optional[str] = None
    cost: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None

    @field_validator("reason")
    @classmethod
    def _reason(cls, v: str) -> str:
        return strip_optional(v) or "Spoiled"

