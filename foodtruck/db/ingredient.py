from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String

from .database import Base


class Ingredient(Base):
    """Recipe-grade ingredient; `cost` is per purchase unit, split into `servings` portions."""
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, index=True)
    cost = Column(Float, nullable=False, default=0)
    unit = Column(String, nullable=False)
    servings = Column(Integer, nullable=False, default=1)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="SET NULL"), nullable=True, index=True)

    # Compound ingredients are costed from another menu item's recipe
    is_compound = Column(Boolean, nullable=False, default=False)
    sub_recipe_id = Column(Integer, ForeignKey("menu.id", ondelete="SET NULL"), nullable=True)

    @property
    def cost_per_serving(self) -> float:
        return (self.cost or 0) / (self.servings or 1)

    @property
    def to_schema(self):
        return {**super().to_schema, "cost_per_serving": round(self.cost_per_serving, 4)}
