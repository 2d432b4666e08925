from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, Text

from .database import Base


class MenuItem(Base):
    __tablename__ = "menu"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, index=True)
    price = Column(Float, nullable=False)
    # Cached total recipe cost; rewritten whenever the recipe is saved
    cost = Column(Float, nullable=False, default=0)
    recipe_type = Column(String, nullable=False, default="Food")
    portions = Column(Integer, nullable=False, default=1)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    @property
    def profit_margin(self):
        if not self.price:
            return None
        return round((self.price - (self.cost or 0)) / self.price * 100, 2)

    @property
    def to_schema(self):
        return {**super().to_schema, "profit_margin": self.profit_margin}


class RecipeLine(Base):
    """One ingredient of a menu item's recipe; quantity is in ingredient servings."""
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True)
    menu_id = Column(Integer, ForeignKey("menu.id", ondelete="CASCADE"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id", ondelete="CASCADE"), nullable=False, index=True)
    quantity = Column(Float, nullable=False)
    notes = Column(Text, nullable=True)
