from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String

from ..database import Base, utcnow


class InventoryItem(Base):
    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id", ondelete="CASCADE"), nullable=True, index=True)
    supplier_id = Column(Integer, ForeignKey("suppliers.id", ondelete="SET NULL"), nullable=True)

    name = Column(String, nullable=False, index=True)
    unit = Column(String, nullable=False)
    category = Column(String, nullable=False, default="Other")
    barcode = Column(String, nullable=True, index=True)
    cost_per_unit = Column(Float, nullable=True)

    # Running total; only the stock ledger writes it after creation
    current_stock = Column(Float, nullable=False, default=0)
    min_stock = Column(Float, nullable=False, default=0)
    max_stock = Column(Float, nullable=False, default=0)

    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    @property
    def low_stock(self) -> bool:
        return (self.current_stock or 0) <= (self.min_stock or 0)

    @property
    def to_schema(self):
        return {**super().to_schema, "low_stock": self.low_stock}
