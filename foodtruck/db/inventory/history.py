from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text

from ..database import Base, utcnow


class InventoryHistory(Base):
    __tablename__ = "inventory_history"

    id = Column(Integer, primary_key=True)
    inventory_id = Column(Integer, ForeignKey("inventory.id", ondelete="SET NULL"), nullable=True, index=True)
    item_name = Column(String, nullable=True)

    # 'initial' | 'restock' | 'used' | 'waste' | 'adjustment' | 'count'
    change_type = Column(String, nullable=False, index=True)
    change_amount = Column(Float, nullable=False)
    previous_stock = Column(Float, nullable=False)
    new_stock = Column(Float, nullable=False)
    reason = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
