from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text

from ..database import Base, utcnow


class WasteLog(Base):
    __tablename__ = "waste_log"

    id = Column(Integer, primary_key=True)
    inventory_id = Column(Integer, ForeignKey("inventory.id", ondelete="SET NULL"), nullable=True, index=True)
    item_name = Column(String, nullable=True)
    amount = Column(Float, nullable=False)
    unit = Column(String, nullable=True)
    reason = Column(String, nullable=False)
    cost = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
