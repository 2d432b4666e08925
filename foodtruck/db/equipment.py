from sqlalchemy import Column, Date, Float, Integer, String, Text

from .database import Base


class Tool(Base):
    __tablename__ = "tools"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True)
    quantity = Column(Integer, nullable=False, default=1)
    condition = Column(String, nullable=True)
    location = Column(String, nullable=True)
    notes = Column(Text, nullable=True)


class EquipmentTracking(Base):
    __tablename__ = "equipment_tracking"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    serial_number = Column(String, nullable=True)
    purchase_date = Column(Date, nullable=True)
    purchase_price = Column(Float, nullable=True)
    warranty_expiry = Column(Date, nullable=True)
    last_service_date = Column(Date, nullable=True)
    next_service_date = Column(Date, nullable=True)
    status = Column(String, nullable=False, default="operational")
    notes = Column(Text, nullable=True)


class MaintenanceTask(Base):
    __tablename__ = "maintenance_tasks"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    equipment = Column(String, nullable=True)
    frequency = Column(String, nullable=True)
    last_done = Column(Date, nullable=True)
    next_due = Column(Date, nullable=True, index=True)
    status = Column(String, nullable=False, default="pending")
    notes = Column(Text, nullable=True)
