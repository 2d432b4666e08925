from sqlalchemy import Column, Float, Integer, String, Text

from .database import Base


class BusinessInfo(Base):
    """Single-row table (id=1)."""
    __tablename__ = "business_info"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    website = Column(String, nullable=True)
    address = Column(String, nullable=True)
    logo_path = Column(String, nullable=True)
    default_margin = Column(Float, nullable=False, default=30)


class Setting(Base):
    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=True)
