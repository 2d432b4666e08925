from sqlalchemy import Column, Integer, String, Text

from .database import Base


class Supplier(Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, index=True)
    contact = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    address = Column(String, nullable=True)
    category = Column(String, nullable=False, default="Food")
    description = Column(Text, nullable=True)
