from sqlalchemy import Column, Date, Float, Integer, String, Text

from .database import Base


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    date = Column(Date, nullable=False, index=True)
    category = Column(String, nullable=False, default="Other", index=True)
    description = Column(String, nullable=True)
    amount = Column(Float, nullable=False)
    vendor = Column(String, nullable=True)
    payment_method = Column(String, nullable=True)
    receipt_path = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
