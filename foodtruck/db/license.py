from sqlalchemy import Column, Date, Float, Integer, String, Text

from .database import Base


class License(Base):
    __tablename__ = "licenses"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    issuer = Column(String, nullable=True)
    license_number = Column(String, nullable=True)
    issue_date = Column(Date, nullable=True)
    expiry_date = Column(Date, nullable=True, index=True)
    cost = Column(Float, nullable=True)
    file_path = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
