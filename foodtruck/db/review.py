from sqlalchemy import Column, Date, Integer, String, Text

from .database import Base


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True)
    reviewer = Column(String, nullable=False)
    rating = Column(Integer, nullable=False)
    platform = Column(String, nullable=True)
    comment = Column(Text, nullable=True)
    review_date = Column(Date, nullable=True)
    response = Column(Text, nullable=True)
