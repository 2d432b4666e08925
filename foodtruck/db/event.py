from sqlalchemy import Column, Date, DateTime, Float, Integer, String, Text

from .database import Base, utcnow


class EventColumns:
    """Columns shared by live and archived events."""

    name = Column(String, nullable=False)
    type = Column(String, nullable=True)
    location = Column(String, nullable=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(String, nullable=True)
    fee = Column(Float, nullable=False, default=0)
    revenue = Column(Float, nullable=True)
    status = Column(String, nullable=False, default="Interested")
    contact_id = Column(Integer, nullable=True, index=True)
    notes = Column(Text, nullable=True)


class Event(EventColumns, Base):
    __tablename__ = "events"
    # Never reuse ids: archived rows are restored under their original id
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)


class ArchivedEvent(EventColumns, Base):
    __tablename__ = "archived_events"

    id = Column(Integer, primary_key=True)
    original_id = Column(Integer, nullable=False, index=True)
    archived_date = Column(DateTime, nullable=False, default=utcnow)
