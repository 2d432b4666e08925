from sqlalchemy import Column, Date, DateTime, Float, Integer, String, Text

from .database import Base, utcnow


class CateringColumns:
    """Columns shared by live and archived catering orders."""

    client = Column(String, nullable=False)
    date = Column(Date, nullable=False, index=True)
    guests = Column(Integer, nullable=True)
    price = Column(Float, nullable=False, default=0)
    status = Column(String, nullable=False, default="Inquiry")
    deposit = Column(Float, nullable=False, default=0)
    setup_time = Column(String, nullable=True)
    contact_id = Column(Integer, nullable=True, index=True)
    menu_notes = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    @property
    def balance_due(self) -> float:
        return (self.price or 0) - (self.deposit or 0)


class CateringOrder(CateringColumns, Base):
    __tablename__ = "catering"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)

    @property
    def to_schema(self):
        return {**super().to_schema, "balance_due": self.balance_due}


class ArchivedCatering(CateringColumns, Base):
    __tablename__ = "archived_catering"

    id = Column(Integer, primary_key=True)
    original_id = Column(Integer, nullable=False, index=True)
    archived_date = Column(DateTime, nullable=False, default=utcnow)
