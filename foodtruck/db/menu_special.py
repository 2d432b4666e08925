import json

from sqlalchemy import Column, Date, Float, Integer, String, Text

from .database import Base


class MenuSpecial(Base):
    __tablename__ = "menu_specials"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    # JSON list of weekdays, 0=Sunday .. 6=Saturday, e.g. "[2]"
    days_of_week = Column(Text, nullable=True)
    status = Column(String, nullable=False, default="active")
    category = Column(String, nullable=False, default="weekly")

    @property
    def weekdays(self) -> list[int]:
        if not self.days_of_week:
            return []
        return [int(d) for d in json.loads(self.days_of_week)]

    @property
    def to_schema(self):
        data = super().to_schema
        data["days_of_week"] = self.weekdays
        return data
