from sqlalchemy import Boolean, Column, Date, DateTime, Float, ForeignKey, Integer, String, Text

from .database import Base, utcnow


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False, index=True)
    role = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    hourly_rate = Column(Float, nullable=True)
    hire_date = Column(Date, nullable=True)
    status = Column(String, nullable=False, default="active")
    notes = Column(Text, nullable=True)


class TimePunch(Base):
    __tablename__ = "time_punches"

    id = Column(Integer, primary_key=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    clock_in = Column(DateTime, nullable=False, default=utcnow)
    clock_out = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)

    @property
    def hours(self):
        if not self.clock_out:
            return None
        return round((self.clock_out - self.clock_in).total_seconds() / 3600, 2)

    @property
    def to_schema(self):
        return {**super().to_schema, "hours": self.hours}


class Schedule(Base):
    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(String, nullable=False)  # HH:MM
    end_time = Column(String, nullable=False)
    position = Column(String, nullable=True)
    notes = Column(Text, nullable=True)


class Availability(Base):
    __tablename__ = "availability"

    id = Column(Integer, primary_key=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)  # 0=Sunday .. 6=Saturday
    start_time = Column(String, nullable=True)
    end_time = Column(String, nullable=True)
    is_available = Column(Boolean, nullable=False, default=True)
    notes = Column(Text, nullable=True)


class ShiftSwap(Base):
    __tablename__ = "shift_swaps"

    id = Column(Integer, primary_key=True)
    schedule_id = Column(Integer, ForeignKey("schedules.id", ondelete="CASCADE"), nullable=False, index=True)
    requester_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    target_employee_id = Column(Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True)
    # 'pending' | 'approved' | 'rejected'
    status = Column(String, nullable=False, default="pending")
    reason = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    resolved_at = Column(DateTime, nullable=True)


class PerformanceReview(Base):
    __tablename__ = "performance_reviews"

    id = Column(Integer, primary_key=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    review_date = Column(Date, nullable=False)
    rating = Column(Integer, nullable=False)
    reviewer = Column(String, nullable=True)
    strengths = Column(Text, nullable=True)
    improvements = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
