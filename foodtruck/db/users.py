from fastapi_users.db import SQLAlchemyBaseUserTableUUID, SQLAlchemyUserDatabase  # noqa: F401
from sqlalchemy import Column, String

from .database import Base


class User(SQLAlchemyBaseUserTableUUID, Base):
    __tablename__ = "users"

    username = Column(String, nullable=True, unique=True, index=True)
    role = Column(String, nullable=False, default="staff")

    @property
    def to_schema(self):
        """Public user fields; never includes the password hash."""
        return {
            "id": self.id,
            "email": self.email,
            "username": self.username,
            "role": self.role,
            "is_active": self.is_active,
            "is_superuser": self.is_superuser,
        }
