from sqlalchemy import Column, DateTime, Integer, String, Text

from .database import Base, utcnow


class StoredFile(Base):
    """Metadata for a document kept on disk under the upload directory."""
    __tablename__ = "files"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    filename = Column(String, nullable=True)
    path = Column(String, nullable=False)
    category = Column(String, nullable=False, default="General")
    mime_type = Column(String, nullable=True)
    size = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    uploaded_at = Column(DateTime, nullable=False, default=utcnow)
