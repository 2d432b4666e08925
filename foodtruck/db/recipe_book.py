from sqlalchemy import Column, DateTime, Integer, String, Text

from .database import Base, utcnow


class RecipeBookEntry(Base):
    """Free-text kitchen recipe, independent of menu costing."""
    __tablename__ = "recipe_book"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    prep_time = Column(String, nullable=True)
    cook_time = Column(String, nullable=True)
    servings = Column(Integer, nullable=True)
    ingredients = Column(Text, nullable=True)
    instructions = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
