"""SQLAlchemy ORM model backing the local key-value store.

The application keeps one JSON document per key (`dailyLogs`,
`nutritionPlan`, `userProfile`, `cycleData`) as text.
"""

from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import declarative_base
from datetime import datetime

Base = declarative_base()


class StoredDocument(Base):
    """One persisted JSON document, addressed by its string key."""

    __tablename__ = "stored_documents"
    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
