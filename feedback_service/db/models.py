"""
Database table definitions and it stores:
- Feedback records

Main purpose:
Define persistent data structure.
"""



import uuid
from datetime import datetime

from sqlalchemy import String, Text, DateTime, Uuid, Index
from sqlalchemy.orm import Mapped, mapped_column
from feedback_service.db.base import Base

class FeedbackRecord(Base):
    __tablename__ = "feedbacks"
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    customer_name: Mapped[str] = mapped_column(String)
    email: Mapped[str] = mapped_column(String)
    feedback_text: Mapped[str] = mapped_column(Text)
    source: Mapped[str] = mapped_column(String)
    created_at: Mapped[datetime] = mapped_column(DateTime)
    updated_at: Mapped[datetime] = mapped_column(DateTime)
# cursor pagination walks (created_at, id)
Index("ix_feedbacks_created_id", FeedbackRecord.created_at, FeedbackRecord.id)
