"""Feedback model definitions."""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from edufeedback.database import Base


DEFAULT_STATUS = "active"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Feedback(Base):
    """Represents a rated feedback entry submitted by a student."""
    __tablename__ = "feedback"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_feedback_rating"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(String, nullable=False)
    rating = Column(Integer, nullable=False)
    comments = Column(Text)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    status = Column(String, default=DEFAULT_STATUS)
