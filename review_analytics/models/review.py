from sqlalchemy import JSON, Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from review_analytics.db.base import Base
from review_analytics.db.types import UTCDateTime


class ReviewRecord(Base):
    """One AI review transaction. Rows are written once and never updated."""

    __tablename__ = "review_records"
    __table_args__ = (Index("ix_review_records_user_created", "user_id", "created_at"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    code = Column(Text, nullable=False)
    language = Column(String, nullable=False, default="javascript", index=True)
    review_text = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)  # 1-5 scale
    tags = Column(JSON, nullable=False, default=list)
    review_duration_seconds = Column(Integer, nullable=False, default=0)
    created_at = Column(UTCDateTime, nullable=False)

    user = relationship("User", back_populates="reviews")
