# src/libreria/models/vote.py
import datetime
from uuid import uuid4
from sqlalchemy import (Column, String, SmallInteger, ForeignKey, DateTime,
                        CheckConstraint, UniqueConstraint)
from sqlalchemy.orm import relationship
from libreria.db.session import Base


def _utcnow():
    return datetime.datetime.now(datetime.timezone.utc)


class Vote(Base):
    __tablename__ = "votes"

    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)
    review_id = Column(String(32), ForeignKey("reviews.id"), nullable=False, index=True)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    # +1 upvote, -1 downvote
    value = Column(SmallInteger, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    review = relationship("Review", back_populates="votes")
    user = relationship("User", back_populates="votes")

    __table_args__ = (
        CheckConstraint('value IN (1, -1)', name='vote_value_check'),
        # One vote per voter per review
        UniqueConstraint('review_id', 'user_id', name='uq_review_voter'),
    )

    def __repr__(self):
        return f"<Vote(review_id={self.review_id}, user_id={self.user_id}, value={self.value})>"
