# src/libreria/models/review.py
import datetime
from uuid import uuid4
from sqlalchemy import (Column, Integer, String, Text, ForeignKey, DateTime,
                        CheckConstraint)
from sqlalchemy.orm import relationship
from libreria.db.session import Base

class Review(Base):
    __tablename__ = "reviews"

    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)
    rating = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.datetime.now(datetime.timezone.utc),
        nullable=False,
    )
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    book_id = Column(String(64), ForeignKey("books.id"), nullable=False, index=True)

    user = relationship("User", back_populates="reviews")
    book = relationship("Book", back_populates="reviews")
    votes = relationship(
        "Vote",
        back_populates="review",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        # Ensure rating is between 1 and 5
        CheckConstraint('rating >= 1 AND rating <= 5', name='review_rating_check'),
    )

    def __repr__(self):
        return f"<Review(id={self.id}, book_id={self.book_id}, user_id={self.user_id}, rating={self.rating})>"
