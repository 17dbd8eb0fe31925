# src/libreria/models/favorite.py
import datetime
from uuid import uuid4
from sqlalchemy import Column, String, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from libreria.db.session import Base


class Favorite(Base):
    __tablename__ = "favorites"

    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)
    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    book_id = Column(String(64), ForeignKey("books.id"), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.datetime.now(datetime.timezone.utc),
        nullable=False,
    )

    user = relationship("User", back_populates="favorites")
    book = relationship("Book", back_populates="favorites")

    __table_args__ = (
        UniqueConstraint('user_id', 'book_id', name='uq_user_book_favorite'),
    )

    def __repr__(self):
        return f"<Favorite(user_id={self.user_id}, book_id={self.book_id})>"
