"""
ORM model for the Book entity in the Libreria database.
Books are a local cache of the external catalog: the primary key is the
catalog's own volume id.
"""

import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from libreria.db.session import Base


def _utcnow():
    return datetime.datetime.now(datetime.timezone.utc)


class Book(Base):
    """
    Represents a book known locally.

    Attributes:
        id (str): External catalog identifier, reused as primary key.
        title (str): Book title.
        authors (str): Display string of the ordered author list, comma separated.
        description (str): Synopsis.
        thumbnail_url (str): Cover thumbnail URL.
        page_count (int): Number of pages, when the catalog knows it.
        categories (str): Display string of catalog categories, comma separated.
        published_date (str): Publication date as reported by the catalog.
        reviews (List[Review]): Reviews written about the book.
        favorites (List[Favorite]): Favorites pointing at the book.
    """
    __tablename__ = "books"

    id = Column(String(64), primary_key=True)
    title = Column(String(512), index=True, nullable=False)
    authors = Column(Text, nullable=False, default="")
    description = Column(Text, nullable=True)
    thumbnail_url = Column(String(1024), nullable=True)
    page_count = Column(Integer, nullable=True)
    categories = Column(Text, nullable=True)
    published_date = Column(String(32), nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    reviews = relationship("Review", back_populates="book")
    favorites = relationship("Favorite", back_populates="book")

    @property
    def author_list(self) -> list[str]:
        return [name.strip() for name in (self.authors or "").split(",") if name.strip()]

    def __repr__(self) -> str:
        return f"<Book(id='{self.id}', title='{self.title[:30]}...')>"
