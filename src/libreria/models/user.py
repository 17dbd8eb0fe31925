"""
ORM model for the User entity in the Libreria database.
Defines the main user fields and the relations to reviews, votes and favorites.
"""

import datetime
from uuid import uuid4
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from libreria.db.session import Base

class User(Base):
    """
    Represents a user of the system.

    Attributes:
        id (str): Opaque, stable identifier.
        name (str): Display name.
        email (str): Unique email address; absent for guest users.
        hashed_password (str): Password hash; absent for guest users.
        created_at (datetime): Creation timestamp.
        reviews (List[Review]): Reviews written by the user.
        votes (List[Vote]): Votes cast by the user.
        favorites (List[Favorite]): Books saved by the user.
    """
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=lambda: uuid4().hex)
    name = Column(String(100), nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=True)
    hashed_password = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.datetime.now(datetime.timezone.utc),
        nullable=False,
    )

    reviews = relationship("Review", back_populates="user")
    votes = relationship("Vote", back_populates="user")
    favorites = relationship("Favorite", back_populates="user")

    @property
    def display_name(self) -> str:
        return self.name or "Guest"

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
