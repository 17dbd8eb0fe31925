"""
CRUD operations for the Favorite model: a per-user set of saved books.
Adding an existing pair is a Conflict; removing is idempotent.
"""

import logging
from typing import List

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ..core.errors import Conflict, NotFound
from ..models.favorite import Favorite
from .crud_book import get_book_by_id

logger = logging.getLogger(__name__)

def get_favorite(db: Session, user_id: str, book_id: str) -> Favorite | None:
    return db.query(Favorite).\
            filter(Favorite.user_id == user_id, Favorite.book_id == book_id).\
            first()

def add_favorite(db: Session, user_id: str, book_id: str) -> Favorite:
    """
    Saves a locally cached book in the user's favorites.

    Raises:
        Conflict: The book is already a favorite (also the outcome of losing an insert race).
        NotFound: The book has not been cached locally yet.
    """
    if get_favorite(db, user_id, book_id) is not None:
        logger.info(f"Book {book_id} already in favorites of user {user_id}")
        raise Conflict("Already in favorites")

    if get_book_by_id(db, book_id) is None:
        logger.warning(f"User {user_id} tried to favorite unknown book {book_id}")
        raise NotFound("Book not found")

    favorite = Favorite(user_id=user_id, book_id=book_id)
    db.add(favorite)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Concurrent favorite of book {book_id} by user {user_id}")
        raise Conflict("Already in favorites")
    db.refresh(favorite)
    logger.info(f"Book {book_id} added to favorites of user {user_id}")
    return favorite

def remove_favorite(db: Session, user_id: str, book_id: str) -> int:
    """
    Removes every favorite row for the pair. Not an error when there is none.

    Returns:
        int: Rows removed (0 or 1).
    """
    removed = db.execute(
        delete(Favorite).where(Favorite.user_id == user_id, Favorite.book_id == book_id)
    ).rowcount
    db.commit()
    logger.info(f"Removed {removed} favorite(s) of book {book_id} for user {user_id}")
    return removed

def list_favorites(db: Session, user_id: str) -> List[Favorite]:
    """Favorites of a user with their books loaded, in storage order."""
    return db.query(Favorite).\
            options(joinedload(Favorite.book)).\
            filter(Favorite.user_id == user_id).\
            all()
