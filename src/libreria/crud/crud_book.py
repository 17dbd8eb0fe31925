"""
CRUD operations for the Book model.
Books are a local cache of the external catalog: `ensure_book` creates the row
on first touch and refreshes its display fields afterwards, retrying briefly
when concurrent first-views race on the same id.
"""

import logging
from typing import Iterable, List, Optional, Tuple, Union

from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.errors import LibreriaError
from ..core.retry import retry_call
from ..models.book import Book
from ..schemas.book import BookCreate

logger = logging.getLogger(__name__)

def join_names(names: Union[Iterable[str], str, None]) -> str:
    """Turns an ordered list of names into the stored display string."""
    if names is None:
        return ""
    if isinstance(names, str):
        return names
    return ", ".join(name for name in names if name)

def get_book_by_id(db: Session, book_id: str) -> Optional[Book]:
    """
    Gets a book by its catalog id.

    Args:
        db (Session): SQLAlchemy session.
        book_id (str): Catalog id.

    Returns:
        Optional[Book]: The Book if cached locally, None otherwise.
    """
    return db.get(Book, book_id)

def list_recent_books(db: Session, limit: int = 20) -> List[Book]:
    return db.query(Book).order_by(desc(Book.created_at)).limit(limit).all()

def ensure_book(
    db: Session,
    book_id: str,
    title: str,
    authors: Union[Iterable[str], str, None] = None,
    description: Optional[str] = None,
    thumbnail_url: Optional[str] = None,
    attempts: Optional[int] = None,
    delay: Optional[float] = None,
) -> Book:
    """
    Upserts the local copy of a catalog book.

    Creates the row if it does not exist; otherwise refreshes title and
    authors, and description/thumbnail when given. Transient storage errors
    (including the unique-key race between concurrent creators) are retried
    with a fixed delay.

    Args:
        db (Session): SQLAlchemy session.
        book_id (str): Catalog id, used as primary key.
        title (str): Title from the catalog.
        authors (Iterable[str] | str | None): Ordered authors or a display string.
        description (Optional[str]): Synopsis.
        thumbnail_url (Optional[str]): Cover thumbnail URL.
        attempts (Optional[int]): Overrides BOOK_UPSERT_MAX_ATTEMPTS.
        delay (Optional[float]): Overrides BOOK_UPSERT_RETRY_DELAY.

    Returns:
        Book: The stored book.

    Raises:
        LibreriaError: If the upsert keeps failing.
    """
    authors_str = join_names(authors)

    def _upsert() -> Book:
        book = db.get(Book, book_id)
        if book is None:
            book = Book(
                id=book_id,
                title=title,
                authors=authors_str,
                description=description,
                thumbnail_url=thumbnail_url,
            )
            db.add(book)
        else:
            book.title = title
            book.authors = authors_str
            if description is not None:
                book.description = description
            if thumbnail_url is not None:
                book.thumbnail_url = thumbnail_url
        db.commit()
        db.refresh(book)
        return book

    try:
        return retry_call(
            _upsert,
            attempts=attempts if attempts is not None else settings.BOOK_UPSERT_MAX_ATTEMPTS,
            delay=delay if delay is not None else settings.BOOK_UPSERT_RETRY_DELAY,
            retry_on=(IntegrityError, OperationalError),
            on_retry=lambda exc: db.rollback(),
        )
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Could not upsert book {book_id}: {e}")
        raise LibreriaError("Could not store book") from e

def create_book_if_missing(db: Session, data: BookCreate) -> Tuple[Book, bool]:
    """
    Stores a book unless it is already cached. Existing rows are returned untouched.

    Returns:
        Tuple[Book, bool]: The book and whether it was created now.
    """
    existing = get_book_by_id(db, data.id)
    if existing is not None:
        return existing, False

    book = Book(
        id=data.id,
        title=data.title,
        authors=join_names(data.authors),
        thumbnail_url=data.thumbnail_url,
        description=data.description,
        page_count=data.page_count,
        categories=join_names(data.categories),
        published_date=data.published_date,
    )
    db.add(book)
    try:
        db.commit()
    except IntegrityError:
        # Someone else created it in between.
        db.rollback()
        existing = get_book_by_id(db, data.id)
        if existing is None:
            raise
        return existing, False
    db.refresh(book)
    logger.info(f"Book {book.id} cached locally")
    return book, True
