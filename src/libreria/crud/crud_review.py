from sqlalchemy.orm import Session, selectinload
from sqlalchemy import delete, desc, func
import logging

from ..core.errors import Forbidden, InvalidInput, NotFound
from ..models.review import Review
from ..models.vote import Vote
from ..schemas.review import ReviewCreate, RATING_MIN, RATING_MAX, CONTENT_MIN, CONTENT_MAX
from .crud_book import ensure_book

logger = logging.getLogger(__name__)


def validate_review_fields(rating, content) -> None:
    """Raises InvalidInput unless rating is an int in [1, 5] and content has 3-5000 chars."""
    if isinstance(rating, bool) or not isinstance(rating, int) or not RATING_MIN <= rating <= RATING_MAX:
        raise InvalidInput(f"Rating must be an integer between {RATING_MIN} and {RATING_MAX}")
    if not isinstance(content, str) or not CONTENT_MIN <= len(content) <= CONTENT_MAX:
        raise InvalidInput(f"Review must be between {CONTENT_MIN} and {CONTENT_MAX} characters")


def review_score(db: Session, review_id: str) -> tuple[int, int]:
    """Returns (score, votes_count) computed from every vote currently stored for the review."""
    score, votes_count = db.query(
        func.coalesce(func.sum(Vote.value), 0),
        func.count(Vote.id),
    ).filter(Vote.review_id == review_id).one()
    return int(score), int(votes_count)


def _reviews_with_score(db: Session):
    return db.query(
        Review,
        func.coalesce(func.sum(Vote.value), 0).label("score"),
        func.count(Vote.id).label("votes_count"),
    ).outerjoin(Vote, Vote.review_id == Review.id).\
        group_by(Review.id).\
        options(selectinload(Review.user), selectinload(Review.book))


def create_review(db: Session, review: ReviewCreate, user_id: str) -> Review:
    """
    Creates a review, caching the reviewed book first.
    A user may review the same book several times.
    """
    validate_review_fields(review.rating, review.content)
    book = ensure_book(
        db,
        book_id=review.google_id,
        title=review.title,
        authors=review.authors,
        thumbnail_url=review.thumbnail,
    )

    db_review = Review(
        rating=review.rating,
        content=review.content,
        user_id=user_id,
        book_id=book.id,
    )
    db.add(db_review)
    try:
        db.commit()
        db.refresh(db_review)
        logger.info(f"Review {db_review.id} created for book {book.id} by user {user_id}.")
    except Exception as e:
        logger.exception(f"Error committing review creation for book {book.id}: {e}")
        db.rollback()
        raise

    return db_review


def get_review_by_id(db: Session, review_id: str) -> Review | None:
    return db.get(Review, review_id)


def _get_owned_review(db: Session, review_id: str, requesting_user_id: str, action: str) -> Review:
    db_review = get_review_by_id(db, review_id)

    if not db_review:
        logger.warning(f"Attempted {action} of non-existent review ID: {review_id}")
        raise NotFound("Review not found")

    if db_review.user_id != requesting_user_id:
        logger.error(f"Unauthorized attempt: User {requesting_user_id} tried to {action} review {review_id} owned by {db_review.user_id}")
        raise Forbidden(f"You are not allowed to {action} this review")

    return db_review


def update_review(db: Session, review_id: str, requesting_user_id: str, rating: int, content: str) -> Review:
    """
    Overwrites rating and content of a review owned by the requester.
    `created_at` is left unchanged.

    Raises:
        NotFound: No such review.
        Forbidden: The requester is not the author.
        InvalidInput: Rating or content out of bounds.
    """
    db_review = _get_owned_review(db, review_id, requesting_user_id, "edit")
    validate_review_fields(rating, content)

    db_review.rating = rating
    db_review.content = content
    try:
        db.commit()
    except Exception as e:
        logger.exception(f"Error committing update for review ID {review_id}: {e}")
        db.rollback()
        raise
    db.refresh(db_review)
    logger.info(f"Review {review_id} updated by user {requesting_user_id}.")
    return db_review


def delete_review(db: Session, review_id: str, requesting_user_id: str) -> int:
    """
    Permanently deletes a review owned by the requester, clearing its votes first.

    Returns:
        int: Number of votes removed with the review.

    Raises:
        NotFound: No such review.
        Forbidden: The requester is not the author.
    """
    db_review = _get_owned_review(db, review_id, requesting_user_id, "delete")

    try:
        removed_votes = db.execute(
            delete(Vote).where(Vote.review_id == review_id)
        ).rowcount
        db.expire(db_review, ["votes"])
        db.delete(db_review)
        db.commit()
    except Exception as e:
        logger.exception(f"Error committing delete for review ID {review_id}: {e}")
        db.rollback()
        raise

    logger.info(f"Review {review_id} deleted by user {requesting_user_id} with {removed_votes} votes.")
    return removed_votes


def get_reviews_for_book(db: Session, book_id: str) -> list:
    """Reviews of a book, newest first, as rows of (Review, score, votes_count)."""
    return _reviews_with_score(db).\
            filter(Review.book_id == book_id).\
            order_by(desc(Review.created_at), Review.id).\
            all()


def get_reviews_by_user(db: Session, user_id: str) -> list:
    """Reviews written by a user, newest first, as rows of (Review, score, votes_count)."""
    return _reviews_with_score(db).\
            filter(Review.user_id == user_id).\
            order_by(desc(Review.created_at), Review.id).\
            all()
