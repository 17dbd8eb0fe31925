from .crud_user import get_user_by_email, get_user_by_id, create_user, authenticate_user
from .crud_book import (
    get_book_by_id,
    list_recent_books,
    ensure_book,
    create_book_if_missing,
)
from .crud_review import (
    create_review,
    get_review_by_id,
    update_review,
    delete_review,
    review_score,
    get_reviews_for_book,
    get_reviews_by_user,
)
from .crud_vote import cast_vote, get_user_vote
from .crud_favorite import add_favorite, remove_favorite, list_favorites

__all__ = [
    "get_user_by_email",
    "get_user_by_id",
    "create_user",
    "authenticate_user",
    "get_book_by_id",
    "list_recent_books",
    "ensure_book",
    "create_book_if_missing",
    "create_review",
    "get_review_by_id",
    "update_review",
    "delete_review",
    "review_score",
    "get_reviews_for_book",
    "get_reviews_by_user",
    "cast_vote",
    "get_user_vote",
    "add_favorite",
    "remove_favorite",
    "list_favorites",
]
