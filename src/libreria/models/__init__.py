from libreria.models.user import User
from libreria.models.book import Book
from libreria.models.review import Review
from libreria.models.vote import Vote
from libreria.models.favorite import Favorite

__all__ = [
    "User",
    "Book",
    "Review",
    "Vote",
    "Favorite",
]
