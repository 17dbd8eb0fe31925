# tests/crud/test_crud_favorite.py
import pytest

from libreria.core.errors import Conflict, NotFound
from libreria.crud import add_favorite, ensure_book, list_favorites, remove_favorite
from libreria.crud import crud_favorite
from libreria.models.favorite import Favorite

def _count(db_session, user_id, book_id):
    return db_session.query(Favorite).filter(Favorite.user_id == user_id, Favorite.book_id == book_id).count()

def test_add_favorite(db_session, voter_user, cached_book):
    favorite = add_favorite(db_session, voter_user.id, cached_book.id)

    assert favorite.user_id == voter_user.id
    assert favorite.book.title == "The Left Hand of Darkness"
    assert _count(db_session, voter_user.id, cached_book.id) == 1

def test_add_favorite_twice_is_conflict(db_session, voter_user, cached_book):
    add_favorite(db_session, voter_user.id, cached_book.id)

    with pytest.raises(Conflict):
        add_favorite(db_session, voter_user.id, cached_book.id)
    assert _count(db_session, voter_user.id, cached_book.id) == 1

def test_add_favorite_requires_cached_book(db_session, voter_user):
    with pytest.raises(NotFound):
        add_favorite(db_session, voter_user.id, "not-cached")

def test_add_favorite_lost_race_is_conflict(db_session, voter_user, cached_book, monkeypatch):
    """The pre-check misses a concurrent insert; the unique key still holds."""
    add_favorite(db_session, voter_user.id, cached_book.id)
    monkeypatch.setattr(crud_favorite, "get_favorite", lambda db, user_id, book_id: None)

    with pytest.raises(Conflict):
        add_favorite(db_session, voter_user.id, cached_book.id)
    assert _count(db_session, voter_user.id, cached_book.id) == 1

def test_remove_favorite_is_idempotent(db_session, voter_user, cached_book):
    add_favorite(db_session, voter_user.id, cached_book.id)

    assert remove_favorite(db_session, voter_user.id, cached_book.id) == 1
    assert remove_favorite(db_session, voter_user.id, cached_book.id) == 0
    assert _count(db_session, voter_user.id, cached_book.id) == 0

def test_list_favorites_only_for_user(db_session, voter_user, author_user, cached_book):
    ensure_book(db_session, "B456", "Solaris", ["Stanisław Lem"])
    add_favorite(db_session, voter_user.id, cached_book.id)
    add_favorite(db_session, voter_user.id, "B456")
    add_favorite(db_session, author_user.id, "B456")

    favorites = list_favorites(db_session, voter_user.id)

    assert {f.book_id for f in favorites} == {"B123", "B456"}
    assert all(f.user_id == voter_user.id for f in favorites)
    assert list_favorites(db_session, "nobody") == []
