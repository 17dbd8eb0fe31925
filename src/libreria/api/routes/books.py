from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Response
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from libreria.api.deps import get_current_user, parse_or_400
from libreria.clients import google_books
from libreria.core.errors import NotFound
from libreria.crud import create_book_if_missing, ensure_book, get_book_by_id, get_reviews_for_book, list_recent_books
from libreria.db.session import get_db
from libreria.models.user import User
from libreria.schemas.book import BookCreate, BookSchema
from libreria.schemas.review import BookDetail, BookReview, LocalData, ReviewAuthor


router = APIRouter()


def _to_book_review(row) -> BookReview:
    review, score, votes_count = row
    return BookReview(
        id=review.id,
        rating=review.rating,
        content=review.content,
        created_at=review.created_at,
        user=ReviewAuthor(id=review.user.id, display_name=review.user.display_name),
        score=score,
        votes_count=votes_count,
    )


@router.get("")
def list_books(
    book_id: Optional[str] = Query(None, alias="id"),
    db: Session = Depends(get_db),
) -> Any:
    if book_id:
        book = get_book_by_id(db, book_id)
        if not book:
            raise NotFound("Book not found")
        return BookSchema.model_validate(book)
    return [BookSchema.model_validate(book) for book in list_recent_books(db)]


@router.post("", response_model=BookSchema)
def create_book(
    response: Response,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> BookSchema:
    data = parse_or_400(BookCreate, payload)
    book, created = create_book_if_missing(db, data)
    response.status_code = 201 if created else 200
    return BookSchema.model_validate(book)


@router.get("/{book_id}", response_model=BookDetail)
async def get_book(book_id: str, db: Session = Depends(get_db)) -> BookDetail:
    volume = await google_books.get_volume(book_id)
    if not volume:
        raise NotFound("Book not found")
    summary = google_books.to_book_summary(volume)

    def _cache_and_load():
        ensure_book(
            db,
            book_id=book_id,
            title=summary["title"] or "",
            authors=summary["authors"],
            description=summary["description"] or None,
            thumbnail_url=summary["thumbnail"],
        )
        return [_to_book_review(row) for row in get_reviews_for_book(db, book_id)]

    reviews = await run_in_threadpool(_cache_and_load)
    return BookDetail(**{**summary, "id": book_id}, local=LocalData(reviews=reviews))
