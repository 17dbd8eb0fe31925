from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from libreria.api.deps import get_current_user, parse_or_400
from libreria.core.config import settings
from libreria.crud import cast_vote, create_review, delete_review, get_reviews_by_user, review_score, update_review
from libreria.db.session import get_db
from libreria.models.review import Review
from libreria.models.user import User
from libreria.schemas.book import BookSummary
from libreria.schemas.common import MessageResponse
from libreria.schemas.review import (
    ReviewCreate,
    ReviewEnvelope,
    ReviewSchema,
    ReviewUpdate,
    VoteCreate,
    VoteResponse,
    VoteTally,
)


router = APIRouter()


def _to_out(review: Review, score: int = 0, votes_count: int = 0) -> ReviewSchema:
    return ReviewSchema(
        id=review.id,
        rating=review.rating,
        content=review.content,
        created_at=review.created_at,
        book_id=review.book_id,
        book=BookSummary.model_validate(review.book),
        score=score,
        votes_count=votes_count,
    )


@router.post("", status_code=201, response_model=ReviewEnvelope)
def post_review(
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> ReviewEnvelope:
    data = parse_or_400(ReviewCreate, payload)
    review = create_review(db, data, user_id=user.id)
    return ReviewEnvelope(message="Review created successfully", review=_to_out(review))


@router.get("/user", response_model=list[ReviewSchema])
def list_my_reviews(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> list[ReviewSchema]:
    return [_to_out(review, score, votes_count) for review, score, votes_count in get_reviews_by_user(db, user.id)]


@router.patch("/{review_id}", response_model=ReviewEnvelope)
def patch_review(
    review_id: str,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> ReviewEnvelope:
    data = parse_or_400(ReviewUpdate, payload)
    review = update_review(db, review_id, user.id, rating=data.rating, content=data.content)
    score, votes_count = review_score(db, review.id)
    return ReviewEnvelope(message="Review updated successfully", review=_to_out(review, score, votes_count))


@router.delete("/{review_id}", response_model=MessageResponse)
def remove_review(
    review_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> MessageResponse:
    delete_review(db, review_id, user.id)
    return MessageResponse(message="Review deleted successfully")


@router.post("/{review_id}/vote", response_model=VoteResponse)
def vote_review(
    review_id: str,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> VoteResponse:
    data = parse_or_400(VoteCreate, payload, message="Invalid vote value")
    result = cast_vote(
        db,
        review_id=review_id,
        voter_id=user.id,
        value=data.value,
        allow_self_vote=settings.ALLOW_SELF_VOTES,
        attempts=settings.VOTE_MAX_ATTEMPTS,
    )
    return VoteResponse(
        success=True,
        review=VoteTally(id=result.review_id, score=result.score, votes_count=result.votes_count),
    )
