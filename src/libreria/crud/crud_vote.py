"""
Vote ledger: at most one vote per (review, voter), toggled by repeating a
direction and flipped by casting the opposite one.

Each cast reads the voter's current vote and writes the transition
conditioned on that read (insert guarded by the unique key, update/delete
guarded by the old value). A write that matches nothing means another request
got there first, so the cast is re-read and retried.
"""

import datetime
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.errors import Conflict, Forbidden, InvalidInput, NotFound
from ..models.review import Review
from ..models.vote import Vote
from .crud_review import review_score

logger = logging.getLogger(__name__)

UPVOTE = 1
DOWNVOTE = -1


@dataclass
class VoteResult:
    review_id: str
    value: Optional[int]
    score: int
    votes_count: int


def next_vote_state(current: Optional[int], requested: int) -> Optional[int]:
    """
    absent + v -> v; v + v -> absent; v + -v -> -v.
    """
    if current == requested:
        return None
    return requested


def get_user_vote(db: Session, review_id: str, voter_id: str) -> Optional[int]:
    return db.execute(
        select(Vote.value).where(Vote.review_id == review_id, Vote.user_id == voter_id)
    ).scalar_one_or_none()


def _apply_transition(db: Session, review_id: str, voter_id: str, requested: int) -> Optional[tuple]:
    """Writes one transition. Returns (before, after), or None if the row changed underneath."""
    current = get_user_vote(db, review_id, voter_id)
    target = next_vote_state(current, requested)

    if current is None:
        db.add(Vote(review_id=review_id, user_id=voter_id, value=target))
        db.flush()
        return current, target

    same_row = (Vote.review_id == review_id, Vote.user_id == voter_id, Vote.value == current)
    if target is None:
        result = db.execute(delete(Vote).where(*same_row).execution_options(synchronize_session=False))
    else:
        result = db.execute(
            update(Vote).where(*same_row).
            values(value=target, updated_at=datetime.datetime.now(datetime.timezone.utc)).
            execution_options(synchronize_session=False)
        )
    if result.rowcount != 1:
        return None
    return current, target


def cast_vote(
    db: Session,
    review_id: str,
    voter_id: str,
    value: int,
    allow_self_vote: Optional[bool] = None,
    attempts: Optional[int] = None,
) -> VoteResult:
    """
    Casts `value` (+1 or -1) on a review for a voter and returns the fresh tally.

    Raises:
        InvalidInput: value is not +1 or -1.
        NotFound: the review does not exist (checked before any write).
        Forbidden: the voter authored the review and self votes are disabled.
        Conflict: concurrent writers kept winning for every attempt.
    """
    if not isinstance(value, int) or isinstance(value, bool) or value not in (UPVOTE, DOWNVOTE):
        raise InvalidInput("Invalid vote value")

    review = db.get(Review, review_id)
    if review is None:
        logger.warning(f"Vote attempted on non-existent review ID: {review_id}")
        raise NotFound("Review not found")

    if allow_self_vote is None:
        allow_self_vote = settings.ALLOW_SELF_VOTES
    if not allow_self_vote and review.user_id == voter_id:
        logger.warning(f"User {voter_id} tried to vote on their own review {review_id}")
        raise Forbidden("You cannot vote on your own review")

    attempts = max(1, attempts if attempts is not None else settings.VOTE_MAX_ATTEMPTS)
    for attempt in range(1, attempts + 1):
        try:
            transition = _apply_transition(db, review_id, voter_id, value)
        except IntegrityError:
            # Another request inserted the same (review, voter) row first.
            transition = None
        if transition is not None:
            db.commit()
            before, after = transition
            logger.info(f"Vote on review {review_id} by user {voter_id}: {before} -> {after}")
            break
        db.rollback()
        logger.warning(f"Vote on review {review_id} by user {voter_id} raced, attempt {attempt}/{attempts}")
    else:
        raise Conflict("The vote changed concurrently, please try again")

    score, votes_count = review_score(db, review_id)
    return VoteResult(review_id=review_id, value=after, score=score, votes_count=votes_count)
