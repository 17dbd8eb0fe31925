"""
Pydantic schemas for the Review entity in the Libreria API.
Defines input and output models for validation and serialization of reviews
and of the votes cast on them.
"""

import datetime
from typing import List, Optional, Union
from pydantic import Field, StrictInt, field_validator

from libreria.schemas.book import BookSummary, CatalogBook
from libreria.schemas.common import CamelModel, check_http_url

RATING_MIN, RATING_MAX = 1, 5
CONTENT_MIN, CONTENT_MAX = 3, 5000

class ReviewUpdate(CamelModel):
    """
    Editable fields of a review.

    Attributes:
        rating (int): Rating between 1 and 5.
        content (str): Review text, 3 to 5000 characters.
    """
    rating: StrictInt = Field(..., ge=RATING_MIN, le=RATING_MAX)
    content: str = Field(..., min_length=CONTENT_MIN, max_length=CONTENT_MAX)

class ReviewCreate(ReviewUpdate):
    """
    Schema for creating a review. Carries the catalog data of the reviewed
    book so it can be cached locally.

    Attributes:
        google_id (str): Catalog id of the book (`googleId` on the wire).
        title (str): Book title.
        authors (List[str]): Authors; a single string is accepted as one author.
        thumbnail (Optional[str]): Cover thumbnail URL.
    """
    google_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    authors: Union[List[str], str] = Field(default_factory=list)
    thumbnail: Optional[str] = None

    @field_validator("authors")
    @classmethod
    def _authors_as_list(cls, value):
        if isinstance(value, str):
            return [value] if value else []
        return value

    @field_validator("thumbnail")
    @classmethod
    def _thumbnail_is_url(cls, value):
        return check_http_url(value)

class ReviewSchema(CamelModel):
    """
    Output schema for a review with its book summary and vote aggregate.
    """
    id: str
    rating: int
    content: str
    created_at: datetime.datetime
    book_id: str
    book: BookSummary
    score: int = 0
    votes_count: int = 0

class ReviewEnvelope(CamelModel):
    message: str
    review: ReviewSchema

class ReviewAuthor(CamelModel):
    id: str
    display_name: str

class BookReview(CamelModel):
    """A review as listed on a book page."""
    id: str
    rating: int
    content: str
    created_at: datetime.datetime
    user: ReviewAuthor
    score: int = 0
    votes_count: int = 0

class LocalData(CamelModel):
    reviews: List[BookReview] = Field(default_factory=list)

class BookDetail(CatalogBook):
    local: LocalData = Field(default_factory=LocalData)

class VoteCreate(CamelModel):
    value: StrictInt

class VoteTally(CamelModel):
    id: str
    score: int
    votes_count: int

class VoteResponse(CamelModel):
    success: bool = True
    review: VoteTally
