"""
Pydantic schemas for the Book entity: catalog results, local cache rows and
the payload accepted by POST /api/books.
"""

import datetime
from typing import List, Optional
from pydantic import Field, PositiveInt, field_validator

from libreria.schemas.common import CamelModel, check_http_url


class BookCreate(CamelModel):
    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    authors: List[str] = Field(default_factory=list)
    thumbnail_url: Optional[str] = None
    description: Optional[str] = None
    page_count: Optional[PositiveInt] = None
    categories: List[str] = Field(default_factory=list)
    published_date: Optional[str] = None

    @field_validator("thumbnail_url")
    @classmethod
    def _thumbnail_is_url(cls, value):
        return check_http_url(value)


class BookSummary(CamelModel):
    id: str
    title: str
    authors: str
    thumbnail_url: Optional[str] = None


class BookSchema(BookSummary):
    description: Optional[str] = None
    page_count: Optional[int] = None
    categories: Optional[str] = None
    published_date: Optional[str] = None
    created_at: datetime.datetime


class CatalogBook(CamelModel):
    """A catalog volume reduced to what the client displays."""
    id: str
    title: Optional[str] = None
    authors: List[str] = Field(default_factory=list)
    description: str = ""
    thumbnail: Optional[str] = None


class SearchResponse(CamelModel):
    results: List[CatalogBook] = Field(default_factory=list)
    total: int = 0
