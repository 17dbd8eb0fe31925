"""
Pydantic schemas for the Favorite entity.
"""

import datetime
from pydantic import Field

from libreria.schemas.book import BookSchema
from libreria.schemas.common import CamelModel


class FavoriteCreate(CamelModel):
    book_id: str = Field(..., min_length=1)


class FavoriteSchema(CamelModel):
    id: str
    user_id: str
    book_id: str
    created_at: datetime.datetime
    book: BookSchema


class FavoriteRemoved(CamelModel):
    message: str
    removed: int
