from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from libreria.api.deps import get_current_user, parse_or_400
from libreria.crud import add_favorite, list_favorites, remove_favorite
from libreria.db.session import get_db
from libreria.models.user import User
from libreria.schemas.favorite import FavoriteCreate, FavoriteRemoved, FavoriteSchema


router = APIRouter()


@router.get("", response_model=list[FavoriteSchema])
def get_favorites(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> list[FavoriteSchema]:
    return [FavoriteSchema.model_validate(row) for row in list_favorites(db, user.id)]


@router.post("", status_code=201, response_model=FavoriteSchema)
def post_favorite(
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> FavoriteSchema:
    data = parse_or_400(FavoriteCreate, payload, message="Book ID is required")
    favorite = add_favorite(db, user.id, data.book_id)
    return FavoriteSchema.model_validate(favorite)


@router.delete("", response_model=FavoriteRemoved)
def delete_favorite(
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> FavoriteRemoved:
    data = parse_or_400(FavoriteCreate, payload, message="Book ID is required")
    removed = remove_favorite(db, user.id, data.book_id)
    return FavoriteRemoved(message="Removed from favorites", removed=removed)
