from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Response
from sqlalchemy.orm import Session

from libreria.api.deps import get_current_user, get_session_manager, parse_or_400
from libreria.core.auth import SessionManager
from libreria.core.errors import Conflict, InvalidInput, Unauthorized
from libreria.crud import authenticate_user, create_user
from libreria.db.session import get_db
from libreria.models.user import User
from libreria.schemas.common import MessageResponse
from libreria.schemas.user import AuthResponse, UserCreate, UserLogin, UserSchema


logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", status_code=201, response_model=AuthResponse)
def register(
    response: Response,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    sessions: SessionManager = Depends(get_session_manager),
) -> AuthResponse:
    data = parse_or_400(UserCreate, payload)
    try:
        user = create_user(db, data)
    except Conflict as exc:
        raise InvalidInput(exc.message) from exc

    sessions.set_cookie(response, sessions.issue(user.id, user.email))
    return AuthResponse(message="Registration successful", user=UserSchema.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(
    response: Response,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    sessions: SessionManager = Depends(get_session_manager),
) -> AuthResponse:
    data = parse_or_400(UserLogin, payload)
    user = authenticate_user(db, data.email, data.password)
    if user is None:
        raise Unauthorized("Invalid credentials")

    sessions.set_cookie(response, sessions.issue(user.id, user.email))
    return AuthResponse(message="Login successful", user=UserSchema.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    sessions: SessionManager = Depends(get_session_manager),
) -> MessageResponse:
    sessions.clear(response)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserSchema)
def me(user: User = Depends(get_current_user)) -> UserSchema:
    return UserSchema.model_validate(user)
