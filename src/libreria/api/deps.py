from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from libreria.core.auth import RequestContext, SessionManager
from libreria.core.config import settings
from libreria.core.errors import InvalidInput, Unauthorized
from libreria.core.validation import Invalid, parse_payload
from libreria.db.session import get_db
from libreria.models.user import User


_session_manager = SessionManager.from_settings(settings)


def get_session_manager() -> SessionManager:
    return _session_manager


def get_request_context(request: Request) -> RequestContext:
    return RequestContext.from_mappings(request.headers, request.cookies)


def get_optional_user(
    db: Session = Depends(get_db),
    ctx: RequestContext = Depends(get_request_context),
    sessions: SessionManager = Depends(get_session_manager),
) -> User | None:
    return sessions.resolve(db, ctx)


def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    if user is None:
        raise Unauthorized("Unauthorized")
    return user


def parse_or_400(schema, payload, message: str | None = None):
    result = parse_payload(schema, payload)
    if isinstance(result, Invalid):
        raise InvalidInput(message or result.message)
    return result.value
