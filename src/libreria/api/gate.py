"""
Edge gate: a static public/protected route table applied before routing.

Client-supplied identity headers are always dropped. On protected routes the
session token must verify, and the gate then injects the trusted identity
headers for the handlers (which still resolve the user themselves).
"""

from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from libreria.api.deps import get_session_manager
from libreria.core.auth import RequestContext

logger = logging.getLogger(__name__)

PROTECTED_ROUTES = ("/api/favorites", "/api/reviews")
PUBLIC_ROUTES = (
    "/api/auth/login",
    "/api/auth/register",
    "/api/auth/logout",
    "/api/search",
    "/api/books",
)
USER_EMAIL_HEADER = "x-user-email"


def _matches(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def is_protected_route(path: str) -> bool:
    if any(_matches(path, route) for route in PUBLIC_ROUTES):
        return False
    return any(_matches(path, route) for route in PROTECTED_ROUTES)


async def edge_gate(request: Request, call_next):
    sessions = get_session_manager()
    trusted = {sessions.trusted_header.lower().encode(), USER_EMAIL_HEADER.encode()}
    headers = [(key, value) for key, value in request.scope["headers"] if key.lower() not in trusted]

    path = request.url.path
    if request.method != "OPTIONS" and is_protected_route(path):
        ctx = RequestContext.from_mappings(request.headers, request.cookies)
        token = sessions.extract_token(ctx)
        if not token:
            return JSONResponse({"message": "Token required"}, status_code=401)
        claims = sessions.verify(token)
        if claims is None:
            logger.info(f"Gate rejected an invalid token on {path}")
            return JSONResponse({"message": "Invalid token"}, status_code=401)
        headers.append((sessions.trusted_header.lower().encode(), str(claims["sub"]).encode()))
        headers.append((USER_EMAIL_HEADER.encode(), str(claims.get("email") or "").encode()))

    request.scope["headers"] = headers
    return await call_next(request)
