"""
Session management for Libreria.

`SessionManager` issues session tokens, resolves the authenticated user of an
incoming request and manages the session cookie. Requests reach it through
`RequestContext`, a normalized view of headers and cookies built once at the
HTTP boundary.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from sqlalchemy.orm import Session

from libreria.core.config import Settings
from libreria.core.security import create_access_token, decode_access_token
from libreria.crud.crud_user import get_user_by_id
from libreria.models.user import User

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    headers: dict[str, str] = field(default_factory=dict)
    cookies: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.headers = {key.lower(): value for key, value in self.headers.items()}

    @classmethod
    def from_mappings(
        cls,
        headers: Mapping[str, str] | None = None,
        cookies: Mapping[str, str] | None = None,
    ) -> "RequestContext":
        return cls(headers=dict(headers or {}), cookies=dict(cookies or {}))

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())

    def cookie(self, name: str) -> str | None:
        return self.cookies.get(name)


def bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


class SessionManager:
    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_days: int = 7,
        cookie_name: str = "token",
        trusted_header: str = "x-user-id",
        secure_cookies: bool = False,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = datetime.timedelta(days=expire_days)
        self.cookie_name = cookie_name
        self.trusted_header = trusted_header
        self.secure_cookies = secure_cookies

    @classmethod
    def from_settings(cls, config: Settings) -> "SessionManager":
        return cls(
            secret=config.JWT_SECRET,
            algorithm=config.JWT_ALGORITHM,
            expire_days=config.TOKEN_EXPIRE_DAYS,
            cookie_name=config.SESSION_COOKIE_NAME,
            trusted_header=config.TRUSTED_USER_HEADER,
            secure_cookies=config.is_production,
        )

    def issue(self, user_id: str, email: str | None) -> str:
        return create_access_token(
            subject=user_id,
            email=email,
            secret=self.secret,
            algorithm=self.algorithm,
            expires_in=self.expires_in,
        )

    def verify(self, token: str) -> dict[str, Any] | None:
        return decode_access_token(token, self.secret, self.algorithm)

    def extract_token(self, ctx: RequestContext) -> str | None:
        """Bearer header first, then the session cookie."""
        return bearer_token(ctx.header("authorization")) or ctx.cookie(self.cookie_name)

    def resolve(self, db: Session, ctx: RequestContext) -> User | None:
        """
        Resolves the authenticated user of a request.

        The trusted identity header (only ever set by the edge gate) wins; then
        the bearer token; then the session cookie. Any failure yields None,
        never an exception.
        """
        trusted_user_id = ctx.header(self.trusted_header)
        if trusted_user_id:
            return get_user_by_id(db, trusted_user_id)

        token = self.extract_token(ctx)
        if not token:
            return None
        claims = self.verify(token)
        if claims is None:
            return None

        user = get_user_by_id(db, claims["sub"])
        if user is None:
            logger.warning(f"Session token subject {claims['sub']} no longer resolves to a user")
        return user

    def set_cookie(self, response: Any, token: str) -> None:
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=int(self.expires_in.total_seconds()),
            path="/",
            httponly=True,
            samesite="lax",
            secure=self.secure_cookies,
        )

    def clear(self, response: Any) -> None:
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            httponly=True,
            samesite="lax",
            secure=self.secure_cookies,
        )
