"""
Security utilities for Libreria.

This module provides password hashing and verification using bcrypt through
passlib, and the signing/verification of session tokens (JWT, HS256 by
default) through PyJWT.

Functions:
    verify_password(plain_password: str, hashed_password: str) -> bool
    get_password_hash(password: str) -> str
    create_access_token(subject: str, email: str | None, ...) -> str
    decode_access_token(token: str, ...) -> dict | None
"""

import datetime
import logging
from typing import Any

import jwt
from passlib.context import CryptContext

from libreria.core.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PASSWORD_HASH_ROUNDS,
)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifies a plain text password against its hash.

    Args:
        plain_password (str): Password to check.
        hashed_password (str): Stored hash.

    Returns:
        bool: True if the password matches the hash, False otherwise.
    """
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """
    Generates a secure hash for the given password.

    Args:
        password (str): Plain text password.

    Returns:
        str: Hashed password.
    """
    return pwd_context.hash(password)

def create_access_token(
    subject: str,
    email: str | None,
    secret: str,
    algorithm: str = "HS256",
    expires_in: datetime.timedelta = datetime.timedelta(days=7),
) -> str:
    """
    Signs a time-bound token binding a user id (`sub`) and email.

    Args:
        subject (str): Stable user identifier.
        email (str | None): User email, carried as a claim.
        secret (str): Signing secret.
        algorithm (str): JWT algorithm.
        expires_in (datetime.timedelta): Validity window.

    Returns:
        str: Encoded token.
    """
    now = datetime.datetime.now(datetime.timezone.utc)
    payload = {
        "sub": subject,
        "email": email,
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)

def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> dict[str, Any] | None:
    """
    Verifies signature and expiry of a token.

    Returns:
        dict | None: The claims, or None when the token is malformed, expired,
        badly signed or lacks a subject.
    """
    try:
        claims = jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.PyJWTError as exc:
        logger.info(f"Rejected session token: {exc.__class__.__name__}")
        return None
    if not claims.get("sub"):
        logger.info("Rejected session token without subject")
        return None
    return claims
