"""
CRUD operations for the User model (the credential store).
Includes registration, lookups by id or email and password authentication.
Used by the session manager and the authentication endpoints.
"""

import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from ..models.user import User
from ..schemas.user import UserCreate
from ..core.errors import Conflict
from ..core.security import get_password_hash, verify_password
from typing import Optional

logger = logging.getLogger(__name__)

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """
    Gets a user by email.

    Args:
        db (Session): SQLAlchemy session.
        email (str): Email to look up.

    Returns:
        Optional[User]: The user if it exists, None otherwise.
    """
    return db.query(User).filter(User.email == email).first()

def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)

def create_user(db: Session, user: UserCreate) -> User:
    """
    Creates a new user with a hashed password.

    Args:
        db (Session): SQLAlchemy session.
        user (UserCreate): Registration data.

    Returns:
        User: The created user.

    Raises:
        Conflict: If the email is already registered.
    """
    if get_user_by_email(db, user.email) is not None:
        logger.warning(f"Registration rejected, email already in use: {user.email}")
        raise Conflict("User already exists")

    hashed_password: str = get_password_hash(user.password)
    db_user: User = User(name=user.name, email=user.email, hashed_password=hashed_password)
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Registration lost a race on email {user.email}")
        raise Conflict("User already exists")
    db.refresh(db_user)
    logger.info(f"User {db_user.id} registered")
    return db_user

def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """
    Checks a pair of credentials.

    Returns:
        Optional[User]: The user when the password matches; None for unknown
        emails, guest users without a password, or a wrong password.
    """
    user = get_user_by_email(db, email)
    if user is None or not user.hashed_password:
        logger.warning(f"Login failed for {email}: unknown user or no password set")
        return None
    if not verify_password(password, user.hashed_password):
        logger.warning(f"Login failed for {email}: wrong password")
        return None
    return user
