"""
Pydantic schemas for the User entity in the Libreria API.
Defines input and output models for registration, login and profile data.
"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from libreria.schemas.common import CamelModel

class UserCreate(BaseModel):
    """
    Schema for registering a user.

    Attributes:
        name (str): Display name, 3 to 100 characters.
        email (EmailStr): Email address.
        password (str): Plain text password (hashed before storing), 6 to 100 characters.
    """
    name: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=100)

class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=100)

class UserSchema(CamelModel):
    """
    Output schema for a user (never includes the password).

    Attributes:
        id (str): User id.
        name (Optional[str]): Display name.
        email (Optional[str]): Email address.
    """
    id: str
    name: Optional[str] = None
    email: Optional[str] = None

class AuthResponse(CamelModel):
    message: str
    user: UserSchema
