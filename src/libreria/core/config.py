"""
Configuration module for Libreria.

This module defines the Settings class, which loads environment variables
and provides application-wide configuration: database URL, session token
signing, cookie policy, the Google Books catalog and the retry policies used
by the storage layer.

Usage:
    Import the `settings` object to access configuration throughout the project.
"""

import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from typing import List

load_dotenv()

class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        DATABASE_URL (str): Database connection string.
        ENVIRONMENT (str): Current environment ('development', 'test', 'production').
        JWT_SECRET (str): Secret used to sign session tokens.
        JWT_ALGORITHM (str): Signing algorithm for session tokens.
        TOKEN_EXPIRE_DAYS (int): Validity of a session token, in days.
        SESSION_COOKIE_NAME (str): Name of the cookie carrying the session token.
        TRUSTED_USER_HEADER (str): Header injected by the edge gate with the user id.
        PASSWORD_HASH_ROUNDS (int): bcrypt cost factor.
        GOOGLE_BOOKS_API_URL (str): Base URL of the Google Books volumes endpoint.
        GOOGLE_BOOKS_API_KEY (str): Optional API key for Google Books.
        GOOGLE_BOOKS_TIMEOUT (float): Timeout for catalog requests, in seconds.
        SEARCH_MAX_RESULTS (int): Maximum number of results per catalog search.
        BOOK_UPSERT_MAX_ATTEMPTS (int): Attempts for the book cache upsert.
        BOOK_UPSERT_RETRY_DELAY (float): Fixed delay between upsert attempts, in seconds.
        VOTE_MAX_ATTEMPTS (int): Attempts for the optimistic vote transition.
        ALLOW_SELF_VOTES (bool): Whether authors may vote on their own reviews.
        CORS_ORIGINS (str): Comma-separated list of allowed origins.
        LOG_LEVEL (str): Root logging level.
    """
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./libreria.db")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    JWT_SECRET: str = os.getenv("JWT_SECRET", "changeme")
    JWT_ALGORITHM: str = "HS256"
    TOKEN_EXPIRE_DAYS: int = 7
    SESSION_COOKIE_NAME: str = "token"
    TRUSTED_USER_HEADER: str = "x-user-id"
    PASSWORD_HASH_ROUNDS: int = 12

    GOOGLE_BOOKS_API_URL: str = "https://www.googleapis.com/books/v1/volumes"
    GOOGLE_BOOKS_API_KEY: str = os.getenv("GOOGLE_BOOKS_API_KEY", "")
    GOOGLE_BOOKS_TIMEOUT: float = 10.0
    SEARCH_MAX_RESULTS: int = 20

    BOOK_UPSERT_MAX_ATTEMPTS: int = 3
    BOOK_UPSERT_RETRY_DELAY: float = 0.1
    VOTE_MAX_ATTEMPTS: int = 3
    ALLOW_SELF_VOTES: bool = False

    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def cors_origin_list(self) -> List[str]:
        """
        Returns the list of allowed CORS origins parsed from CORS_ORIGINS.

        Returns:
            List[str]: List of origins.
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(',') if origin.strip()]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
