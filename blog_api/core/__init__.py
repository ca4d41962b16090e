"""Core functionality package"""
from .database import Base, Database
from .exceptions import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from .security import create_access_token, hash_password, verify_password, verify_token

__all__ = [
    "Base", "Database",
    "AppError", "AuthenticationError", "AuthorizationError", "ConflictError",
    "NotFoundError", "ServiceUnavailableError", "ValidationError",
    "create_access_token", "hash_password", "verify_password", "verify_token",
]
