"""
Application error taxonomy
Every failure a handler raises maps to one of these; the error handlers
render them as the standard response envelope
"""
from typing import Dict, List, Optional


class AppError(Exception):
    """Base class for errors that carry an HTTP status and a client-safe message"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.errors = errors
        if status_code is not None:
            self.status_code = status_code

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return None


class ValidationError(AppError):
    """Malformed or missing input; carries every violated rule"""

    status_code = 400

    def __init__(self, errors: List[str], message: str = "Validation failed"):
        super().__init__(message, errors=list(errors))


class AuthenticationError(AppError):
    """Missing, invalid or expired credential"""

    status_code = 401

    @property
    def headers(self) -> Optional[Dict[str, str]]:
        return {"WWW-Authenticate": "Bearer"}


class AuthorizationError(AppError):
    """Valid identity without rights to the resource"""

    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    """Uniqueness violation"""

    status_code = 409


class ServiceUnavailableError(AppError):
    """Store unreachable or a statement exceeded its time bound"""

    status_code = 503
