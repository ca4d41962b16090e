"""Pydantic schemas package"""
from .envelope import envelope, error_envelope
from .post import (
    AuthorSummary,
    PostCreateRequest,
    PostRecord,
    PostStatus,
    PostUpdateRequest,
)
from .user import LoginRequest, ProfileUpdateRequest, RegisterRequest, UserRecord

__all__ = [
    "envelope",
    "error_envelope",
    "AuthorSummary",
    "PostCreateRequest",
    "PostRecord",
    "PostStatus",
    "PostUpdateRequest",
    "LoginRequest",
    "ProfileUpdateRequest",
    "RegisterRequest",
    "UserRecord",
]
