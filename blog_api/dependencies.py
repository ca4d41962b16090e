"""
FastAPI dependencies
Connection and repositories per request, pagination, and the current user
"""
import logging
from typing import Generator, Optional

from fastapi import Depends, Query, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.engine import Connection

from blog_api.config import settings
from blog_api.core.database import Database
from blog_api.core.exceptions import AuthenticationError
from blog_api.core.security import verify_token
from blog_api.query.pagination import Pagination, normalize_pagination
from blog_api.repositories import PostRepository, UserRepository
from blog_api.schemas.user import UserRecord

logger = logging.getLogger(__name__)

# Extracts the token from the Authorization: Bearer <token> header.
# auto_error=False so a missing header is reported through our own envelope.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False)


def get_database(request: Request) -> Database:
    return request.app.state.db


def get_connection(db: Database = Depends(get_database)) -> Generator[Connection, None, None]:
    # Cached per request, so both repositories share one connection
    with db.connect() as conn:
        yield conn


def get_user_repository(conn: Connection = Depends(get_connection)) -> UserRepository:
    return UserRepository(conn)


def get_post_repository(conn: Connection = Depends(get_connection)) -> PostRepository:
    return PostRepository(conn)


def get_pagination(
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Items per page, 1-100"),
) -> Pagination:
    return normalize_pagination(page, limit)

# Authentication Dependencies

def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    users: UserRepository = Depends(get_user_repository),
) -> UserRecord:
    """Required auth: the token must verify and name an active user"""
    if not token:
        raise AuthenticationError("Access denied. No token provided")

    payload = verify_token(token)
    user = users.find_by_id(payload["user_id"])
    if user is None:
        raise AuthenticationError("Invalid token: user no longer exists")

    return user


def get_optional_user(
    token: Optional[str] = Depends(oauth2_scheme),
    users: UserRepository = Depends(get_user_repository),
) -> Optional[UserRecord]:
    """Optional auth: anonymous when the header is missing or the token is bad"""
    if not token:
        return None
    try:
        return get_current_user(token, users)
    except AuthenticationError as e:
        logger.debug(f"Ignoring credential on optional-auth route: {e.message}")
        return None
