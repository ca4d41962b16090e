import logging

from fastapi import APIRouter, Depends

from blog_api.core.exceptions import NotFoundError
from blog_api.dependencies import (
    get_current_user,
    get_pagination,
    get_post_repository,
    get_user_repository,
)
from blog_api.query.pagination import Pagination
from blog_api.repositories import PostRepository, UserRepository
from blog_api.schemas import UserRecord, envelope
from blog_api.services.authorization import Action, ensure_authorized

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["Users"])


@router.get("")
def list_users(
    pagination: Pagination = Depends(get_pagination),
    current_user: UserRecord = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    """Active users, newest first"""
    page = users.list(pagination)
    return envelope(message="Users retrieved successfully", data=page.serialize("users"))


@router.get("/{user_id}")
def get_user_by_id(
    user_id: int,
    current_user: UserRecord = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    user = users.find_by_id(user_id)

    if not user:
        raise NotFoundError("User not found")

    return envelope(message="User retrieved successfully", data={"user": user.serialize()})


@router.get("/{user_id}/posts")
def get_user_posts(
    user_id: int,
    pagination: Pagination = Depends(get_pagination),
    current_user: UserRecord = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
    posts: PostRepository = Depends(get_post_repository),
):
    if not users.find_by_id(user_id):
        raise NotFoundError("User not found")

    page = posts.find_by_author(user_id, pagination)
    return envelope(message="Posts retrieved successfully", data=page.serialize("posts"))


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    current_user: UserRecord = Depends(get_current_user),
    users: UserRepository = Depends(get_user_repository),
):
    """
    Deactivate a user account

    Deleting yourself is refused before the target is even looked up.
    """
    ensure_authorized(current_user.id, user_id, Action.DELETE_USER)

    user = users.delete(user_id)

    if not user:
        raise NotFoundError("User not found")

    logger.info(f"User deactivated: {user.username} (ID: {user_id}) by user {current_user.id}")

    return envelope(message="User deleted successfully")
