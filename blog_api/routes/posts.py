import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from blog_api.core.exceptions import NotFoundError
from blog_api.dependencies import (
    get_current_user,
    get_optional_user,
    get_pagination,
    get_post_repository,
)
from blog_api.query.pagination import Pagination
from blog_api.repositories import PostFilters, PostRepository
from blog_api.schemas import (
    PostCreateRequest,
    PostStatus,
    PostUpdateRequest,
    UserRecord,
    envelope,
)
from blog_api.services.authorization import Action, ensure_authorized, is_authorized
from blog_api.services.slugs import generate_slug

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/posts", tags=["Posts"])


def split_tags(raw: Optional[str]) -> List[str]:
    """'a, b,,c' -> ['a', 'b', 'c']"""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreateRequest,
    current_user: UserRecord = Depends(get_current_user),
    posts: PostRepository = Depends(get_post_repository),
):
    """Create a post authored by the caller; status defaults to draft"""

    post = posts.create(
        title=payload.title,
        content=payload.content,
        author_id=current_user.id,
        slug=generate_slug(payload.title),
        status=(payload.status or PostStatus.DRAFT).value,
        featured_image=payload.featured_image,
        tags=payload.tags,
    )

    logger.info(f"Post created: {post.slug} (ID: {post.id}) by user {current_user.id}")

    return envelope(message="Post created successfully", data={"post": post.serialize()})


@router.get("")
def list_posts(
    pagination: Pagination = Depends(get_pagination),
    status_filter: Optional[PostStatus] = Query(None, alias="status"),
    author: Optional[str] = Query(None, description="Substring of the author's username"),
    search: Optional[str] = Query(None, description="Substring of title or content"),
    tags: Optional[str] = Query(None, description="Comma separated; matches posts sharing any tag"),
    created_after: Optional[datetime] = Query(None, alias="createdAfter"),
    created_before: Optional[datetime] = Query(None, alias="createdBefore"),
    posts: PostRepository = Depends(get_post_repository),
):
    """Posts newest first, filtered by whichever parameters are present"""

    filters = PostFilters(
        status=status_filter.value if status_filter else None,
        author=author,
        search=search,
        tags=split_tags(tags),
        created_after=created_after,
        created_before=created_before,
    )
    page = posts.list(filters, pagination)

    return envelope(message="Posts retrieved successfully", data=page.serialize("posts"))


@router.get("/{post_id}")
def get_post_by_id(
    post_id: int,
    viewer: Optional[UserRecord] = Depends(get_optional_user),
    posts: PostRepository = Depends(get_post_repository),
):
    post = posts.find_by_id(post_id)

    if not post:
        raise NotFoundError("Post not found")

    can_edit = bool(is_authorized(viewer.id if viewer else None, post.author_id, Action.UPDATE_POST))

    return envelope(
        message="Post retrieved successfully",
        data={"post": post.serialize(), "canEdit": can_edit},
    )


@router.put("/{post_id}")
def update_post(
    post_id: int,
    payload: PostUpdateRequest,
    current_user: UserRecord = Depends(get_current_user),
    posts: PostRepository = Depends(get_post_repository),
):
    """
    Partial update by the author

    Absent post is 404 before ownership is checked; a new title regenerates the slug.
    """

    post = posts.find_by_id(post_id)
    if not post:
        raise NotFoundError("Post not found")

    ensure_authorized(current_user.id, post.author_id, Action.UPDATE_POST)

    fields = payload.provided_fields()
    if "title" in fields:
        fields["slug"] = generate_slug(fields["title"])
    if "tags" in fields and fields["tags"] is None:
        fields["tags"] = []

    updated = posts.update(post.id, fields)
    if not updated:
        raise NotFoundError("Post not found")

    logger.info(f"Post updated: {updated.slug} (ID: {updated.id}) by user {current_user.id}")

    return envelope(message="Post updated successfully", data={"post": updated.serialize()})


@router.delete("/{post_id}")
def delete_post(
    post_id: int,
    current_user: UserRecord = Depends(get_current_user),
    posts: PostRepository = Depends(get_post_repository),
):
    post = posts.find_by_id(post_id)
    if not post:
        raise NotFoundError("Post not found")

    ensure_authorized(current_user.id, post.author_id, Action.DELETE_POST)

    posts.delete(post.id)

    logger.info(f"Post deleted: {post.slug} (ID: {post.id}) by user {current_user.id}")

    return envelope(message="Post deleted successfully")
