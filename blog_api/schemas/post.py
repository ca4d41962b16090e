"""
Pydantic schemas for posts
"""
from datetime import datetime
from enum import Enum
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from blog_api.schemas.messages import STATUS_ERROR, TAGS_BLANK, TITLE_MAX_LENGTH, invalid_field


class PostStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


def _check_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags and any(not tag.strip() for tag in tags):
        raise invalid_field(TAGS_BLANK)
    return tags

# Request Schemas

class PostCreateRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Hello world",
                "content": "First post",
                "status": "published",
                "tags": ["intro", "news"],
            }
        },
    )

    title: str = Field(..., max_length=TITLE_MAX_LENGTH)
    content: str
    status: Optional[PostStatus] = Field(None, description="Defaults to draft")
    featured_image: Optional[str] = Field(None, alias="featuredImage")
    tags: Optional[List[str]] = None

    @field_validator("title", "content")
    @classmethod
    def required(cls, value: str, info: ValidationInfo) -> str:
        if not value.strip():
            raise invalid_field(f"{info.field_name.capitalize()} is required")
        return value

    @field_validator("tags")
    @classmethod
    def tags_not_blank(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return _check_tags(value)


class PostUpdateRequest(BaseModel):
    """
    Same fields as creation, all optional; only sent fields change
    Validators only run for fields present in the body.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, max_length=TITLE_MAX_LENGTH)
    content: Optional[str] = None
    status: Optional[PostStatus] = None
    featured_image: Optional[str] = Field(None, alias="featuredImage")
    tags: Optional[List[str]] = None

    @field_validator("title", "content")
    @classmethod
    def not_empty(cls, value: Optional[str], info: ValidationInfo) -> str:
        if value is None or not value.strip():
            raise invalid_field(f"{info.field_name.capitalize()} cannot be empty")
        return value

    @field_validator("status")
    @classmethod
    def status_not_null(cls, value: Optional[PostStatus]) -> PostStatus:
        if value is None:
            raise invalid_field(STATUS_ERROR)
        return value

    @field_validator("tags")
    @classmethod
    def tags_not_blank(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return _check_tags(value)

    def provided_fields(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)

# Records

class AuthorSummary(BaseModel):
    id: int
    username: str
    first_name: Optional[str] = Field(None, serialization_alias="firstName")
    last_name: Optional[str] = Field(None, serialization_alias="lastName")
    avatar_url: Optional[str] = Field(None, serialization_alias="avatarUrl")


class PostRecord(BaseModel):
    """A post row, with the author summary when it was joined in"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    author_id: int = Field(serialization_alias="authorId")
    slug: str
    status: str = PostStatus.DRAFT.value
    featured_image: Optional[str] = Field(None, serialization_alias="featuredImage")
    tags: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")
    author: Optional[AuthorSummary] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PostRecord":
        data = dict(row)
        data["tags"] = data.get("tags") or []
        if data.get("author_username") is not None:
            data["author"] = AuthorSummary(
                id=data["author_id"],
                username=data.pop("author_username"),
                first_name=data.pop("author_first_name", None),
                last_name=data.pop("author_last_name", None),
                avatar_url=data.pop("author_avatar_url", None),
            )
        return cls.model_validate(data)

    def serialize(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
