"""
Post repository
Posts are hard deleted. Reads join the author so listings can filter on the
author's username and embed an author summary.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Mapping, Optional

from blog_api.query.fields import POST_UPDATE_COLUMNS, to_columns
from blog_api.query.pagination import Page, Pagination
from blog_api.query.predicates import AssignmentBuilder, BoundParams, PredicateBuilder, WhereClause
from blog_api.repositories.base import Repository, compose
from blog_api.schemas.post import PostRecord, PostStatus

SELECT_WITH_AUTHOR = (
    "SELECT p.*, u.username AS author_username, u.first_name AS author_first_name, "
    "u.last_name AS author_last_name, u.avatar_url AS author_avatar_url "
    "FROM posts p JOIN users u ON p.author_id = u.id"
)
COUNT_WITH_AUTHOR = "SELECT COUNT(*) FROM posts p JOIN users u ON p.author_id = u.id"


@dataclass
class PostFilters:
    """Optional listing filters; unset ones add nothing to the WHERE clause"""

    status: Optional[str] = None
    author: Optional[str] = None
    author_id: Optional[int] = None
    search: Optional[str] = None
    tags: Optional[List[str]] = None
    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None

    def where(self) -> WhereClause:
        return (
            PredicateBuilder()
            .equals("p.status", self.status)
            .equals("p.author_id", self.author_id)
            .contains("u.username", self.author)
            .contains(["p.title", "p.content"], self.search)
            .overlaps("p.tags", self.tags)
            .between("p.created_at", self.created_after, self.created_before)
            .build()
        )


class PostRepository(Repository):

    def create(
        self,
        title: str,
        content: str,
        author_id: int,
        slug: str,
        status: str = PostStatus.DRAFT.value,
        featured_image: Optional[str] = None,
        tags: Optional[List[str]] = None,
    ) -> PostRecord:
        params = BoundParams()
        values = ", ".join(
            params.add(value)
            for value in (title, content, author_id, slug, status, featured_image, list(tags or []))
        )
        sql = (
            "INSERT INTO posts (title, content, author_id, slug, status, featured_image, tags) "
            f"VALUES ({values}) RETURNING *"
        )
        return self._fetch_one(sql, params, PostRecord.from_row)

    def find_by_id(self, post_id: int) -> Optional[PostRecord]:
        where = PredicateBuilder().equals("p.id", post_id).build()
        return self._fetch_one(compose(SELECT_WITH_AUTHOR, where.clause), where.params, PostRecord.from_row)

    def list(self, filters: PostFilters, pagination: Pagination) -> Page[PostRecord]:
        return self._paginate(
            SELECT_WITH_AUTHOR,
            COUNT_WITH_AUTHOR,
            filters.where(),
            "p.created_at DESC, p.id DESC",
            pagination,
            PostRecord.from_row,
        )

    def find_by_author(self, author_id: int, pagination: Pagination) -> Page[PostRecord]:
        return self.list(PostFilters(author_id=author_id), pagination)

    def update(self, post_id: int, fields: Mapping[str, Any]) -> Optional[PostRecord]:
        """Partial update keyed by wire names; author_id is not updatable"""
        columns = to_columns(fields, POST_UPDATE_COLUMNS)
        if not columns:
            return self.find_by_id(post_id)

        assignments = AssignmentBuilder()
        for column, value in columns.items():
            assignments.set(column, value)
        sql, params = assignments.build_update("posts", "id", post_id)
        return self._fetch_one(sql, params, PostRecord.from_row)

    def delete(self, post_id: int) -> Optional[PostRecord]:
        params = BoundParams()
        sql = f"DELETE FROM posts WHERE id = {params.add(post_id)} RETURNING *"
        return self._fetch_one(sql, params, PostRecord.from_row)
