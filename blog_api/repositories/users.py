"""
User repository
Only active rows are visible; delete flips is_active instead of removing the row.
Passwords arrive here already hashed.
"""
from typing import Any, Mapping, Optional

from blog_api.query.fields import USER_UPDATE_COLUMNS, to_columns
from blog_api.query.pagination import Page, Pagination
from blog_api.query.predicates import AssignmentBuilder, BoundParams, PredicateBuilder
from blog_api.repositories.base import Repository, compose
from blog_api.schemas.user import UserRecord

# Listing never selects password_hash
LIST_COLUMNS = "id, username, email, first_name, last_name, avatar_url, is_active, created_at, updated_at"


class UserRepository(Repository):

    def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> UserRecord:
        params = BoundParams()
        values = ", ".join(
            params.add(value) for value in (username, email, password_hash, first_name, last_name)
        )
        sql = (
            "INSERT INTO users (username, email, password_hash, first_name, last_name) "
            f"VALUES ({values}) RETURNING *"
        )
        return self._fetch_one(sql, params, UserRecord.from_row)

    def _find_active(self, column: str, value: Any) -> Optional[UserRecord]:
        where = PredicateBuilder().equals(column, value).equals("is_active", True).build()
        return self._fetch_one(compose("SELECT * FROM users", where.clause), where.params, UserRecord.from_row)

    def find_by_id(self, user_id: int) -> Optional[UserRecord]:
        return self._find_active("id", user_id)

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        return self._find_active("email", email)

    def find_by_username(self, username: str) -> Optional[UserRecord]:
        return self._find_active("username", username)

    def list(self, pagination: Pagination) -> Page[UserRecord]:
        where = PredicateBuilder().equals("is_active", True).build()
        return self._paginate(
            f"SELECT {LIST_COLUMNS} FROM users",
            "SELECT COUNT(*) FROM users",
            where,
            "created_at DESC, id DESC",
            pagination,
            UserRecord.from_row,
        )

    def update(self, user_id: int, fields: Mapping[str, Any]) -> Optional[UserRecord]:
        """
        Partial update keyed by wire names (firstName, lastName, avatarUrl).
        No fields means no statement: the current row is returned as is.
        """
        columns = to_columns(fields, USER_UPDATE_COLUMNS)
        if not columns:
            return self.find_by_id(user_id)

        assignments = AssignmentBuilder()
        for column, value in columns.items():
            assignments.set(column, value)
        sql, params = assignments.build_update("users", "id", user_id)
        return self._fetch_one(sql, params, UserRecord.from_row)

    def delete(self, user_id: int) -> Optional[UserRecord]:
        """Soft delete; None when there was no active user with this id"""
        params = BoundParams()
        sql = (
            "UPDATE users SET is_active = false, updated_at = CURRENT_TIMESTAMP "
            f"WHERE id = {params.add(user_id)} AND is_active = true RETURNING *"
        )
        return self._fetch_one(sql, params, UserRecord.from_row)
