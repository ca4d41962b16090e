"""
Shared plumbing for the entity repositories
"""
import logging
from typing import Any, Callable, List, Optional, TypeVar

from sqlalchemy import text
from sqlalchemy.engine import Connection, CursorResult

from blog_api.query.pagination import Page, Pagination
from blog_api.query.predicates import BoundParams, WhereClause

logger = logging.getLogger(__name__)

T = TypeVar("T")


def compose(*parts: str) -> str:
    """Join SQL fragments, skipping empty ones"""
    return " ".join(part.strip() for part in parts if part and part.strip())


class Repository:
    """Runs parameterized statements on one borrowed connection"""

    def __init__(self, conn: Connection):
        self.conn = conn

    def _execute(self, sql: str, params: Optional[BoundParams] = None) -> CursorResult:
        bound = params.as_dict() if params is not None else {}
        logger.debug(f"SQL: {sql} | params: {list(bound.values())}")
        return self.conn.execute(text(sql), bound)

    def _fetch_one(self, sql: str, params: BoundParams, record: Callable[[Any], T]) -> Optional[T]:
        row = self._execute(sql, params).mappings().first()
        return record(row) if row is not None else None

    def _fetch_all(self, sql: str, params: BoundParams, record: Callable[[Any], T]) -> List[T]:
        return [record(row) for row in self._execute(sql, params).mappings().all()]

    def _paginate(
        self,
        select_sql: str,
        count_sql: str,
        where: WhereClause,
        order_by: str,
        pagination: Pagination,
        record: Callable[[Any], T],
    ) -> Page[T]:
        """
        Row query and count query over the same WhereClause.
        Only the row query gets LIMIT/OFFSET; the two have no ordering dependency.
        A page past the bigint OFFSET range is empty without asking the store.
        """
        items: List[T] = []
        if not pagination.past_any_row:
            suffix, row_params = where.paginate(pagination.limit, pagination.offset)
            items = self._fetch_all(
                compose(select_sql, where.clause, f"ORDER BY {order_by}", suffix),
                row_params,
                record,
            )
        total = self._execute(compose(count_sql, where.clause), where.params).scalar_one()

        return Page(
            items=items,
            total_count=int(total),
            current_page=pagination.page,
            limit=pagination.limit,
        )
