"""
SQL predicate and assignment builders

Placeholders are produced by the same call that records their value
(BoundParams.add), so the n-th placeholder in a clause is always the n-th
bound value. A WhereClause built once is shared by a row query and its count
query; LIMIT/OFFSET are bound on a copy and never leak into the count.

Placeholders are named :p1, :p2, ... for SQLAlchemy text() statements.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

RangeValue = Optional[Union[date, datetime, int, float]]


class BoundParams:
    """Ordered bound values; add() returns the placeholder naming the value."""

    def __init__(self, values: Optional[Iterable[Any]] = None):
        self._values: List[Any] = list(values or [])

    def add(self, value: Any) -> str:
        self._values.append(value)
        return f":p{len(self._values)}"

    def copy(self) -> "BoundParams":
        return BoundParams(self._values)

    @property
    def values(self) -> List[Any]:
        return list(self._values)

    def as_dict(self) -> Dict[str, Any]:
        return {f"p{index}": value for index, value in enumerate(self._values, start=1)}

    def __len__(self) -> int:
        return len(self._values)


def is_present(value: Any) -> bool:
    """Absent filters are None, empty strings and empty collections."""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) > 0
    return True


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class WhereClause:
    clause: str
    params: BoundParams

    @property
    def values(self) -> List[Any]:
        return self.params.values

    def paginate(self, limit: int, offset: int) -> Tuple[str, BoundParams]:
        """LIMIT/OFFSET suffix bound after the predicate values, on a copy."""
        params = self.params.copy()
        suffix = f"LIMIT {params.add(limit)} OFFSET {params.add(offset)}"
        return suffix, params


class PredicateBuilder:
    """Accumulates AND-ed conditions; each method is a no-op for an absent value."""

    def __init__(self):
        self._conditions: List[str] = []
        self._params = BoundParams()

    def equals(self, column: str, value: Any) -> "PredicateBuilder":
        if is_present(value):
            self._conditions.append(f"{column} = {self._params.add(value)}")
        return self

    def contains(self, columns: Union[str, Sequence[str]], term: Optional[str]) -> "PredicateBuilder":
        """Case-insensitive substring match; several columns are OR-ed in one group."""
        if not is_present(term):
            return self
        if isinstance(columns, str):
            columns = [columns]
        pattern = f"%{escape_like(term.strip())}%"
        parts = [f"{column} ILIKE {self._params.add(pattern)}" for column in columns]
        if len(parts) == 1:
            self._conditions.append(parts[0])
        else:
            self._conditions.append("(" + " OR ".join(parts) + ")")
        return self

    def overlaps(self, column: str, values: Optional[Iterable[str]]) -> "PredicateBuilder":
        """Array overlap: at least one element in common."""
        items = [value for value in (values or []) if is_present(value)]
        if items:
            self._conditions.append(f"{column} && {self._params.add(items)}")
        return self

    def between(self, column: str, lower: RangeValue = None, upper: RangeValue = None) -> "PredicateBuilder":
        """Inclusive range; either bound may be omitted."""
        if lower is not None:
            self._conditions.append(f"{column} >= {self._params.add(lower)}")
        if upper is not None:
            self._conditions.append(f"{column} <= {self._params.add(upper)}")
        return self

    def build(self) -> WhereClause:
        clause = "WHERE " + " AND ".join(self._conditions) if self._conditions else ""
        return WhereClause(clause=clause, params=self._params.copy())


class AssignmentBuilder:
    """SET clause for a partial update; placeholders continue into the WHERE."""

    def __init__(self):
        self._assignments: List[str] = []
        self._params = BoundParams()

    def set(self, column: str, value: Any) -> "AssignmentBuilder":
        self._assignments.append(f"{column} = {self._params.add(value)}")
        return self

    def __bool__(self) -> bool:
        return bool(self._assignments)

    def build_update(self, table: str, key_column: str, key: Any) -> Tuple[str, BoundParams]:
        """UPDATE statement that also refreshes updated_at and returns the row."""
        if not self._assignments:
            raise ValueError("No columns to update")
        params = self._params.copy()
        assignments = self._assignments + ["updated_at = CURRENT_TIMESTAMP"]
        sql = (
            f"UPDATE {table} SET {', '.join(assignments)} "
            f"WHERE {key_column} = {params.add(key)} RETURNING *"
        )
        return sql, params
