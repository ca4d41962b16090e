"""
Pagination

Validates raw page/limit query values and describes one page of a listing.
Out-of-range values are rejected, never clamped.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Generic, List, Optional, TypeVar, Union

from blog_api.core.exceptions import ValidationError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# OFFSET is a bigint in PostgreSQL
MAX_OFFSET = 2**63 - 1

PAGE_ERROR = "Page must be a positive integer"
LIMIT_ERROR = f"Limit must be between 1 and {MAX_LIMIT}"

T = TypeVar("T")

RawValue = Optional[Union[str, int]]


@dataclass(frozen=True)
class Pagination:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def past_any_row(self) -> bool:
        """True when the offset is beyond anything the store can address"""
        return self.offset > MAX_OFFSET


def _parse_int(raw: RawValue) -> Optional[int]:
    """Strict decimal integer parse; None when the value is not an integer."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if text.startswith(("+", "-")):
        sign, digits = text[0], text[1:]
    else:
        sign, digits = "", text
    # ASCII digits only; int() rejects "²" although it passes isdigit()
    if not (digits.isascii() and digits.isdigit()):
        return None
    try:
        return int(sign + digits)
    except ValueError:
        # more digits than the interpreter's int conversion limit
        return None


def _is_missing(raw: RawValue) -> bool:
    return raw is None or (isinstance(raw, str) and raw.strip() == "")


def normalize_pagination(page: RawValue = None, limit: RawValue = None) -> Pagination:
    """
    Turn raw query values into a validated Pagination.

    Missing values fall back to page 1 / limit 10. Every violated rule is
    reported in a single ValidationError.
    """
    errors = []

    page_value = DEFAULT_PAGE
    if not _is_missing(page):
        parsed = _parse_int(page)
        if parsed is None or parsed < 1:
            errors.append(PAGE_ERROR)
        else:
            page_value = parsed

    limit_value = DEFAULT_LIMIT
    if not _is_missing(limit):
        parsed = _parse_int(limit)
        if parsed is None or parsed < 1 or parsed > MAX_LIMIT:
            errors.append(LIMIT_ERROR)
        else:
            limit_value = parsed

    if errors:
        raise ValidationError(errors, message="Invalid pagination parameters")

    return Pagination(page=page_value, limit=limit_value)


def total_pages(total_count: int, limit: int) -> int:
    return math.ceil(total_count / limit) if total_count else 0


@dataclass
class Page(Generic[T]):
    """One page of a listing plus the counts needed to navigate the rest"""

    items: List[T] = field(default_factory=list)
    total_count: int = 0
    current_page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_count, self.limit)

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.current_page > 1

    def meta(self) -> dict:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalCount": self.total_count,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }

    def serialize(self, key: str) -> dict:
        """Envelope data: items under `key` followed by the page counters."""
        data: dict[str, Any] = {key: [item.serialize() for item in self.items]}
        data.update(self.meta())
        return data
