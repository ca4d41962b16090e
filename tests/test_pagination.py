import math

import pytest

from blog_api.core.exceptions import ValidationError
from blog_api.query.pagination import (
    LIMIT_ERROR,
    MAX_OFFSET,
    PAGE_ERROR,
    Page,
    Pagination,
    normalize_pagination,
)


def test_defaults_when_missing():
    assert normalize_pagination(None, None) == Pagination(page=1, limit=10)
    assert normalize_pagination("", "  ") == Pagination(page=1, limit=10)


def test_accepts_numeric_strings_and_ints():
    assert normalize_pagination("3", "25") == Pagination(page=3, limit=25)
    assert normalize_pagination(2, 100) == Pagination(page=2, limit=100)


@pytest.mark.parametrize("page", ["0", "-1", "abc", "1.5", "2x", "²", "١", "1\n2"])
def test_rejects_bad_page(page):
    with pytest.raises(ValidationError) as exc_info:
        normalize_pagination(page, None)
    assert exc_info.value.errors == [PAGE_ERROR]


@pytest.mark.parametrize("limit", ["0", "101", "ten", "-5", "¹⁰", "٥"])
def test_rejects_bad_limit(limit):
    with pytest.raises(ValidationError) as exc_info:
        normalize_pagination(None, limit)
    assert exc_info.value.errors == [LIMIT_ERROR]


def test_reports_both_violations():
    with pytest.raises(ValidationError) as exc_info:
        normalize_pagination("0", "500")
    assert exc_info.value.errors == [PAGE_ERROR, LIMIT_ERROR]
    assert exc_info.value.status_code == 400


def test_offset():
    assert Pagination(page=1, limit=10).offset == 0
    assert Pagination(page=4, limit=25).offset == 75


@pytest.mark.parametrize("total,limit", [(0, 10), (1, 10), (10, 10), (11, 10), (250, 100), (7, 1)])
def test_total_pages_is_ceiling(total, limit):
    page = Page(items=[], total_count=total, current_page=1, limit=limit)
    assert page.total_pages == math.ceil(total / limit)


def test_navigation_flags():
    first = Page(total_count=25, current_page=1, limit=10)
    middle = Page(total_count=25, current_page=2, limit=10)
    last = Page(total_count=25, current_page=3, limit=10)

    assert (first.has_prev, first.has_next) == (False, True)
    assert (middle.has_prev, middle.has_next) == (True, True)
    assert (last.has_prev, last.has_next) == (True, False)
    assert last.meta() == {
        "currentPage": 3,
        "totalPages": 3,
        "totalCount": 25,
        "hasNext": False,
        "hasPrev": True,
    }


def test_huge_page_is_valid_but_past_any_row():
    pagination = normalize_pagination("99999999999999999999", "10")

    assert pagination.page == 99999999999999999999
    assert pagination.offset > MAX_OFFSET
    assert pagination.past_any_row
    assert not Pagination(page=1, limit=100).past_any_row
