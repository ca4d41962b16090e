import re
from datetime import datetime, timezone

import pytest

from blog_api.query.fields import UnknownFieldError
from blog_api.query.pagination import Pagination
from blog_api.repositories import PostFilters, PostRepository, UserRepository

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)

USER_ROW = {
    "id": 1,
    "username": "alice",
    "email": "a@x.com",
    "password_hash": "$2b$04$hash",
    "first_name": "Alice",
    "last_name": None,
    "avatar_url": None,
    "is_active": True,
    "created_at": NOW,
    "updated_at": NOW,
}

POST_ROW = {
    "id": 10,
    "title": "Hello",
    "content": "World",
    "author_id": 1,
    "slug": "hello-1",
    "status": "published",
    "featured_image": None,
    "tags": ["a"],
    "created_at": NOW,
    "updated_at": NOW,
    "author_username": "alice",
    "author_first_name": "Alice",
    "author_last_name": None,
    "author_avatar_url": None,
}


class FakeResult:
    def __init__(self, rows=None, scalar=None):
        self.rows = rows or []
        self.scalar = scalar

    def mappings(self):
        return self

    def first(self):
        return self.rows[0] if self.rows else None

    def all(self):
        return list(self.rows)

    def scalar_one(self):
        return self.scalar


class RecordingConnection:
    """Returns queued results in order and remembers every statement"""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = []

    def execute(self, statement, params):
        self.calls.append((str(statement), dict(params)))
        return self.results.pop(0)


def bound_names(sql):
    return sorted(set(re.findall(r":(p\d+)", sql)), key=lambda name: int(name[1:]))


def assert_params_match(sql, params):
    assert bound_names(sql) == list(params.keys())


def test_user_create_inserts_hash_as_given():
    conn = RecordingConnection(FakeResult([USER_ROW]))
    user = UserRepository(conn).create("alice", "a@x.com", "$2b$04$hash", "Alice")

    sql, params = conn.calls[0]
    assert sql.startswith("INSERT INTO users (username, email, password_hash, first_name, last_name)")
    assert sql.endswith("RETURNING *")
    assert list(params.values()) == ["alice", "a@x.com", "$2b$04$hash", "Alice", None]
    assert user.id == 1
    assert "password_hash" not in user.serialize()


@pytest.mark.parametrize(
    "method,column,value",
    [("find_by_id", "id", 1), ("find_by_email", "email", "a@x.com"), ("find_by_username", "username", "alice")],
)
def test_user_lookups_filter_inactive(method, column, value):
    conn = RecordingConnection(FakeResult([USER_ROW]))
    getattr(UserRepository(conn), method)(value)

    sql, params = conn.calls[0]
    assert sql == f"SELECT * FROM users WHERE {column} = :p1 AND is_active = :p2"
    assert params == {"p1": value, "p2": True}


def test_user_lookup_miss_returns_none():
    conn = RecordingConnection(FakeResult([]))
    assert UserRepository(conn).find_by_id(99) is None


def test_user_list_shares_predicates_between_rows_and_count():
    conn = RecordingConnection(FakeResult([USER_ROW]), FakeResult(scalar=21))
    page = UserRepository(conn).list(Pagination(page=3, limit=10))

    (row_sql, row_params), (count_sql, count_params) = conn.calls
    assert "password_hash" not in row_sql
    assert row_sql.endswith("WHERE is_active = :p1 ORDER BY created_at DESC, id DESC LIMIT :p2 OFFSET :p3")
    assert row_params == {"p1": True, "p2": 10, "p3": 20}
    assert count_sql == "SELECT COUNT(*) FROM users WHERE is_active = :p1"
    assert count_params == {"p1": True}

    assert page.total_count == 21
    assert page.total_pages == 3
    assert page.current_page == 3
    assert [user.username for user in page.items] == ["alice"]


def test_user_update_maps_wire_names_and_refreshes_timestamp():
    conn = RecordingConnection(FakeResult([USER_ROW]))
    UserRepository(conn).update(1, {"firstName": "Al", "avatarUrl": None})

    sql, params = conn.calls[0]
    assert sql == (
        "UPDATE users SET first_name = :p1, avatar_url = :p2, updated_at = CURRENT_TIMESTAMP "
        "WHERE id = :p3 RETURNING *"
    )
    assert params == {"p1": "Al", "p2": None, "p3": 1}


def test_user_update_without_fields_reads_current_row():
    conn = RecordingConnection(FakeResult([USER_ROW]))
    user = UserRepository(conn).update(1, {})

    assert len(conn.calls) == 1
    assert conn.calls[0][0].startswith("SELECT * FROM users")
    assert user.username == "alice"


def test_user_update_rejects_unmapped_field():
    conn = RecordingConnection()
    with pytest.raises(UnknownFieldError):
        UserRepository(conn).update(1, {"email": "new@x.com"})
    assert conn.calls == []


def test_user_delete_is_soft():
    conn = RecordingConnection(FakeResult([{**USER_ROW, "is_active": False}]))
    user = UserRepository(conn).delete(1)

    sql, params = conn.calls[0]
    assert sql.startswith("UPDATE users SET is_active = false")
    assert "DELETE" not in sql
    assert params == {"p1": 1}
    assert user.is_active is False


def test_post_find_by_id_joins_author():
    conn = RecordingConnection(FakeResult([POST_ROW]))
    post = PostRepository(conn).find_by_id(10)

    sql, params = conn.calls[0]
    assert "JOIN users u ON p.author_id = u.id" in sql
    assert sql.endswith("WHERE p.id = :p1")
    assert params == {"p1": 10}
    assert post.author.username == "alice"
    assert post.serialize()["author"] == {
        "id": 1,
        "username": "alice",
        "firstName": "Alice",
        "lastName": None,
        "avatarUrl": None,
    }


def test_post_list_without_filters_has_no_where():
    conn = RecordingConnection(FakeResult([]), FakeResult(scalar=0))
    page = PostRepository(conn).list(PostFilters(), Pagination())

    (row_sql, row_params), (count_sql, count_params) = conn.calls
    assert "WHERE" not in row_sql
    assert "WHERE" not in count_sql
    assert row_params == {"p1": 10, "p2": 0}
    assert count_params == {}
    assert page.total_pages == 0
    assert page.items == []


def test_post_list_with_every_filter():
    after = datetime(2024, 1, 1, tzinfo=timezone.utc)
    filters = PostFilters(status="published", author="ali", search="py", tags=["a", "b"], created_after=after)
    conn = RecordingConnection(FakeResult([POST_ROW]), FakeResult(scalar=3))

    page = PostRepository(conn).list(filters, Pagination(page=2, limit=2))

    (row_sql, row_params), (count_sql, count_params) = conn.calls
    expected_where = (
        "WHERE p.status = :p1 AND u.username ILIKE :p2 "
        "AND (p.title ILIKE :p3 OR p.content ILIKE :p4) "
        "AND p.tags && :p5 AND p.created_at >= :p6"
    )
    assert expected_where in row_sql
    assert count_sql.endswith(expected_where)
    assert row_sql.endswith("ORDER BY p.created_at DESC, p.id DESC LIMIT :p7 OFFSET :p8")

    assert count_params == {
        "p1": "published",
        "p2": "%ali%",
        "p3": "%py%",
        "p4": "%py%",
        "p5": ["a", "b"],
        "p6": after,
    }
    assert row_params == {**count_params, "p7": 2, "p8": 2}
    assert_params_match(row_sql, row_params)
    assert_params_match(count_sql, count_params)

    assert page.total_pages == 2
    assert page.has_prev and not page.has_next


def test_find_by_author_filters_on_author_id():
    conn = RecordingConnection(FakeResult([]), FakeResult(scalar=0))
    PostRepository(conn).find_by_author(1, Pagination())

    count_sql, count_params = conn.calls[1]
    assert count_sql.endswith("WHERE p.author_id = :p1")
    assert count_params == {"p1": 1}


def test_post_create_defaults_tags_to_empty_list():
    conn = RecordingConnection(FakeResult([{**POST_ROW, "tags": []}]))
    PostRepository(conn).create("Hello", "World", 1, "hello-1")

    sql, params = conn.calls[0]
    assert sql.startswith("INSERT INTO posts (title, content, author_id, slug, status, featured_image, tags)")
    assert list(params.values()) == ["Hello", "World", 1, "hello-1", "draft", None, []]


def test_post_update_never_touches_author():
    conn = RecordingConnection(FakeResult([POST_ROW]))
    PostRepository(conn).update(10, {"title": "New", "slug": "new-1", "featuredImage": "x.png"})

    sql, params = conn.calls[0]
    assert sql == (
        "UPDATE posts SET title = :p1, slug = :p2, featured_image = :p3, "
        "updated_at = CURRENT_TIMESTAMP WHERE id = :p4 RETURNING *"
    )
    assert params == {"p1": "New", "p2": "new-1", "p3": "x.png", "p4": 10}
    with pytest.raises(UnknownFieldError):
        PostRepository(RecordingConnection()).update(10, {"authorId": 2})


def test_post_delete_is_hard():
    conn = RecordingConnection(FakeResult([POST_ROW]))
    deleted = PostRepository(conn).delete(10)

    sql, params = conn.calls[0]
    assert sql == "DELETE FROM posts WHERE id = :p1 RETURNING *"
    assert params == {"p1": 10}
    assert deleted.id == 10


def test_page_beyond_bigint_offset_skips_row_query():
    conn = RecordingConnection(FakeResult(scalar=4))
    page = PostRepository(conn).list(PostFilters(), Pagination(page=10**20, limit=10))

    (count_sql, count_params), = conn.calls
    assert count_sql.startswith("SELECT COUNT(*)")
    assert page.items == []
    assert page.total_count == 4
    assert page.current_page == 10**20
    assert page.has_prev and not page.has_next
