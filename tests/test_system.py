import pytest

from blog_api.app import app


class HealthyDatabase:
    def ping(self):
        return None


class UnreachableDatabase:
    def ping(self):
        raise ConnectionError("connection refused")


@pytest.fixture
def database():
    def _install(db):
        app.state.db = db
    yield _install
    if hasattr(app.state, "db"):
        del app.state.db


def test_health_ok(client, database):
    database(HealthyDatabase())

    resp = client.get("/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "healthy"
    assert body["checks"]["database"]["status"] == "healthy"


def test_health_unreachable_store(client, database):
    database(UnreachableDatabase())

    resp = client.get("/health")

    assert resp.status_code == 503
    assert resp.json()["checks"]["database"] == {"status": "unhealthy", "error": "connection refused"}


def test_health_before_startup(client):
    resp = client.get("/health")

    assert resp.status_code == 503
    assert resp.json()["status"] == "unhealthy"


def test_root_lists_endpoints(client):
    body = client.get("/").json()

    assert body["endpoints"]["posts"] == "/api/posts"
