import os

# Must be set before blog_api reads its settings
os.environ["ENVIRONMENT"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["API_PREFIX"] = "/api"

import pytest
from fastapi.testclient import TestClient

from blog_api.app import app
from blog_api.dependencies import get_post_repository, get_user_repository
from tests.fakes import FakePostRepository, FakeUserRepository, InMemoryStore
from tests.helpers import auth_header, register


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_user_repository] = lambda: FakeUserRepository(store)
    app.dependency_overrides[get_post_repository] = lambda: FakePostRepository(store)
    yield TestClient(app)
    app.dependency_overrides.clear()


def _account(client, username, email):
    data = register(client, username, email).json()["data"]
    return {"id": data["user"]["id"], "token": data["token"], "headers": auth_header(data["token"])}


@pytest.fixture
def alice(client):
    return _account(client, "alice", "a@x.com")


@pytest.fixture
def bob(client):
    return _account(client, "bob", "b@x.com")
