import os
import tempfile
from pathlib import Path

os.environ["DATABASE_URL"] = f"sqlite:///{Path(tempfile.mkdtemp()) / 'test.db'}"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient

from main import app
from api.auth import get_password_hash
from core.storage import InMemoryKeyValueStore, record_repository, seed_data, user_repository
from database import get_store


DEFAULT_PASSWORD = "password123"
DEFAULT_HASH = get_password_hash(DEFAULT_PASSWORD)


@pytest.fixture
def store():
    s = InMemoryKeyValueStore()
    seed_data(s, DEFAULT_HASH)
    return s


@pytest.fixture
def users(store):
    return user_repository(store)


@pytest.fixture
def records(store):
    return record_repository(store)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def auth_headers(client, username: str, password: str = DEFAULT_PASSWORD) -> dict:
    resp = client.post("/token", data={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return auth_headers(client, "admin")


@pytest.fixture
def tech_headers(client):
    return auth_headers(client, "tech1")
