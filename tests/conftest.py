import asyncio
import os
import sys
from types import SimpleNamespace

import pytest

# Path setup before any project imports so the suite runs without an install
ROOT = os.path.dirname(__file__)
BACKEND = os.path.abspath(os.path.join(ROOT, "..", "backend"))
if BACKEND not in sys.path:  # pragma: no cover - environment dependent
    sys.path.insert(0, BACKEND)

from fastapi.testclient import TestClient  # noqa: E402

from sleep_diary.core.config import Settings  # noqa: E402
from sleep_diary.db import create_store  # noqa: E402
from sleep_diary.main import create_app  # noqa: E402
from sleep_diary.services import CredentialStore, EntryStore  # noqa: E402

TEST_SECRET = "test-secret"


@pytest.fixture(params=["sqlite", "memory"])
def settings(request, tmp_path):
    """Settings on a throwaway data dir, once per storage backend"""
    return Settings(
        STORAGE_BACKEND=request.param,
        DATA_DIR=str(tmp_path),
        BCRYPT_ROUNDS=4,
        JWT_SECRET=TEST_SECRET,
        STATIC_DIR=None,
        SNAPSHOT_INTERVAL_SECONDS=0,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def with_store(settings):
    """Run ``scenario(store)`` against a freshly initialized backend"""
    def runner(scenario):
        async def main():
            store = create_store(settings)
            await store.initialize()
            try:
                return await scenario(store)
            finally:
                await store.close()
        return asyncio.run(main())
    return runner


@pytest.fixture
def stores(settings):
    """Build the credential and entry stores on top of a backend"""
    def build(store):
        credentials = CredentialStore(
            store,
            rounds=settings.BCRYPT_ROUNDS,
            min_password_length=settings.MIN_PASSWORD_LENGTH,
            admin_username=settings.ADMIN_USERNAME,
        )
        return credentials, EntryStore(store)
    return build


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


def register(client, username="alice", password="pass1", sec_q=0, sec_a="Rex"):
    resp = client.post(
        "/api/register",
        json={"username": username, "password": password, "secQ": sec_q, "secA": sec_a},
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


def login(client, username, password):
    return client.post("/api/login", json={"username": username, "password": password})


@pytest.fixture
def helpers():
    """Expose module helpers to test files without importing conftest"""
    return SimpleNamespace(auth_headers=auth_headers, register=register, login=login)


@pytest.fixture
def alice(client):
    return register(client)


@pytest.fixture
def admin_token(client):
    resp = login(client, "admin", "admin123")
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]
