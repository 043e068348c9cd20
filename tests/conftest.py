"""Shared fixtures: in-memory repositories, seeded users and an API client."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from cookboxd.auth import security
from cookboxd.core.deps import get_repositories
from cookboxd.core.ports import Repositories
from cookboxd.main import create_app

from .fakes import FakeStore, build_repositories
from .helpers import PASSWORD


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JWT_SECRET", "test-secret-that-is-long-enough-for-hs256")


@pytest.fixture(scope="session")
def password_hash() -> str:
    """Hash once per session; bcrypt is slow on purpose."""
    return security.hash_password(PASSWORD)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def repos(store: FakeStore) -> Repositories:
    return build_repositories(store)


@pytest.fixture
def admin(store: FakeStore, password_hash: str) -> dict:
    return store.add_user("admin_user", role="admin", password_hash=password_hash)


@pytest.fixture
def alice(store: FakeStore, password_hash: str) -> dict:
    return store.add_user("alice", password_hash=password_hash)


@pytest.fixture
def bob(store: FakeStore, password_hash: str) -> dict:
    return store.add_user("bob", password_hash=password_hash)


@pytest.fixture
def app(repos: Repositories) -> Iterator[FastAPI]:
    application = create_app(use_database=False)
    application.dependency_overrides[get_repositories] = lambda: repos
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
