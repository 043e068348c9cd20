"""Unit tests for the exception handlers and the error envelope."""

from __future__ import annotations

import asyncpg
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from cookboxd.core.errors import Conflict, setup_exception_handlers


pytestmark = pytest.mark.unit


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.post("/duplicate")
    async def duplicate() -> None:
        raise asyncpg.UniqueViolationError("duplicate key value violates unique constraint")

    @app.post("/dangling")
    async def dangling() -> None:
        raise asyncpg.ForeignKeyViolationError("insert or update violates foreign key constraint")

    @app.post("/taken")
    async def taken() -> None:
        raise Conflict("Username already exists")

    return TestClient(app)


class TestDatabaseErrors:
    """Tests for races the service checks cannot see."""

    def test_unique_violation_is_conflict(self, client: TestClient) -> None:
        """Should answer 409 when a concurrent insert wins the unique value."""
        response = client.post("/duplicate")
        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "Resource already exists"}

    def test_foreign_key_violation_is_validation_error(self, client: TestClient) -> None:
        """Should answer 400 when a referenced row vanished mid-request."""
        response = client.post("/dangling")
        assert response.status_code == 400
        assert response.json()["success"] is False


class TestAppErrors:
    """Tests for the AppError handler."""

    def test_app_error_uses_its_status(self, client: TestClient) -> None:
        """Should render the message in the envelope."""
        response = client.post("/taken")
        assert response.status_code == 409
        assert response.json() == {"success": False, "message": "Username already exists"}
