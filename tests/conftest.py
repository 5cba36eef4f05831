"""
Shared pytest fixtures for the RecipeBox test suite.

This module provides fixtures for:
- MongoDB test client (async Motor with mongomock)
- Recipe repository bound to a mongomock collection
- FastAPI test client with dependency overrides

All fixtures support async tests via pytest-asyncio.
"""

from collections.abc import AsyncGenerator
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from recipebox.api.dependencies import get_recipe_repository
from recipebox.api.routes import duplicates
from recipebox.services.database import RecipeRepository


# ============================================================================
# MongoDB Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def mongodb_client() -> AsyncGenerator[AsyncIOMotorClient, None]:
    """
    Provide async MongoDB test client using mongomock.

    Each test gets a fresh client instance. The database is automatically
    cleaned up after each test.
    """
    try:
        import mongomock_motor
    except ImportError:
        pytest.skip("mongomock-motor not installed")

    client = mongomock_motor.AsyncMongoMockClient()

    yield client

    for db_name in await client.list_database_names():
        if db_name not in ("admin", "local", "config"):
            await client.drop_database(db_name)


@pytest_asyncio.fixture
async def test_db(mongodb_client: AsyncIOMotorClient) -> AsyncIOMotorDatabase:
    """Provide test database instance."""
    return mongodb_client.recipebox_test


@pytest_asyncio.fixture
async def recipe_repository(test_db: AsyncIOMotorDatabase) -> RecipeRepository:
    """
    Provide a recipe repository over an empty mongomock collection.

    Usage:
        async def test_listing(recipe_repository):
            await recipe_repository.collection.insert_one(create_recipe_document())
            assert len(await recipe_repository.list_active()) == 1
    """
    return RecipeRepository(test_db.recipes)


# ============================================================================
# Repository Mocks
# ============================================================================


@pytest.fixture
def mock_recipe_repo() -> MagicMock:
    """
    Provide a mock recipe repository with empty async defaults.

    Tests set return values on the individual methods they exercise.
    """
    repo = MagicMock(spec=RecipeRepository)
    repo.list_active = AsyncMock(return_value=[])
    repo.get_active_by_ids = AsyncMock(return_value=[])
    repo.soft_delete = AsyncMock(return_value=None)
    repo.count_active = AsyncMock(return_value=0)
    repo.list_titles = AsyncMock(return_value=[])
    return repo


# ============================================================================
# FastAPI Application Fixtures
# ============================================================================


@pytest.fixture
def test_app(mock_recipe_repo: MagicMock) -> FastAPI:
    """
    Provide FastAPI application with the duplicate routes mounted.

    The recipe repository dependency is overridden with ``mock_recipe_repo``
    so no database connection is needed.
    """
    app = FastAPI(title="RecipeBox Test App")
    app.include_router(duplicates.router, prefix="/api/v1")
    app.dependency_overrides[get_recipe_repository] = lambda: mock_recipe_repo
    return app


@pytest.fixture
def test_client(test_app: FastAPI) -> TestClient:
    """Provide synchronous test client for FastAPI endpoints."""
    return TestClient(test_app)


# ============================================================================
# Test Data Markers
# ============================================================================


def pytest_configure(config: Any) -> None:
    """
    Register custom pytest markers.

    Markers:
        - unit: Unit tests (isolated, fast)
        - integration: Integration tests (database, external services)
    """
    config.addinivalue_line("markers", "unit: Unit tests (isolated, fast)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (database, external services)"
    )
