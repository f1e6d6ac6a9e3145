"""
Test suite for application assembly and the service cache.

System role: Verification of router mounting and dependency wiring
"""

import pytest

from landmark_rag.api.deps import ServiceCache
from landmark_rag.application.services import PromptService
from landmark_rag.boundary.vdb import SqliteVectorStore
from landmark_rag.configs import Settings
from landmark_rag.configs.database import DatabaseSettings
from landmark_rag.configs.vector_store import VectorStoreSettings


def test_create_app_should_mount_routers_under_api(info_logging) -> None:
    """Test every router is reachable under the /api prefix."""
    # Arrange
    from landmark_rag.api.main import create_app

    # Act
    app = create_app()

    # Assert
    paths = {route.path for route in app.routes}
    assert {
        "/api/health",
        "/api/index/list",
        "/api/index/build",
        "/api/search",
        "/api/ask",
        "/api/chat",
        "/api/chat/stream",
        "/api/prompts",
        "/api/prompts/{name}",
        "/api/prompts/reset",
    } <= paths


class TestServiceCache:
    """Test suite for ServiceCache."""

    @pytest.fixture
    def cache(self) -> ServiceCache:
        return ServiceCache(
            Settings(
                database=DatabaseSettings(url="sqlite+aiosqlite:///:memory:"),
                vector_store=VectorStoreSettings(provider="sqlite", dimensions=8),
            )
        )

    def test_should_build_store_from_settings(self, cache: ServiceCache) -> None:
        """Test the configured local store is built with configured dimensions."""
        store = cache.vector_store
        assert isinstance(store, SqliteVectorStore)
        assert store.dimensions == 8

    def test_should_reuse_instances(self, cache: ServiceCache) -> None:
        """Test repeated access returns the cached instance."""
        assert cache.vector_store is cache.vector_store
        assert isinstance(cache.prompt_service, PromptService)
        assert cache.prompt_service is cache.prompt_service

    @pytest.mark.asyncio
    async def test_aclose_should_reset_cache(self, cache: ServiceCache) -> None:
        """Test closing disposes resources and forgets instances."""
        # Arrange
        first = cache.vector_store

        # Act
        await cache.aclose()

        # Assert
        assert cache.vector_store is not first
