"""
Test suite for dependency injection container.

Tests container wiring from settings and the FastAPI dependency functions
that read services off app.state.

System role: Verification of DI container
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from notechat.api.deps import (
    build_container,
    get_chat_service,
    get_container,
    get_ingestion_service,
    get_thread_service,
)
from notechat.application.services.chat_service import ChatService
from notechat.application.services.ingestion_service import IngestionService
from notechat.application.services.thread_service import ThreadService
from notechat.configs import Settings
from notechat.configs.database import DatabaseSettings
from notechat.configs.indexing import IndexingSettings
from notechat.configs.providers import ProviderSettings
from notechat.core.embeddings.mock_provider import MockEmbeddingProvider
from notechat.core.llm.mock_provider import MockCompletionProvider


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'deps.db'}"),
        providers=ProviderSettings(provider="mock", embedding_dimension=32),
        indexing=IndexingSettings(max_tokens=120, overlap_tokens=0),
    )


class TestBuildContainer:
    """Test suite for build_container()."""

    @pytest.mark.asyncio
    async def test_build_container_should_wire_mock_providers(self, settings) -> None:
        """Test providers follow the provider setting."""
        # Act
        container = build_container(settings)

        # Assert
        try:
            assert isinstance(container.embedding_provider, MockEmbeddingProvider)
            assert container.embedding_provider.dimension == 32
            assert isinstance(container.completion_provider, MockCompletionProvider)
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_build_container_should_share_one_registry_and_configure_chunker(self, settings) -> None:
        """Test the chat service uses the container registry and indexing settings reach the chunker."""
        # Act
        container = build_container(settings)

        # Assert
        try:
            assert container.chat_service.registry is container.registry
            assert container.ingestion_service.chunker.max_tokens == 120
            assert container.ingestion_service.chunker.overlap_tokens == 0
            assert container.retriever.embedding_provider is container.embedding_provider
        finally:
            await container.close()


class TestDependencyFunctions:
    """Test suite for FastAPI dependency functions."""

    def test_get_container_should_read_app_state(self) -> None:
        """Test lookup through the connection's app."""
        # Arrange
        connection = MagicMock()

        # Act & Assert
        assert get_container(connection) is connection.app.state.container

    def test_service_getters_should_return_container_services(self) -> None:
        """Test chat and ingestion services are application scoped."""
        # Arrange
        container = MagicMock()
        container.chat_service = MagicMock(spec=ChatService)
        container.ingestion_service = MagicMock(spec=IngestionService)

        # Act & Assert
        assert get_chat_service(container=container) is container.chat_service
        assert get_ingestion_service(container=container) is container.ingestion_service

    def test_get_thread_service_should_bind_request_session(self) -> None:
        """Test thread service is built per request over the injected session."""
        # Arrange
        db = AsyncMock(spec=AsyncSession)

        # Act
        service = get_thread_service(db=db)

        # Assert
        assert isinstance(service, ThreadService)
        assert service.db is db
