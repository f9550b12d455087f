"""
Dependency injection container.

Builds every long-lived collaborator once per application (providers,
session factory, retriever, services, cancellation registry) and exposes
FastAPI dependency functions that read them from app.state.

Dependencies: notechat.configs, notechat.core, notechat.application, notechat.boundary
System role: DI container for service injection
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import Depends
from fastapi.requests import HTTPConnection
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from notechat.application.services.chat_service import ChatService
from notechat.application.services.ingestion_service import IngestionService
from notechat.application.services.thread_service import ThreadService
from notechat.boundary.db.connection import create_engine_from_settings, create_session_factory
from notechat.configs import Settings
from notechat.core.conversation.cancellation import CancellationRegistry
from notechat.core.conversation.orchestrator import ConversationOrchestrator
from notechat.core.embeddings.base import EmbeddingProvider
from notechat.core.embeddings.factory import create_embedding_provider
from notechat.core.indexing.chunker import TextChunker
from notechat.core.indexing.index_writer import IndexWriter
from notechat.core.llm.base import CompletionProvider
from notechat.core.llm.factory import create_completion_provider
from notechat.core.retrieval.context_assembler import ContextAssembler
from notechat.core.retrieval.hybrid_retriever import HybridRetriever

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Container for application-scoped service instances."""

    def __init__(
        self,
        settings: Settings,
        engine: AsyncEngine,
        embedding_provider: EmbeddingProvider,
        completion_provider: CompletionProvider,
    ) -> None:
        self.settings = settings
        self.engine = engine
        self.session_factory: async_sessionmaker = create_session_factory(engine)
        self.embedding_provider = embedding_provider
        self.completion_provider = completion_provider
        self.registry = CancellationRegistry()

        self.retriever = HybridRetriever(self.session_factory, embedding_provider, settings.retrieval)
        self.assembler = ContextAssembler(self.session_factory, settings.retrieval)
        self.orchestrator = ConversationOrchestrator(
            self.session_factory,
            self.retriever,
            self.assembler,
            completion_provider,
            settings.chat,
            max_results=settings.retrieval.max_results,
            max_context_tokens=settings.retrieval.max_context_tokens,
        )
        self.chat_service = ChatService(self.orchestrator, self.registry)
        self.ingestion_service = IngestionService(
            self.session_factory,
            TextChunker(settings.indexing.max_tokens, settings.indexing.overlap_tokens),
            embedding_provider,
            IndexWriter(),
            settings.indexing,
        )

    async def close(self) -> None:
        """Dispose the database engine."""
        await self.engine.dispose()


def build_container(settings: Settings) -> ServiceContainer:
    """
    Build the container from settings.

    Args:
        settings: Application settings

    Returns:
        ServiceContainer: Fully wired services
    """
    logger.info(
        f"{__name__}:build_container - provider={settings.providers.provider}, "
        f"database={'sqlite' if settings.database.is_sqlite else 'postgresql'}"
    )
    return ServiceContainer(
        settings=settings,
        engine=create_engine_from_settings(settings.database),
        embedding_provider=create_embedding_provider(settings.providers),
        completion_provider=create_completion_provider(settings.providers),
    )


def get_container(connection: HTTPConnection) -> ServiceContainer:
    """Container stored on app.state by the lifespan (HTTP and WebSocket)."""
    return connection.app.state.container


async def get_db(
    container: ServiceContainer = Depends(get_container),
) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Yields:
        AsyncSession: Session scoped to the request lifetime
    """
    async with container.session_factory() as session:
        yield session


def get_thread_service(db: AsyncSession = Depends(get_db)) -> ThreadService:
    """Get thread service instance."""
    return ThreadService(db)


def get_ingestion_service(container: ServiceContainer = Depends(get_container)) -> IngestionService:
    """Get the application ingestion service."""
    return container.ingestion_service


def get_chat_service(container: ServiceContainer = Depends(get_container)) -> ChatService:
    """Get the application chat service."""
    return container.chat_service
