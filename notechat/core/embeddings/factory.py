"""
Embedding provider factory.

Dependencies: notechat.configs
System role: Startup-time provider selection
"""

from notechat.configs.providers import ProviderSettings
from notechat.core.embeddings.base import EmbeddingProvider
from notechat.core.embeddings.mock_provider import MockEmbeddingProvider


def create_embedding_provider(settings: ProviderSettings) -> EmbeddingProvider:
    """
    Build the embedding provider named by settings.provider.

    Raises:
        ValueError: Unknown provider name
    """
    if settings.provider == "mock":
        return MockEmbeddingProvider(dimension=settings.embedding_dimension)
    if settings.provider == "gemini":
        from notechat.core.embeddings.gemini_provider import GeminiEmbeddingProvider

        return GeminiEmbeddingProvider(
            model=settings.embedding_model,
            dimension=settings.embedding_dimension,
            api_key=settings.google_api_key,
        )
    raise ValueError(f"Unknown embedding provider: {settings.provider}")
