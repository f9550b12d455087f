"""
Embedding providers and vector similarity helpers.
"""

from notechat.core.embeddings.base import EmbeddingProvider
from notechat.core.embeddings.factory import create_embedding_provider
from notechat.core.embeddings.mock_provider import MockEmbeddingProvider
from notechat.core.embeddings.similarity import cosine_similarity, normalize

__all__ = [
    "EmbeddingProvider",
    "MockEmbeddingProvider",
    "create_embedding_provider",
    "cosine_similarity",
    "normalize",
]
