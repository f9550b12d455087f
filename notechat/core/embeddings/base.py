"""
Embedding provider interface.

Dependencies: abc (stdlib)
System role: Capability contract for dense vector generation
"""

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """
    Text to fixed-dimension vector.

    embed_batch preserves input order 1:1. Implementations raise
    EmbeddingError on failure and never return vectors of the wrong size.
    """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Length of every vector this provider returns."""

    @property
    @abstractmethod
    def model_id(self) -> str:
        """Identifier stored alongside each vector."""

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """Embed a single query text."""

    @abstractmethod
    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed passages, one vector per input in the same order."""
