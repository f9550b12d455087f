"""
Deterministic mock embedding provider.

Vectors depend only on the text, so tests and offline development get
stable similarity without network access.

Dependencies: math (stdlib)
System role: Offline/test embedding backend
"""

import math

from notechat.core.embeddings.base import EmbeddingProvider

MOCK_EMBEDDING_MODEL = "mock-embedding-model"


def text_hash(text: str) -> int:
    """
    32-bit rolling string hash (h = h * 31 + code unit), absolute value.

    Wraps as signed 32-bit arithmetic after every step so the value is
    identical across processes and platforms.
    """
    data = text.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = ((h << 5) - h + unit) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


class MockEmbeddingProvider(EmbeddingProvider):
    """Embeds text as [sin(hash + i) * 0.1 for i in range(dimension)]."""

    def __init__(self, dimension: int = 768) -> None:
        if dimension <= 0:
            raise ValueError("dimension must be positive")
        self._dimension = dimension

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_id(self) -> str:
        return MOCK_EMBEDDING_MODEL

    async def embed(self, text: str) -> list[float]:
        h = text_hash(text)
        return [math.sin(h + i) * 0.1 for i in range(self._dimension)]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        return [await self.embed(text) for text in texts]
