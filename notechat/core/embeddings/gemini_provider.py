"""
Google Generative AI embedding provider.

Wraps GoogleGenerativeAIEmbeddings with a fixed output dimensionality and
exponential-backoff retries on batch calls. The client is synchronous, so
calls run in the threadpool.

Dependencies: langchain_google_genai, tenacity, fastapi.concurrency
System role: Production embedding backend
"""

import logging

from fastapi.concurrency import run_in_threadpool
from langchain_google_genai import GoogleGenerativeAIEmbeddings
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from notechat.core.embeddings.base import EmbeddingProvider
from notechat.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3


class GeminiEmbeddingProvider(EmbeddingProvider):
    """Embedding provider backed by Google's embedding models."""

    def __init__(
        self,
        model: str = "models/text-embedding-004",
        dimension: int = 768,
        api_key: str | None = None,
    ) -> None:
        """
        Initialize the provider.

        Args:
            model: Google embedding model ID
            dimension: Output dimensionality requested on every call
            api_key: API key; falls back to GOOGLE_API_KEY when None

        Note:
            text-embedding-004 supports at most 768 dimensions.
        """
        kwargs = {"google_api_key": api_key} if api_key else {}
        self._client = GoogleGenerativeAIEmbeddings(model=model, **kwargs)
        self._model = model
        self._dimension = dimension
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, dimension={dimension}"
        )

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_id(self) -> str:
        return self._model

    async def embed(self, text: str) -> list[float]:
        try:
            vector = await run_in_threadpool(self._embed_query_with_retry, text)
        except Exception as e:
            raise EmbeddingError(f"Failed to embed query: {e}", provider=self._model) from e
        self._check_dimension(vector)
        return vector

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        try:
            vectors = await run_in_threadpool(self._embed_documents_with_retry, texts)
        except Exception as e:
            raise EmbeddingError(
                f"Failed to generate embeddings: {e}",
                provider=self._model,
                details={"batch_size": len(texts)},
            ) from e

        if len(vectors) != len(texts):
            raise EmbeddingError(
                "Embedding count does not match input count",
                provider=self._model,
                details={"expected": len(texts), "received": len(vectors)},
            )
        for vector in vectors:
            self._check_dimension(vector)
        return [list(v) for v in vectors]

    @retry(
        retry=retry_if_exception_type(Exception),
        stop=stop_after_attempt(MAX_ATTEMPTS),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        before_sleep=lambda retry_state: logger.warning(
            f"{__name__}:embed_batch - Retry {retry_state.attempt_number}/{MAX_ATTEMPTS} "
            f"after error: {retry_state.outcome.exception()}"
        ),
        reraise=True,
    )
    def _embed_documents_with_retry(self, texts: list[str]) -> list[list[float]]:
        return self._client.embed_documents(texts, output_dimensionality=self._dimension)

    @retry(
        retry=retry_if_exception_type(Exception),
        stop=stop_after_attempt(MAX_ATTEMPTS),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    def _embed_query_with_retry(self, text: str) -> list[float]:
        return self._client.embed_query(text, output_dimensionality=self._dimension)

    def _check_dimension(self, vector: list[float]) -> None:
        if len(vector) != self._dimension:
            raise EmbeddingError(
                "Embedding dimension mismatch",
                provider=self._model,
                details={"expected": self._dimension, "received": len(vector)},
            )
