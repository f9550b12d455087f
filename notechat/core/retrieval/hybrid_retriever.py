"""
Hybrid dense + sparse retriever.

Runs the vector search and the lexical search for a question concurrently,
each on its own database session, and fuses the two rankings with RRF.
Either signal may fail; the other still produces results.

Dependencies: sqlalchemy, notechat.core.embeddings, notechat.boundary.db
System role: Query-path retrieval
"""

import asyncio
import logging
from collections.abc import Awaitable
from uuid import UUID

from sqlalchemy.ext.asyncio import async_sessionmaker

from notechat.boundary.db.CRUD.note_chunk_crud import note_chunk_crud
from notechat.boundary.db.models.note_chunk_model import NoteChunkModel
from notechat.configs.retrieval import RetrievalSettings
from notechat.core.embeddings.base import EmbeddingProvider
from notechat.core.retrieval.fusion import reciprocal_rank_fusion
from notechat.models.retrieval import PassageSource, RetrievedPassage

logger = logging.getLogger(__name__)


def _to_passages(
    matches: list[tuple[NoteChunkModel, float]],
    source: PassageSource,
) -> list[RetrievedPassage]:
    return [
        RetrievedPassage(
            chunk_id=chunk.id,
            note_id=chunk.note_id,
            text=chunk.text,
            chunk_index=chunk.chunk_index,
            score=score,
            source=source,
        )
        for chunk, score in matches
    ]


class HybridRetriever:
    """Owner-scoped hybrid search over indexed note chunks."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        embedding_provider: EmbeddingProvider,
        settings: RetrievalSettings,
    ) -> None:
        """
        Initialize retriever.

        Args:
            session_factory: Factory for per-signal sessions
            embedding_provider: Embeds the question for dense search
            settings: Thresholds, limits, and fusion constant
        """
        self.session_factory = session_factory
        self.embedding_provider = embedding_provider
        self.settings = settings

    async def dense_search(self, query: str, owner_id: UUID) -> list[RetrievedPassage]:
        """Embed the question and return cosine matches above the threshold."""
        query_embedding = await self.embedding_provider.embed(query)
        async with self.session_factory() as session:
            matches = await note_chunk_crud.search_similarity(
                session,
                query_embedding,
                owner_id,
                threshold=self.settings.similarity_threshold,
                limit=self.settings.match_count,
            )
        return _to_passages(matches, PassageSource.DENSE)

    async def sparse_search(self, query: str, owner_id: UUID) -> list[RetrievedPassage]:
        """Return lexically ranked matches."""
        async with self.session_factory() as session:
            matches = await note_chunk_crud.search_fulltext(
                session,
                query,
                owner_id,
                limit=self.settings.match_count,
            )
        return _to_passages(matches, PassageSource.SPARSE)

    async def search(
        self,
        query: str,
        owner_id: UUID,
        max_results: int | None = None,
    ) -> list[RetrievedPassage]:
        """
        Run both signals concurrently and fuse them.

        Args:
            query: User question
            owner_id: Owner scope
            max_results: Cap on fused results (settings.max_results when None)

        Returns:
            list[RetrievedPassage]: Fused passages, best first
        """
        limit = max_results if max_results is not None else self.settings.max_results

        dense, sparse = await asyncio.gather(
            self._degrade(self.dense_search(query, owner_id), PassageSource.DENSE, owner_id),
            self._degrade(self.sparse_search(query, owner_id), PassageSource.SPARSE, owner_id),
        )

        fused = reciprocal_rank_fusion(dense, sparse, k=self.settings.rrf_k)
        logger.info(
            f"{__name__}:search - dense={len(dense)} sparse={len(sparse)} fused={len(fused)} limit={limit}"
        )
        return fused[:limit]

    @staticmethod
    async def _degrade(
        search: Awaitable[list[RetrievedPassage]],
        signal: PassageSource,
        owner_id: UUID,
    ) -> list[RetrievedPassage]:
        try:
            return await search
        except Exception as e:
            logger.warning(
                f"{__name__}:search - {signal.value} signal failed, continuing without it",
                extra={"owner_id": str(owner_id), "error_type": type(e).__name__, "error_msg": str(e)},
            )
            return []
