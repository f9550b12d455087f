"""
Note chunk CRUD operations.

Snapshot replacement for the index writer plus the two owner-scoped search
primitives of hybrid retrieval: dense (cosine over stored vectors) and
sparse (BM25+ over chunk text).

Dependencies: sqlalchemy, numpy, rank_bm25
System role: Chunk persistence and search
"""

import re
from collections.abc import Sequence
from uuid import UUID

from rank_bm25 import BM25Plus
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from notechat.boundary.db.CRUD.base_crud import BaseCRUD
from notechat.boundary.db.models.note_chunk_model import NoteChunkModel
from notechat.boundary.db.models.note_embedding_model import NoteEmbeddingModel
from notechat.core.embeddings.similarity import cosine_similarities

_TOKEN = re.compile(r"\w+")


def tokenize(text: str) -> list[str]:
    """Lowercase word tokens used by lexical search."""
    return _TOKEN.findall(text.lower())


class NoteChunkCRUD(BaseCRUD[NoteChunkModel]):
    """CRUD and search operations for NoteChunkModel."""

    def __init__(self) -> None:
        super().__init__(NoteChunkModel)

    async def get_content_hash(self, session: AsyncSession, note_id: UUID) -> str | None:
        """Content hash of the note's indexed snapshot, or None if never indexed."""
        stmt = select(NoteChunkModel.content_hash).where(NoteChunkModel.note_id == note_id).limit(1)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_for_note(self, session: AsyncSession, note_id: UUID) -> Sequence[NoteChunkModel]:
        """Chunks of a note in chunk_index order."""
        stmt = (
            select(NoteChunkModel)
            .where(NoteChunkModel.note_id == note_id)
            .order_by(NoteChunkModel.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_for_note(self, session: AsyncSession, note_id: UUID) -> int:
        """
        Delete every chunk of a note together with its embeddings.

        Embeddings are deleted explicitly so the operation does not depend on
        the backend enforcing ON DELETE CASCADE.

        Returns:
            int: Number of chunk rows deleted
        """
        chunk_ids = select(NoteChunkModel.id).where(NoteChunkModel.note_id == note_id)
        await session.execute(
            delete(NoteEmbeddingModel).where(NoteEmbeddingModel.chunk_id.in_(chunk_ids))
        )
        result = await session.execute(delete(NoteChunkModel).where(NoteChunkModel.note_id == note_id))
        return result.rowcount

    async def search_similarity(
        self,
        session: AsyncSession,
        query_embedding: Sequence[float],
        owner_id: UUID,
        threshold: float,
        limit: int,
    ) -> list[tuple[NoteChunkModel, float]]:
        """
        Dense search: cosine similarity against the owner's stored vectors.

        Vectors whose dimension differs from the query (other model) are skipped.

        Args:
            session: Async database session
            query_embedding: Question vector
            owner_id: Owner scope
            threshold: Strict lower bound on similarity
            limit: Maximum matches

        Returns:
            list[tuple[NoteChunkModel, float]]: Matches, similarity descending
        """
        stmt = (
            select(NoteChunkModel, NoteEmbeddingModel.embedding)
            .join(NoteEmbeddingModel, NoteEmbeddingModel.chunk_id == NoteChunkModel.id)
            .where(NoteChunkModel.owner_id == owner_id)
            .order_by(NoteChunkModel.note_id, NoteChunkModel.chunk_index)
        )
        result = await session.execute(stmt)

        dimension = len(query_embedding)
        candidates: list[NoteChunkModel] = []
        vectors: list[list[float]] = []
        for chunk, embedding in result.all():
            if embedding and len(embedding) == dimension:
                candidates.append(chunk)
                vectors.append(embedding)

        scores = cosine_similarities(query_embedding, vectors)
        matches = [
            (chunk, float(score))
            for chunk, score in zip(candidates, scores)
            if score > threshold
        ]
        matches.sort(key=lambda m: m[1], reverse=True)
        return matches[:limit]

    async def search_fulltext(
        self,
        session: AsyncSession,
        query: str,
        owner_id: UUID,
        limit: int,
    ) -> list[tuple[NoteChunkModel, float]]:
        """
        Sparse search: BM25+ rank over the owner's chunk corpus.

        Only chunks sharing at least one term with the query are returned.

        Args:
            session: Async database session
            query: Raw question text
            owner_id: Owner scope
            limit: Maximum matches

        Returns:
            list[tuple[NoteChunkModel, float]]: Matches, rank descending
        """
        query_tokens = tokenize(query)
        if not query_tokens:
            return []

        stmt = (
            select(NoteChunkModel)
            .where(NoteChunkModel.owner_id == owner_id)
            .order_by(NoteChunkModel.note_id, NoteChunkModel.chunk_index)
        )
        result = await session.execute(stmt)

        chunks: list[NoteChunkModel] = []
        corpus: list[list[str]] = []
        for chunk in result.scalars().all():
            tokens = tokenize(chunk.text)
            if tokens:
                chunks.append(chunk)
                corpus.append(tokens)
        if not corpus:
            return []

        scores = BM25Plus(corpus).get_scores(query_tokens)
        terms = set(query_tokens)
        matches = [
            (chunk, float(score))
            for chunk, tokens, score in zip(chunks, corpus, scores)
            if terms.intersection(tokens)
        ]
        matches.sort(key=lambda m: m[1], reverse=True)
        return matches[:limit]


note_chunk_crud = NoteChunkCRUD()
