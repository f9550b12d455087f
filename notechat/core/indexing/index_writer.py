"""
Chunk and vector persistence.

Replaces a note's indexed snapshot wholesale and attaches vectors to the
stored chunks. Each public method commits its own transaction so chunks
survive a later embedding failure.

Dependencies: sqlalchemy, notechat.boundary.db
System role: Final stage of note ingestion
"""

import logging
from collections.abc import Sequence
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notechat.boundary.db.CRUD.note_chunk_crud import note_chunk_crud
from notechat.boundary.db.models.note_chunk_model import NoteChunkModel
from notechat.boundary.db.models.note_embedding_model import NoteEmbeddingModel
from notechat.core.exceptions import EmbeddingError, StorageError
from notechat.core.indexing.chunker import estimate_tokens

logger = logging.getLogger(__name__)


class IndexWriter:
    """Writes note chunks and their embeddings."""

    async def current_fingerprint(self, session: AsyncSession, note_id: UUID) -> str | None:
        """Content hash of the indexed snapshot, None when the note has no chunks."""
        try:
            return await note_chunk_crud.get_content_hash(session, note_id)
        except SQLAlchemyError as e:
            raise StorageError(
                f"Failed to read content hash: {e}",
                operation="current_fingerprint",
                details={"note_id": str(note_id)},
            ) from e

    async def replace_chunks(
        self,
        session: AsyncSession,
        note_id: UUID,
        owner_id: UUID,
        chunks: Sequence[str],
        content_hash: str,
    ) -> list[NoteChunkModel]:
        """
        Delete the note's chunks and embeddings, then insert the new snapshot.

        An empty `chunks` list leaves the note with nothing indexed.

        Args:
            session: Async database session
            note_id: Note being indexed
            owner_id: Owner scope stored on every chunk
            chunks: Chunk texts in order; chunk_index follows list position
            content_hash: Fingerprint shared by every chunk of the snapshot

        Returns:
            list[NoteChunkModel]: Inserted rows in chunk_index order

        Raises:
            StorageError: Database failure (transaction rolled back)
        """
        try:
            deleted = await note_chunk_crud.delete_for_note(session, note_id)
            rows = [
                NoteChunkModel(
                    note_id=note_id,
                    owner_id=owner_id,
                    chunk_index=index,
                    text=text,
                    token_count=estimate_tokens(text),
                    content_hash=content_hash,
                )
                for index, text in enumerate(chunks)
            ]
            session.add_all(rows)
            await session.flush()
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise StorageError(
                f"Failed to replace chunks: {e}",
                operation="replace_chunks",
                details={"note_id": str(note_id)},
            ) from e

        logger.info(
            f"{__name__}:replace_chunks - note={note_id} deleted={deleted} inserted={len(rows)}"
        )
        return rows

    async def attach_embeddings(
        self,
        session: AsyncSession,
        chunks: Sequence[NoteChunkModel],
        vectors: Sequence[Sequence[float]],
        model_id: str,
        dimension: int,
    ) -> int:
        """
        Store one vector per chunk.

        Args:
            session: Async database session
            chunks: Persisted chunks
            vectors: Vectors aligned 1:1 with chunks
            model_id: Embedding model tag
            dimension: Required vector length

        Returns:
            int: Number of embeddings written

        Raises:
            EmbeddingError: Count or dimension mismatch (nothing written)
            StorageError: Database failure (transaction rolled back)
        """
        if len(chunks) != len(vectors):
            raise EmbeddingError(
                "Vector count does not match chunk count",
                provider=model_id,
                details={"chunks": len(chunks), "vectors": len(vectors)},
            )
        for vector in vectors:
            if len(vector) != dimension:
                raise EmbeddingError(
                    "Embedding dimension mismatch",
                    provider=model_id,
                    details={"expected": dimension, "received": len(vector)},
                )

        try:
            session.add_all(
                NoteEmbeddingModel(chunk_id=chunk.id, embedding=[float(x) for x in vector], model=model_id)
                for chunk, vector in zip(chunks, vectors)
            )
            await session.flush()
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            raise StorageError(
                f"Failed to store embeddings: {e}",
                operation="attach_embeddings",
                details={"count": len(chunks)},
            ) from e

        return len(chunks)
