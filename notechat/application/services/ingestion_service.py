"""
Note ingestion service.

Indexes notes: normalize -> fingerprint -> chunk -> replace chunks -> embed.
Batches run a fixed number of notes concurrently, each on its own database
session, with a pause between batches to stay under provider rate limits.

Dependencies: notechat.core.indexing, notechat.core.embeddings, notechat.boundary.db
System role: Ingestion worker pool
"""

import asyncio
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import async_sessionmaker

from notechat.boundary.db.CRUD.note_crud import note_crud
from notechat.boundary.db.CRUD.note_embedding_crud import note_embedding_crud
from notechat.configs.indexing import IndexingSettings
from notechat.core.embeddings.base import EmbeddingProvider
from notechat.core.exceptions import EmbeddingError, NoteNotFoundError
from notechat.core.indexing.chunker import TextChunker
from notechat.core.indexing.fingerprint import content_fingerprint, html_to_text
from notechat.core.indexing.index_writer import IndexWriter
from notechat.models.note import BackfillResult, IngestionResult, IngestionStatus

logger = logging.getLogger(__name__)

# Google embedding endpoints accept at most 100 texts per request
BACKFILL_EMBED_BATCH = 100


class IngestionService:
    """Indexes notes into the chunk/vector store."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        chunker: TextChunker,
        embedding_provider: EmbeddingProvider,
        writer: IndexWriter,
        settings: IndexingSettings,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            session_factory: Factory for per-note database sessions
            chunker: Sentence chunker
            embedding_provider: Vector backend
            writer: Chunk/vector persistence
            settings: Batch size and pacing
        """
        self.session_factory = session_factory
        self.chunker = chunker
        self.embedding_provider = embedding_provider
        self.writer = writer
        self.settings = settings

    async def ingest_note(self, note_id: UUID, owner_id: UUID) -> IngestionResult:
        """
        Index one note.

        Unchanged text (same fingerprint as the stored chunks) is a no-op.
        An embedding failure keeps the new chunks, which stay lexically
        searchable until backfill_embeddings() succeeds.

        Args:
            note_id: Note to index
            owner_id: Owner of the note

        Returns:
            IngestionResult: Outcome and counts

        Raises:
            NoteNotFoundError: Note missing or owned by someone else
            StorageError: Chunk persistence failed
        """
        async with self.session_factory() as session:
            note = await note_crud.get_for_owner(session, note_id, owner_id)
            if note is None:
                raise NoteNotFoundError(str(note_id))

            text = html_to_text(note.content)
            fingerprint = content_fingerprint(text)
            current = await self.writer.current_fingerprint(session, note_id)
            if current == fingerprint:
                logger.info(f"{__name__}:ingest_note - note={note_id} unchanged, skipping")
                return IngestionResult(note_id=note_id, status=IngestionStatus.UNCHANGED)

            chunks = self.chunker.chunk(text)
            if not chunks:
                if current is not None:
                    await self.writer.replace_chunks(session, note_id, owner_id, [], fingerprint)
                logger.info(f"{__name__}:ingest_note - note={note_id} has no indexable text")
                return IngestionResult(note_id=note_id, status=IngestionStatus.EMPTY)

            rows = await self.writer.replace_chunks(session, note_id, owner_id, chunks, fingerprint)

            try:
                vectors = await self.embedding_provider.embed_batch([row.text for row in rows])
                embedded = await self.writer.attach_embeddings(
                    session,
                    rows,
                    vectors,
                    model_id=self.embedding_provider.model_id,
                    dimension=self.embedding_provider.dimension,
                )
            except EmbeddingError as e:
                logger.warning(
                    f"{__name__}:ingest_note - note={note_id} embedding FAILED, chunks kept: {e}"
                )
                return IngestionResult(
                    note_id=note_id,
                    status=IngestionStatus.EMBEDDING_FAILED,
                    chunk_count=len(rows),
                    error=str(e),
                )

        logger.info(f"{__name__}:ingest_note - note={note_id} indexed chunks={len(rows)}")
        return IngestionResult(
            note_id=note_id,
            status=IngestionStatus.INDEXED,
            chunk_count=len(rows),
            embedded_count=embedded,
        )

    async def ingest_batch(self, note_ids: list[UUID], owner_id: UUID) -> list[IngestionResult]:
        """
        Index notes batch by batch.

        A failing note yields a FAILED result and does not affect the others.

        Returns:
            list[IngestionResult]: One result per note, input order
        """
        results: list[IngestionResult] = []
        size = max(1, self.settings.batch_size)

        for start in range(0, len(note_ids), size):
            batch = note_ids[start:start + size]
            logger.info(
                f"{__name__}:ingest_batch - batch {start // size + 1}: {len(batch)} notes"
            )
            results.extend(
                await asyncio.gather(*(self._ingest_isolated(note_id, owner_id) for note_id in batch))
            )
            if start + size < len(note_ids) and self.settings.batch_delay_seconds > 0:
                await asyncio.sleep(self.settings.batch_delay_seconds)

        return results

    async def reindex_owner(self, owner_id: UUID) -> list[IngestionResult]:
        """Run ingest_batch over every note of an owner."""
        async with self.session_factory() as session:
            note_ids = list(await note_crud.list_ids_for_owner(session, owner_id))
        return await self.ingest_batch(note_ids, owner_id)

    async def backfill_embeddings(self, owner_id: UUID, limit: int | None = None) -> BackfillResult:
        """
        Embed chunks that have no vector yet.

        Stops at the first embedding failure; vectors stored before it are kept.

        Args:
            owner_id: Owner scope
            limit: Maximum chunks to process (settings.backfill_limit when None)

        Returns:
            BackfillResult: Pending chunk count found and how many were embedded
        """
        limit = limit or self.settings.backfill_limit
        embedded = 0

        async with self.session_factory() as session:
            pending = list(await note_embedding_crud.get_chunks_missing_embeddings(session, owner_id, limit))

            for start in range(0, len(pending), BACKFILL_EMBED_BATCH):
                batch = pending[start:start + BACKFILL_EMBED_BATCH]
                try:
                    vectors = await self.embedding_provider.embed_batch([c.text for c in batch])
                    embedded += await self.writer.attach_embeddings(
                        session,
                        batch,
                        vectors,
                        model_id=self.embedding_provider.model_id,
                        dimension=self.embedding_provider.dimension,
                    )
                except EmbeddingError as e:
                    logger.warning(f"{__name__}:backfill_embeddings - stopped after {embedded}: {e}")
                    break

        logger.info(f"{__name__}:backfill_embeddings - owner={owner_id} pending={len(pending)} embedded={embedded}")
        return BackfillResult(owner_id=owner_id, pending=len(pending), embedded=embedded)

    async def _ingest_isolated(self, note_id: UUID, owner_id: UUID) -> IngestionResult:
        try:
            return await self.ingest_note(note_id, owner_id)
        except Exception as e:
            logger.exception(
                f"{__name__}:ingest_batch - note={note_id} FAILED",
                extra={"error_type": type(e).__name__, "error_msg": str(e)},
            )
            return IngestionResult(note_id=note_id, status=IngestionStatus.FAILED, error=str(e))
