"""
Note embedding CRUD operations.

Dependencies: sqlalchemy, notechat.boundary.db.models
System role: Vector persistence and backfill discovery
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notechat.boundary.db.CRUD.base_crud import BaseCRUD
from notechat.boundary.db.models.note_chunk_model import NoteChunkModel
from notechat.boundary.db.models.note_embedding_model import NoteEmbeddingModel


class NoteEmbeddingCRUD(BaseCRUD[NoteEmbeddingModel]):
    """CRUD operations for NoteEmbeddingModel."""

    def __init__(self) -> None:
        super().__init__(NoteEmbeddingModel)

    async def get_for_chunks(
        self,
        session: AsyncSession,
        chunk_ids: Sequence[UUID],
    ) -> Sequence[NoteEmbeddingModel]:
        """Embeddings attached to the given chunks."""
        if not chunk_ids:
            return []
        stmt = select(NoteEmbeddingModel).where(NoteEmbeddingModel.chunk_id.in_(chunk_ids))
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_chunks_missing_embeddings(
        self,
        session: AsyncSession,
        owner_id: UUID,
        limit: int,
    ) -> Sequence[NoteChunkModel]:
        """
        Chunks of an owner that have no vector yet.

        Args:
            session: Async database session
            owner_id: Owner scope
            limit: Maximum chunks to return

        Returns:
            Sequence[NoteChunkModel]: Oldest first
        """
        stmt = (
            select(NoteChunkModel)
            .outerjoin(NoteEmbeddingModel, NoteEmbeddingModel.chunk_id == NoteChunkModel.id)
            .where(NoteChunkModel.owner_id == owner_id, NoteEmbeddingModel.id.is_(None))
            .order_by(NoteChunkModel.created_at, NoteChunkModel.chunk_index)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


note_embedding_crud = NoteEmbeddingCRUD()
