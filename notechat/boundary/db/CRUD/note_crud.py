"""
Note CRUD operations.

Read-side queries over the notes table: owner-scoped lookup for ingestion
and bulk title lookup for citations.

Dependencies: sqlalchemy, notechat.boundary.db.models
System role: Note source access
"""

from collections.abc import Iterable, Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notechat.boundary.db.CRUD.base_crud import BaseCRUD
from notechat.boundary.db.models.note_model import NoteModel


class NoteCRUD(BaseCRUD[NoteModel]):
    """CRUD operations for NoteModel."""

    def __init__(self) -> None:
        super().__init__(NoteModel)

    async def get_for_owner(
        self,
        session: AsyncSession,
        note_id: UUID,
        owner_id: UUID,
    ) -> NoteModel | None:
        """Return the note if it exists and belongs to owner_id."""
        stmt = select(NoteModel).where(NoteModel.id == note_id, NoteModel.owner_id == owner_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_ids_for_owner(self, session: AsyncSession, owner_id: UUID) -> Sequence[UUID]:
        """All note IDs of an owner, most recently updated first."""
        stmt = (
            select(NoteModel.id)
            .where(NoteModel.owner_id == owner_id)
            .order_by(NoteModel.updated_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_titles(self, session: AsyncSession, note_ids: Iterable[UUID]) -> dict[UUID, str | None]:
        """
        Map note IDs to titles.

        Args:
            session: Async database session
            note_ids: Notes to look up; unknown IDs are absent from the result

        Returns:
            dict[UUID, str | None]: Title per found note
        """
        ids = list(set(note_ids))
        if not ids:
            return {}
        stmt = select(NoteModel.id, NoteModel.title).where(NoteModel.id.in_(ids))
        result = await session.execute(stmt)
        return {row.id: row.title for row in result}


note_crud = NoteCRUD()
