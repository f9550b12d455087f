"""
Thread CRUD operations.

Owner-scoped thread queries and activity bookkeeping.

Dependencies: sqlalchemy, notechat.boundary.db.models
System role: Conversation container persistence
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from notechat.boundary.db.base import utcnow
from notechat.boundary.db.CRUD.base_crud import BaseCRUD
from notechat.boundary.db.models.message_model import MessageModel
from notechat.boundary.db.models.thread_model import ThreadModel


class ThreadCRUD(BaseCRUD[ThreadModel]):
    """CRUD operations for ThreadModel."""

    def __init__(self) -> None:
        super().__init__(ThreadModel)

    async def get_for_owner(
        self,
        session: AsyncSession,
        thread_id: UUID,
        owner_id: UUID,
    ) -> ThreadModel | None:
        """Return the thread if it exists and belongs to owner_id."""
        stmt = select(ThreadModel).where(ThreadModel.id == thread_id, ThreadModel.owner_id == owner_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_owner(
        self,
        session: AsyncSession,
        owner_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ThreadModel]:
        """Threads of an owner, most recently active first."""
        stmt = (
            select(ThreadModel)
            .where(ThreadModel.owner_id == owner_id)
            .order_by(ThreadModel.updated_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_title(self, session: AsyncSession, thread_id: UUID, title: str | None) -> ThreadModel | None:
        """Rename a thread."""
        return await self.update_by_id(session, thread_id, title=title, updated_at=utcnow())

    async def touch(self, session: AsyncSession, thread_id: UUID) -> None:
        """Bump updated_at to now."""
        await session.execute(
            update(ThreadModel).where(ThreadModel.id == thread_id).values(updated_at=utcnow())
        )

    async def delete_with_messages(self, session: AsyncSession, thread_id: UUID) -> bool:
        """Delete a thread and all its messages. Returns False if it did not exist."""
        await session.execute(delete(MessageModel).where(MessageModel.thread_id == thread_id))
        return await self.delete_by_id(session, thread_id)


thread_crud = ThreadCRUD()
