"""
Message CRUD operations.

Dependencies: sqlalchemy, notechat.boundary.db.models
System role: Conversation message persistence
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from notechat.boundary.db.CRUD.base_crud import BaseCRUD
from notechat.boundary.db.models.message_model import MessageModel


class MessageCRUD(BaseCRUD[MessageModel]):
    """CRUD operations for MessageModel."""

    def __init__(self) -> None:
        super().__init__(MessageModel)

    async def get_recent(self, session: AsyncSession, thread_id: UUID, limit: int) -> list[MessageModel]:
        """
        Last `limit` messages of a thread.

        Returns:
            list[MessageModel]: Chronological (oldest first)
        """
        stmt = (
            select(MessageModel)
            .where(MessageModel.thread_id == thread_id)
            .order_by(MessageModel.created_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(reversed(result.scalars().all()))

    async def get_page(
        self,
        session: AsyncSession,
        thread_id: UUID,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[MessageModel]:
        """Messages of a thread in chronological order, paginated."""
        stmt = (
            select(MessageModel)
            .where(MessageModel.thread_id == thread_id)
            .order_by(MessageModel.created_at.asc())
            .offset(offset)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count(self, session: AsyncSession, thread_id: UUID) -> int:
        """Number of messages in a thread."""
        stmt = select(func.count()).select_from(MessageModel).where(MessageModel.thread_id == thread_id)
        result = await session.execute(stmt)
        return result.scalar_one()


message_crud = MessageCRUD()
