"""
Thread service orchestrator.

Coordinates thread lifecycle operations and message history paging.
Every operation is scoped to the requesting owner.

Dependencies: notechat.boundary.db.CRUD
System role: Thread use case orchestration
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from notechat.boundary.db.CRUD.message_crud import message_crud
from notechat.boundary.db.CRUD.thread_crud import thread_crud
from notechat.boundary.db.models.message_model import MessageModel
from notechat.boundary.db.models.thread_model import ThreadModel
from notechat.core.exceptions import ThreadNotFoundError


class ThreadService:
    """Thread service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize thread service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def create_thread(self, owner_id: UUID, title: str | None = None) -> ThreadModel:
        """Create and commit a new thread."""
        thread = await thread_crud.create(self.db, owner_id=owner_id, title=title)
        await self.db.commit()
        return thread

    async def list_threads(
        self,
        owner_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ThreadModel]:
        """Threads of an owner, most recently active first."""
        return list(await thread_crud.list_for_owner(self.db, owner_id, limit=limit, offset=offset))

    async def get_thread(self, thread_id: UUID, owner_id: UUID) -> ThreadModel:
        """
        Get thread by ID.

        Raises:
            ThreadNotFoundError: Thread missing or owned by someone else
        """
        thread = await thread_crud.get_for_owner(self.db, thread_id, owner_id)
        if thread is None:
            raise ThreadNotFoundError(str(thread_id))
        return thread

    async def rename_thread(self, thread_id: UUID, owner_id: UUID, title: str | None) -> ThreadModel:
        """
        Set a thread's title.

        Raises:
            ThreadNotFoundError: Thread missing or owned by someone else
        """
        await self.get_thread(thread_id, owner_id)
        thread = await thread_crud.update_title(self.db, thread_id, title)
        await self.db.commit()
        return thread

    async def delete_thread(self, thread_id: UUID, owner_id: UUID) -> None:
        """
        Delete a thread with its messages.

        Raises:
            ThreadNotFoundError: Thread missing or owned by someone else
        """
        await self.get_thread(thread_id, owner_id)
        await thread_crud.delete_with_messages(self.db, thread_id)
        await self.db.commit()

    async def get_messages(
        self,
        thread_id: UUID,
        owner_id: UUID,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[MessageModel], int]:
        """
        Page of messages (oldest first) and the thread's total message count.

        Raises:
            ThreadNotFoundError: Thread missing or owned by someone else
        """
        await self.get_thread(thread_id, owner_id)
        messages = await message_crud.get_page(self.db, thread_id, limit=limit, offset=offset)
        total = await message_crud.count(self.db, thread_id)
        return list(messages), total
