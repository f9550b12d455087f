"""
Chat history adapter.

Reads and writes thread messages, converting stored rows to LangChain
messages for prompt composition.

Dependencies: langchain_core.messages, notechat.boundary.db
System role: Chat history business logic adapter
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from sqlalchemy.ext.asyncio import AsyncSession

from notechat.boundary.db.CRUD.message_crud import message_crud
from notechat.boundary.db.models.message_model import MessageModel, MessageRole, MessageStatus
from notechat.core.indexing.chunker import estimate_tokens

_ROLE_TO_MESSAGE = {
    MessageRole.USER: HumanMessage,
    MessageRole.ASSISTANT: AIMessage,
    MessageRole.SYSTEM: SystemMessage,
}


def to_langchain_message(row: MessageModel) -> BaseMessage:
    """Convert a stored message to the matching LangChain message type."""
    return _ROLE_TO_MESSAGE[row.role](content=row.text)


class ChatHistoryAdapter:
    """
    High-level adapter for one thread's messages.

    Writes flush only; the caller commits.
    """

    def __init__(self, thread_id: UUID, db: AsyncSession) -> None:
        """
        Initialize chat history adapter.

        Args:
            thread_id: Thread UUID for chat history scope
            db: AsyncSession for database operations
        """
        self.thread_id = thread_id
        self.db = db

    async def add_user_message(self, text: str, created_at: datetime | None = None) -> MessageModel:
        """Store a user message {"text": ...}."""
        fields: dict[str, Any] = {}
        if created_at is not None:
            fields["created_at"] = created_at
        return await message_crud.create(
            self.db,
            thread_id=self.thread_id,
            role=MessageRole.USER,
            content={"text": text},
            token_count=estimate_tokens(text),
            status=MessageStatus.COMPLETED,
            **fields,
        )

    async def add_ai_message(
        self,
        text: str,
        citations: list[dict[str, Any]],
        metadata: dict[str, Any],
        status: MessageStatus = MessageStatus.COMPLETED,
        created_at: datetime | None = None,
    ) -> MessageModel:
        """Store an assistant message {"text", "citations", "metadata"}."""
        fields: dict[str, Any] = {}
        if created_at is not None:
            fields["created_at"] = created_at
        return await message_crud.create(
            self.db,
            thread_id=self.thread_id,
            role=MessageRole.ASSISTANT,
            content={"text": text, "citations": citations, "metadata": metadata},
            token_count=estimate_tokens(text),
            status=status,
            **fields,
        )

    async def get_messages(self, limit: int) -> list[BaseMessage]:
        """
        Most recent messages as LangChain messages.

        Args:
            limit: Maximum number of recent messages to return

        Returns:
            list[BaseMessage]: Oldest first
        """
        if limit <= 0:
            return []
        rows = await message_crud.get_recent(self.db, self.thread_id, limit)
        return [to_langchain_message(row) for row in rows]
