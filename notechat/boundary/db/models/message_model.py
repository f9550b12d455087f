"""
Message ORM model.

Dependencies: sqlalchemy, notechat.boundary.db.base
System role: Conversation persistence
"""

import enum
import uuid

from sqlalchemy import JSON, Enum, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from notechat.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class MessageRole(str, enum.Enum):
    """Author of a message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class MessageStatus(str, enum.Enum):
    """
    How an assistant message came to be stored.

    COMPLETED: Stream finished normally
    CANCELLED: Client cancelled mid-stream; text is the partial answer
    INTERRUPTED: Provider failed mid-stream; text is the partial answer
    """

    COMPLETED = "completed"
    CANCELLED = "cancelled"
    INTERRUPTED = "interrupted"


class MessageModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Message ORM model.

    Attributes:
        thread_id: Parent thread
        role: MessageRole
        content: {"text"} for user turns; {"text", "citations", "metadata"} for assistant turns
        token_count: Estimated tokens of content["text"]
        status: MessageStatus
    """

    __tablename__ = "messages"

    thread_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("threads.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[MessageRole] = mapped_column(Enum(MessageRole, native_enum=False), nullable=False)
    content: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    token_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[MessageStatus] = mapped_column(
        Enum(MessageStatus, native_enum=False),
        nullable=False,
        default=MessageStatus.COMPLETED,
    )

    @property
    def text(self) -> str:
        """Plain text of the message body."""
        return (self.content or {}).get("text", "")
