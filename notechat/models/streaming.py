"""
Streaming event schemas for WebSocket chat.

Defines event types and payloads for real-time chat streaming.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class StreamEventType(str, Enum):
    """Server-to-client event types for streaming chat."""

    CONNECTED = "connected"
    TOKEN = "token"
    COMPLETE = "complete"
    ERROR = "error"
    PONG = "pong"


class ClientEventType(str, Enum):
    """Client-to-server event types."""

    CHAT = "chat"
    CANCEL = "cancel"
    PING = "ping"


class ErrorCode(str, Enum):
    """Codes carried by ERROR events."""

    INVALID_JSON = "INVALID_JSON"
    INVALID_INPUT = "INVALID_INPUT"
    THREAD_NOT_FOUND = "THREAD_NOT_FOUND"
    UNKNOWN_EVENT = "UNKNOWN_EVENT"
    DUPLICATE_REQUEST = "DUPLICATE_REQUEST"
    GENERATION_FAILED = "GENERATION_FAILED"
    STORAGE_FAILED = "STORAGE_FAILED"
    PROCESSING_ERROR = "PROCESSING_ERROR"


class StreamEvent(BaseModel):
    """
    Base streaming event model.

    Attributes:
        event: Event type identifier
        data: Event-specific payload
    """

    event: StreamEventType
    data: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"event": self.event.value, "data": self.data}

    @property
    def is_terminal(self) -> bool:
        """COMPLETE and ERROR end a turn."""
        return self.event in (StreamEventType.COMPLETE, StreamEventType.ERROR)

    @classmethod
    def error(cls, code: ErrorCode, message: str, **extra: Any) -> "StreamEvent":
        return cls(
            event=StreamEventType.ERROR,
            data={"code": code.value, "message": message, **extra},
        )


class ClientChatEvent(BaseModel):
    """
    Client chat message event payload.

    Attributes:
        message: User's chat message
        request_id: Client-chosen ID used to cancel this turn; generated when absent
    """

    message: str
    request_id: str | None = None


class ClientCancelEvent(BaseModel):
    """Client cancel event payload."""

    request_id: str
