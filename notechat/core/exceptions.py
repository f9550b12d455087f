"""
Exception hierarchy for the notes assistant.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class NoteChatError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InputError(NoteChatError):
    """Raised when a user request is rejected before any side effect."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize input error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ThreadNotFoundError(InputError):
    """Raised when a thread does not exist for the requesting owner."""

    def __init__(self, thread_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["thread_id"] = thread_id
        super().__init__(f"Thread not found: {thread_id}", field="thread_id", details=details)


class ProviderError(NoteChatError):
    """Base exception for embedding and completion backend failures."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Error message
            provider: Model identifier of the failing backend
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        super().__init__(message, details)


class EmbeddingError(ProviderError):
    """Raised when embedding generation fails or returns malformed vectors."""

    pass


class CompletionError(ProviderError):
    """Raised when the completion stream fails."""

    pass


class StorageError(NoteChatError):
    """Raised when a persistence operation fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize storage error.

        Args:
            message: Error message
            operation: Operation that failed (replace_chunks, persist_turn, ...)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class NoteNotFoundError(NoteChatError):
    """Raised when a note cannot be found for its owner."""

    def __init__(self, note_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["note_id"] = note_id
        super().__init__(f"Note not found: {note_id}", details)
