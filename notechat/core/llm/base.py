"""
Completion provider interface.

Dependencies: langchain_core.messages
System role: Capability contract for streamed answer generation
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from langchain_core.messages import BaseMessage


class CompletionProvider(ABC):
    """
    Streams answer text for a list of chat messages.

    astream yields text increments and ends normally when the answer is
    complete. Failures raise CompletionError, never a silent end of stream.
    """

    @property
    @abstractmethod
    def model_id(self) -> str:
        """Model identifier for logging."""

    @abstractmethod
    def astream(self, messages: list[BaseMessage]) -> AsyncIterator[str]:
        """Yield answer increments."""

    async def agenerate(self, messages: list[BaseMessage]) -> str:
        """Collect the full answer."""
        parts = [part async for part in self.astream(messages)]
        return "".join(parts)
