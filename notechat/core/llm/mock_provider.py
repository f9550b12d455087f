"""
Mock completion provider.

Echoes the last user message word by word. Used for offline development
and end-to-end tests of the streaming path.

Dependencies: langchain_core.messages
System role: Offline/test completion backend
"""

import asyncio
from collections.abc import AsyncIterator

from langchain_core.messages import BaseMessage, HumanMessage

from notechat.core.llm.base import CompletionProvider

MOCK_CHAT_MODEL = "mock-chat-model"


class MockCompletionProvider(CompletionProvider):
    """Streams "Mock response to: <question>" one word at a time."""

    def __init__(self, token_delay: float = 0.0) -> None:
        self.token_delay = token_delay

    @property
    def model_id(self) -> str:
        return MOCK_CHAT_MODEL

    async def astream(self, messages: list[BaseMessage]) -> AsyncIterator[str]:
        question = next(
            (m.content for m in reversed(messages) if isinstance(m, HumanMessage)),
            "",
        )
        words = f"Mock response to: {question}".split()
        for i, word in enumerate(words):
            if self.token_delay:
                await asyncio.sleep(self.token_delay)
            yield word if i == len(words) - 1 else word + " "
