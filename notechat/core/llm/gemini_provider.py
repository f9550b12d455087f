"""
Google Generative AI completion provider.

Dependencies: langchain_google_genai
System role: Production completion backend
"""

import logging
from collections.abc import AsyncIterator

from langchain_core.messages import BaseMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from notechat.core.exceptions import CompletionError
from notechat.core.llm.base import CompletionProvider

logger = logging.getLogger(__name__)


def chunk_text(content) -> str:
    """Normalize message-chunk content (str or list of parts) to plain text."""
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content) if content else ""


class GeminiCompletionProvider(CompletionProvider):
    """Streams answers from a Gemini chat model."""

    def __init__(
        self,
        model: str = "gemini-2.0-flash",
        temperature: float = 0.2,
        max_output_tokens: int = 1024,
        api_key: str | None = None,
    ) -> None:
        kwargs = {"google_api_key": api_key} if api_key else {}
        self._model_id = model
        self._model = ChatGoogleGenerativeAI(
            model=model,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            **kwargs,
        )

    @property
    def model_id(self) -> str:
        return self._model_id

    async def astream(self, messages: list[BaseMessage]) -> AsyncIterator[str]:
        try:
            async for chunk in self._model.astream(messages):
                text = chunk_text(chunk.content)
                if text:
                    yield text
        except Exception as e:
            logger.error(f"{__name__}:astream - stream FAILED - {type(e).__name__}: {e}")
            raise CompletionError(f"Completion stream failed: {e}", provider=self._model_id) from e
