"""
Completion providers.
"""

from notechat.core.llm.base import CompletionProvider
from notechat.core.llm.factory import create_completion_provider
from notechat.core.llm.mock_provider import MockCompletionProvider

__all__ = ["CompletionProvider", "MockCompletionProvider", "create_completion_provider"]
