"""
Completion provider factory.

Dependencies: notechat.configs
System role: Startup-time provider selection
"""

from notechat.configs.providers import ProviderSettings
from notechat.core.llm.base import CompletionProvider
from notechat.core.llm.mock_provider import MockCompletionProvider


def create_completion_provider(settings: ProviderSettings) -> CompletionProvider:
    """
    Build the completion provider named by settings.provider.

    Raises:
        ValueError: Unknown provider name
    """
    if settings.provider == "mock":
        return MockCompletionProvider(token_delay=settings.mock_token_delay)
    if settings.provider == "gemini":
        from notechat.core.llm.gemini_provider import GeminiCompletionProvider

        return GeminiCompletionProvider(
            model=settings.chat_model,
            temperature=settings.temperature,
            max_output_tokens=settings.max_output_tokens,
            api_key=settings.google_api_key,
        )
    raise ValueError(f"Unknown completion provider: {settings.provider}")
