"""
Chat turn configuration.

Dependencies: pydantic, pydantic_settings
System role: Conversation orchestration configuration
"""

from pydantic import Field

from notechat.configs.base import EnvSettings, env_config


class ChatSettings(EnvSettings):
    """Conversation turn limits."""

    model_config = env_config("CHAT_")

    max_message_chars: int = Field(default=4000, description="Maximum user message length")
    history_limit: int = Field(default=10, description="Prior messages loaded per turn")
