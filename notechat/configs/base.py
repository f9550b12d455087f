"""
Shared environment loading for settings classes.

Each concern reads its own prefixed variables (POSTGRES_, LLM_, INDEXING_,
RETRIEVAL_, CHAT_) from the process environment or a local .env file.
Unprefixed variables belong to the top-level Settings.

Dependencies: pydantic_settings
System role: Environment source for all configuration classes
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


def env_config(prefix: str = "") -> SettingsConfigDict:
    """
    Build the pydantic-settings config for one concern.

    Args:
        prefix: Environment variable prefix, e.g. "POSTGRES_"

    Returns:
        SettingsConfigDict: Case-insensitive .env-backed config ignoring unknown keys
    """
    return SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix=prefix,
        case_sensitive=False,
        extra="ignore",
    )


class EnvSettings(BaseSettings):
    """Settings class reading unprefixed environment variables."""

    model_config = env_config()
