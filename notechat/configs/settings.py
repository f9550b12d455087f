"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from notechat.configs.base import EnvSettings
from notechat.configs.chat import ChatSettings
from notechat.configs.database import DatabaseSettings
from notechat.configs.indexing import IndexingSettings
from notechat.configs.providers import ProviderSettings
from notechat.configs.retrieval import RetrievalSettings


class Settings(EnvSettings):
    """Unified application settings aggregating all config modules."""

    debug: bool = Field(default=False, description="Enable auto-reload when run as a script")
    log_level: str = Field(default="INFO", description="Root logging level (DEBUG, INFO, WARNING, ERROR)")

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    providers: ProviderSettings = Field(default_factory=ProviderSettings)
    indexing: IndexingSettings = Field(default_factory=IndexingSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    chat: ChatSettings = Field(default_factory=ChatSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from notechat.configs import get_settings
        settings = get_settings()
    """
    return Settings()
