"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from notechat.configs.chat import ChatSettings
from notechat.configs.database import DatabaseSettings
from notechat.configs.indexing import IndexingSettings
from notechat.configs.providers import ProviderSettings
from notechat.configs.retrieval import RetrievalSettings
from notechat.configs.settings import Settings, get_settings

__all__ = [
    "ChatSettings",
    "DatabaseSettings",
    "IndexingSettings",
    "ProviderSettings",
    "RetrievalSettings",
    "Settings",
    "get_settings",
]
