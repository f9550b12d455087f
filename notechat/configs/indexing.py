"""
Indexing configuration.

Chunk sizing and ingestion batch pacing.

Dependencies: pydantic, pydantic_settings
System role: Note ingestion configuration
"""

from pydantic import Field

from notechat.configs.base import EnvSettings, env_config


class IndexingSettings(EnvSettings):
    """Chunker and ingestion worker configuration."""

    model_config = env_config("INDEXING_")

    max_tokens: int = Field(default=400, description="Approximate tokens per chunk")
    overlap_tokens: int = Field(default=50, description="Approximate overlap between chunks")
    batch_size: int = Field(default=5, description="Notes processed concurrently per batch")
    batch_delay_seconds: float = Field(default=1.0, description="Pause between batches")
    backfill_limit: int = Field(default=100, description="Max chunks embedded per backfill run")
