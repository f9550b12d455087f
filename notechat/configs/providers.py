"""
Model provider configuration.

Selects the embedding and completion backends (Gemini or deterministic mock)
and carries their model parameters.

Dependencies: pydantic, pydantic_settings
System role: LLM / embedding provider configuration
"""

from typing import Literal

from pydantic import Field

from notechat.configs.base import EnvSettings, env_config


class ProviderSettings(EnvSettings):
    """Embedding and completion provider configuration."""

    model_config = env_config("LLM_")

    provider: Literal["gemini", "mock"] = Field(
        default="mock",
        description="Backend used for both embeddings and completions",
    )
    google_api_key: str | None = Field(default=None, description="Google Generative AI API key")

    embedding_model: str = Field(
        default="models/text-embedding-004",
        description="Embedding model identifier",
    )
    embedding_dimension: int = Field(default=768, description="Embedding vector dimension")

    chat_model: str = Field(default="gemini-2.0-flash", description="Chat completion model")
    temperature: float = Field(default=0.2, description="Sampling temperature")
    max_output_tokens: int = Field(default=1024, description="Completion token cap")

    mock_token_delay: float = Field(
        default=0.0,
        description="Seconds between tokens emitted by the mock completion provider",
    )
