"""
Retrieval configuration.

Hybrid search limits, fusion constant, and context assembly thresholds.

Dependencies: pydantic, pydantic_settings
System role: Retrieval and context assembly configuration
"""

from pydantic import Field

from notechat.configs.base import EnvSettings, env_config


class RetrievalSettings(EnvSettings):
    """Hybrid retriever and context assembler configuration."""

    model_config = env_config("RETRIEVAL_")

    similarity_threshold: float = Field(
        default=0.7,
        description="Minimum cosine similarity for dense matches",
    )
    match_count: int = Field(default=24, description="Candidates fetched per signal")
    rrf_k: int = Field(default=60, description="Reciprocal rank fusion constant")
    max_results: int = Field(default=15, description="Fused passages handed to the assembler")

    min_score: float = Field(
        default=0.0,
        description="Minimum fused score a passage needs to enter the context",
    )
    diversity_threshold: float = Field(
        default=0.8,
        description="Jaccard similarity at or above which same-note passages are dropped",
    )
    max_context_tokens: int = Field(default=3000, description="Token budget for context")
    citation_limit: int = Field(default=5, description="Maximum citations per answer")
    citation_chars: int = Field(default=200, description="Citation text truncation length")
