"""
Retrieval domain models.

Dependencies: pydantic
System role: Hybrid search and context assembly data structures
"""

import uuid
from enum import Enum

from pydantic import BaseModel, Field

from notechat.models.citation import Citation


class PassageSource(str, Enum):
    """Which retrieval signal produced the score of a passage."""

    DENSE = "dense"
    SPARSE = "sparse"
    FUSED = "fused"


class RetrievedPassage(BaseModel):
    """
    A chunk returned by retrieval.

    Attributes:
        score: Cosine similarity (dense), lexical rank (sparse), or RRF score (fused)
    """

    chunk_id: uuid.UUID
    note_id: uuid.UUID
    text: str
    chunk_index: int
    score: float
    source: PassageSource
    note_title: str | None = None


class AssembledContext(BaseModel):
    """Context handed to prompt composition."""

    passages: list[RetrievedPassage] = Field(default_factory=list)
    summary: str = "No relevant context found."
    citations: list[Citation] = Field(default_factory=list)
    total_tokens: int = 0

    @classmethod
    def empty(cls) -> "AssembledContext":
        return cls()
