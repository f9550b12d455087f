"""
Sentence-based text chunking.

Splits plain note text into overlapping passages bounded by an approximate
token count. Tokens are estimated as ceil(chars / 4); stored token counts and
the context budget rely on the same estimate.

Dependencies: re, math (stdlib)
System role: First stage of note ingestion
"""

import math
import re

_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")
_MIN_CHUNK_CHARS = 10

# One overlap sentence per this many overlap tokens
_TOKENS_PER_OVERLAP_SENTENCE = 50


def estimate_tokens(text: str) -> int:
    """Approximate token count: one token per four characters, rounded up."""
    return math.ceil(len(text) / 4)


def split_into_sentences(text: str) -> list[str]:
    """Split on runs of terminal punctuation, dropping blank fragments."""
    return [s.strip() for s in _SENTENCE_BOUNDARY.split(text) if s.strip()]


class TextChunker:
    """Greedy sentence packer with sentence-level overlap."""

    def __init__(self, max_tokens: int = 400, overlap_tokens: int = 50) -> None:
        """
        Initialize chunker.

        Args:
            max_tokens: Token ceiling a chunk may reach before it is closed
            overlap_tokens: Overlap hint; ceil(overlap_tokens / 50) trailing
                sentences are carried into the next chunk

        Raises:
            ValueError: When max_tokens is not positive or overlap is negative
        """
        if max_tokens <= 0:
            raise ValueError("max_tokens must be positive")
        if overlap_tokens < 0:
            raise ValueError("overlap_tokens cannot be negative")

        self.max_tokens = max_tokens
        self.overlap_tokens = overlap_tokens
        self._overlap_sentences = math.ceil(overlap_tokens / _TOKENS_PER_OVERLAP_SENTENCE)

    def chunk(self, text: str) -> list[str]:
        """
        Chunk text into overlapping passages.

        A single sentence longer than max_tokens becomes its own oversized
        chunk. Chunks of 10 characters or fewer are discarded.

        Args:
            text: Plain text (markup already stripped)

        Returns:
            list[str]: Chunks in document order; empty for blank input
        """
        chunks: list[str] = []
        current: list[str] = []
        current_tokens = 0

        for sentence in split_into_sentences(text):
            sentence_tokens = estimate_tokens(sentence)

            if current and current_tokens + sentence_tokens > self.max_tokens:
                chunks.append(self._join(current))
                current = current[-self._overlap_sentences:] if self._overlap_sentences else []
                current_tokens = sum(estimate_tokens(s) for s in current)

            current.append(sentence)
            current_tokens += sentence_tokens

        if current:
            chunks.append(self._join(current))

        return [c for c in chunks if len(c.strip()) > _MIN_CHUNK_CHARS]

    @staticmethod
    def _join(sentences: list[str]) -> str:
        return ". ".join(sentences) + "."
