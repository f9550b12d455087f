"""
Note indexing: sentence chunking, change detection, and chunk/vector persistence.
"""

from notechat.core.indexing.chunker import TextChunker, estimate_tokens
from notechat.core.indexing.fingerprint import content_fingerprint, html_to_text
from notechat.core.indexing.index_writer import IndexWriter

__all__ = [
    "TextChunker",
    "estimate_tokens",
    "content_fingerprint",
    "html_to_text",
    "IndexWriter",
]
