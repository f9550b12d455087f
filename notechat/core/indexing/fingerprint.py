"""
Note change detection.

Normalizes rich note content to plain text and fingerprints it, so
re-indexing can be skipped when a note's text has not changed.

Dependencies: bs4, hashlib
System role: Ingestion short-circuit for unchanged notes
"""

import hashlib
import re

from bs4 import BeautifulSoup

_WHITESPACE = re.compile(r"\s+")


def html_to_text(html: str | None) -> str:
    """
    Strip markup from note content and collapse whitespace.

    Tags are replaced by a single space so adjacent block elements do not
    fuse their words.

    Args:
        html: Rich note body (HTML or plain text)

    Returns:
        str: Whitespace-normalized plain text
    """
    if not html:
        return ""
    text = BeautifulSoup(html, "html.parser").get_text(" ")
    return _WHITESPACE.sub(" ", text).strip()


def content_fingerprint(text: str) -> str:
    """Return the SHA-256 hex digest of the UTF-8 encoded text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
