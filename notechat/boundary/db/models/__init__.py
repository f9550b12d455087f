"""
ORM models.

Importing this package registers every table on Base.metadata.
"""

from notechat.boundary.db.models.message_model import MessageModel, MessageRole, MessageStatus
from notechat.boundary.db.models.note_chunk_model import NoteChunkModel
from notechat.boundary.db.models.note_embedding_model import NoteEmbeddingModel
from notechat.boundary.db.models.note_model import NoteModel
from notechat.boundary.db.models.thread_model import ThreadModel

__all__ = [
    "MessageModel",
    "MessageRole",
    "MessageStatus",
    "NoteChunkModel",
    "NoteEmbeddingModel",
    "NoteModel",
    "ThreadModel",
]
