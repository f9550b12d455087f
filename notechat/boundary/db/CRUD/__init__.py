"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from notechat.boundary.db.CRUD import thread_crud, message_crud

    thread = await thread_crud.get_for_owner(db, thread_id, owner_id)
"""

from notechat.boundary.db.CRUD.base_crud import BaseCRUD
from notechat.boundary.db.CRUD.message_crud import MessageCRUD, message_crud
from notechat.boundary.db.CRUD.note_chunk_crud import NoteChunkCRUD, note_chunk_crud
from notechat.boundary.db.CRUD.note_crud import NoteCRUD, note_crud
from notechat.boundary.db.CRUD.note_embedding_crud import NoteEmbeddingCRUD, note_embedding_crud
from notechat.boundary.db.CRUD.thread_crud import ThreadCRUD, thread_crud

__all__ = [
    "BaseCRUD",
    "MessageCRUD",
    "NoteChunkCRUD",
    "NoteCRUD",
    "NoteEmbeddingCRUD",
    "ThreadCRUD",
    "message_crud",
    "note_chunk_crud",
    "note_crud",
    "note_embedding_crud",
    "thread_crud",
]
