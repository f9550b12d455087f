"""Core domain logic: indexing, embeddings, retrieval, and conversation orchestration."""
