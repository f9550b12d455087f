"""Application layer: services and adapters composing core logic with storage."""
