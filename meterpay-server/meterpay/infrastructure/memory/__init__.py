"""In-memory storage backend for demos and tests."""

from .store import MemoryStore

__all__ = ["MemoryStore"]
