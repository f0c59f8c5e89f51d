"""In-memory persistence implementations."""

from infrastructure.persistence.in_memory.store import InMemoryStore

__all__ = ["InMemoryStore"]
