"""MongoDB persistence implementations."""

from .store import MongoStore

__all__ = ["MongoStore"]
