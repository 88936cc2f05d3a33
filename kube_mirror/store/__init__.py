"""
The store module mirrors cluster resources into an external document store.

- Each resource type is written to its own collection, named from its kind,
  group and version.
- Each object is a single document identified by the object uid.
- Writes are applied in the order they are invoked and failures are logged
  rather than raised to the caller.

The abstract Store interface is implemented by the MongoDB primary store and by
the fallback stores used when MongoDB is not configured.
"""

from .store import Store
from .mongo import MongoStore
from .in_memory import InMemoryStore
from .noop import NoopStore
from .fallback import FallbackType, resolve_fallback
from .factory import open_store

__all__ = [
    "Store",
    "MongoStore",
    "InMemoryStore",
    "NoopStore",
    "FallbackType",
    "resolve_fallback",
    "open_store",
]
