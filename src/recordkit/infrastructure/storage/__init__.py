"""Reference implementations of the RecordStorage protocol."""

from recordkit.infrastructure.storage.memory import InMemoryStorage
from recordkit.infrastructure.storage.sql import SqlStorage, create_db_engine

__all__ = [
    "InMemoryStorage",
    "SqlStorage",
    "create_db_engine",
]
