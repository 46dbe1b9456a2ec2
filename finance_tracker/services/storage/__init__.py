"""
Storage Services Package

Provides the abstract key-value interface, local implementations,
and the typed adapter the stores are built on.
"""

from finance_tracker.services.storage.interface import (
    DuplicateError,
    KeyValueStoreInterface,
    NotFoundError,
    StorageError,
)
from finance_tracker.services.storage.local import (
    InMemoryStore,
    JsonFileStore,
)
from finance_tracker.services.storage.adapter import StorageAdapter

__all__ = [
    # Interfaces
    "KeyValueStoreInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # Local implementations
    "InMemoryStore",
    "JsonFileStore",
    # Typed access
    "StorageAdapter",
]
