"""
Storage Adapter

Typed read/write on top of a raw key-value store.

DESIGN DECISION: read() never raises. If a value is absent, the backend
cannot be read, or the stored JSON does not match the expected schema,
the caller-supplied default is returned and the stored value is left
untouched. Corrupted data is equivalent to "no data yet" at this layer;
it is logged, not surfaced.

write() serializes the whole value and overwrites the key. There are
no partial updates.
"""

from typing import TypeVar

import structlog
from pydantic import TypeAdapter, ValidationError

from finance_tracker.services.storage.interface import (
    KeyValueStoreInterface,
    StorageError,
)


T = TypeVar("T")


class StorageAdapter:
    """JSON (de)serialization with fallback-on-failure semantics."""

    def __init__(self, store: KeyValueStoreInterface):
        self._store = store
        self._logger = structlog.get_logger(__name__)

    @property
    def store(self) -> KeyValueStoreInterface:
        return self._store

    def read(self, key: str, schema: TypeAdapter[T], default: T) -> T:
        """
        Read and validate the value stored under a key.

        Args:
            key: Storage key
            schema: TypeAdapter describing the expected shape
            default: Returned when the value is absent or unreadable

        Returns:
            The parsed value, or `default`
        """
        try:
            raw = self._store.get(key)
        except StorageError as e:
            self._logger.warning("storage_read_failed", key=key, error=str(e))
            return default

        if raw is None:
            return default

        try:
            return schema.validate_json(raw)
        except ValidationError as e:
            # Covers both malformed JSON and JSON of the wrong shape
            self._logger.warning(
                "storage_value_unreadable",
                key=key,
                error_count=e.error_count(),
                first_error=e.errors()[0]["msg"] if e.errors() else None,
            )
            return default

    def write(self, key: str, value: T, schema: TypeAdapter[T]) -> None:
        """
        Serialize a value and overwrite the key.

        Raises:
            StorageError: If the backend cannot be written
        """
        payload = schema.dump_json(value, by_alias=True).decode("utf-8")
        self._store.set(key, payload)

    def remove(self, key: str) -> None:
        """Delete a key. No-op if absent."""
        self._store.remove(key)
