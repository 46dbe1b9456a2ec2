"""
Local Key-Value Storage Implementations

DESIGN DECISION: A single JSON file is used as the local backend because:
1. It behaves like browser localStorage (one document of string values)
2. No database setup required
3. Users can inspect or back up their data with any text editor

TRADEOFFS:
- Every write rewrites the whole file (fine for personal data volumes)
- No cross-process locking (two processes writing the same file can
  lose updates; only one process is expected to use a data file)
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from finance_tracker.services.storage.interface import (
    KeyValueStoreInterface,
    StorageError,
)


class InMemoryStore(KeyValueStoreInterface):
    """Process-local store. Used in tests and for throwaway sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileStore(KeyValueStoreInterface):
    """
    Key-value store persisted as one JSON object on disk.

    The file maps each key to its serialized string value, e.g.
    {"finance-transactions": "[{...}, ...]"}.

    Writes go to a temporary file in the same directory which then
    replaces the data file, so a crash mid-write leaves the previous
    version intact.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        """Read the whole document. A missing file is an empty store."""
        if not self._path.exists():
            return {}

        try:
            with self._path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            raise StorageError(f"Failed to read {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(
                f"Failed to read {self._path}: expected a JSON object, "
                f"got {type(data).__name__}"
            )

        # Values are strings in localStorage; anything else is stored as its JSON text
        return {
            str(k): v if isinstance(v, str) else json.dumps(v)
            for k, v in data.items()
        }

    def _save(self, data: dict[str, str]) -> None:
        """Atomically replace the data file."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2)
                os.replace(tmp_path, self._path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key not in data:
            return
        del data[key]
        self._save(data)

    def keys(self) -> list[str]:
        return list(self._load())
