"""Storage collaborator interface for raw readings.

The core only needs ``store`` and ``query``; durability and format belong to
the implementation. ``database.SqlReadingStore`` is the SQL-backed one.
"""

import threading
from bisect import insort
from datetime import datetime
from typing import Protocol, runtime_checkable

from models.reading import Reading, as_utc


@runtime_checkable
class ReadingStore(Protocol):
    """Persists readings and returns them by time range."""

    def store(self, reading: Reading) -> None:
        """Persist one reading. Raises PersistenceFailure on I/O errors."""
        ...

    def query(self, start: datetime, end: datetime) -> list[Reading]:
        """Readings with ``start <= timestamp <= end``, oldest first."""
        ...


class InMemoryReadingStore:
    """Process-local reading store, ordered by timestamp."""

    def __init__(self) -> None:
        self._readings: list[Reading] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._readings)

    def store(self, reading: Reading) -> None:
        with self._lock:
            insort(self._readings, reading, key=lambda r: r.timestamp)

    def query(self, start: datetime, end: datetime) -> list[Reading]:
        start, end = as_utc(start), as_utc(end)
        with self._lock:
            return [r for r in self._readings if start <= r.timestamp <= end]
