"""Historical efficiency store.

Keeps one efficiency ratio per reading timestamp for the life of the process
and answers trailing-window averages for the degradation rule.
"""

import threading
from bisect import bisect_left, bisect_right, insort
from datetime import datetime, timedelta
from typing import NamedTuple

import pandas as pd

from models.reading import EfficiencyPoint, as_utc


class WindowStats(NamedTuple):
    """Result of a windowed average query.

    ``average`` is None when no points fall inside the window.
    """

    average: float | None
    count: int


class HistoricalEfficiencyStore:
    """Time-indexed efficiency record with inclusive window queries.

    Points are keyed by timestamp (last write wins) and kept in a sorted key
    list, so window bounds are found by bisection. Retention is unbounded.
    Every access holds the store lock, so readers in other threads never see
    a half-recorded point; use ``snapshot()`` for several reads that must
    agree with each other.
    """

    def __init__(self) -> None:
        self._ratios: dict[datetime, float] = {}
        self._timestamps: list[datetime] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._timestamps)

    def record(self, timestamp: datetime, ratio: float) -> None:
        """Insert a point, replacing any existing point at the same timestamp."""
        timestamp = as_utc(timestamp)
        with self._lock:
            is_new = timestamp not in self._ratios
            self._ratios[timestamp] = ratio
            if is_new:
                insort(self._timestamps, timestamp)

    def snapshot(self) -> "HistoricalEfficiencyStore":
        """Independent copy of the store taken under the lock."""
        copy = HistoricalEfficiencyStore()
        with self._lock:
            copy._ratios = dict(self._ratios)
            copy._timestamps = list(self._timestamps)
        return copy

    def windowed_average(self, end: datetime, window: timedelta) -> WindowStats:
        """Mean ratio over ``[end - window, end]``, both bounds inclusive.

        Args:
            end: Window end (usually the current reading's timestamp)
            window: Window length

        Returns:
            WindowStats with the mean (None when empty) and the point count
        """
        end = as_utc(end)
        with self._lock:
            lo = bisect_left(self._timestamps, end - window)
            hi = bisect_right(self._timestamps, end)
            in_window = self._timestamps[lo:hi]
            if not in_window:
                return WindowStats(average=None, count=0)
            total = sum(self._ratios[ts] for ts in in_window)

        return WindowStats(average=total / len(in_window), count=len(in_window))

    def latest(self) -> EfficiencyPoint | None:
        """Most recent point, or None when the store is empty."""
        with self._lock:
            if not self._timestamps:
                return None
            ts = self._timestamps[-1]
            return EfficiencyPoint(timestamp=ts, ratio=self._ratios[ts])

    def points(self) -> list[EfficiencyPoint]:
        """All points in timestamp order."""
        with self._lock:
            return [
                EfficiencyPoint(timestamp=ts, ratio=self._ratios[ts]) for ts in self._timestamps
            ]

    def to_frame(self) -> pd.DataFrame:
        """Points as a DataFrame with a UTC DatetimeIndex and a ``ratio`` column."""
        with self._lock:
            timestamps = list(self._timestamps)
            ratios = [self._ratios[ts] for ts in timestamps]
        return pd.DataFrame(
            {"ratio": ratios},
            index=pd.DatetimeIndex(timestamps, name="timestamp"),
            dtype=float,
        )
