"""Service-wide monitor session.

The tools share one SolarMonitor per process. It is built lazily from
settings; tests install a fresh one with ``set_monitor``.
"""

from config import settings
from core import InMemoryReadingStore, SolarMonitor
from database import SqlReadingStore
from logging_config import get_logger

logger = get_logger(__name__)

_monitor: SolarMonitor | None = None


def build_monitor() -> SolarMonitor:
    """Create a monitor with the storage backend selected in settings."""
    if settings.storage_backend == "memory":
        storage = InMemoryReadingStore()
    elif settings.storage_backend == "sql":
        storage = SqlReadingStore()
        storage.init_schema()
    else:
        raise ValueError(f"Unknown storage backend: {settings.storage_backend}")

    logger.info("session.monitor.created", storage_backend=settings.storage_backend)
    return SolarMonitor(storage=storage)


def get_monitor() -> SolarMonitor:
    """Return the process-wide monitor, creating it on first use."""
    global _monitor

    if _monitor is None:
        _monitor = build_monitor()
    return _monitor


def set_monitor(monitor: SolarMonitor | None) -> None:
    """Replace the process-wide monitor (None resets to lazy creation)."""
    global _monitor
    _monitor = monitor
