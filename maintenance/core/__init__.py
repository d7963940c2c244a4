"""Trend detection, alerting and energy ledger core."""

from .alerts import AlertEngine
from .efficiency import efficiency
from .errors import MonitorError, PersistenceFailure
from .history import HistoricalEfficiencyStore, WindowStats
from .ledger import EnvironmentalLedger, LedgerReport
from .monitor import IngestOutcome, SolarMonitor
from .storage import InMemoryReadingStore, ReadingStore

__all__ = [
    "AlertEngine",
    "efficiency",
    "MonitorError",
    "PersistenceFailure",
    "HistoricalEfficiencyStore",
    "WindowStats",
    "EnvironmentalLedger",
    "LedgerReport",
    "IngestOutcome",
    "SolarMonitor",
    "InMemoryReadingStore",
    "ReadingStore",
]
