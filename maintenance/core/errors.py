"""Exceptions raised by the maintenance core."""


class MonitorError(Exception):
    """Base class for errors surfaced by the maintenance core."""


class PersistenceFailure(MonitorError):
    """The storage collaborator could not persist or query readings.

    When raised from ``SolarMonitor.ingest`` the ledger and alert state have
    already been updated; ``outcome`` holds the result of that ingestion.
    """

    def __init__(self, message: str, reading=None, outcome=None):
        super().__init__(message)
        self.reading = reading
        self.outcome = outcome
