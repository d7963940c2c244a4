"""Reading ingestion orchestrator.

``SolarMonitor`` is the public entry point of the core: it persists each
reading, feeds the environmental ledger and runs the alert engine.
"""

import threading
from dataclasses import dataclass, field

from config import Settings, settings as default_settings
from core.alerts import AlertEngine
from core.efficiency import efficiency
from core.errors import PersistenceFailure
from core.ledger import EnvironmentalLedger
from core.storage import InMemoryReadingStore, ReadingStore
from logging_config import get_logger
from models.reading import Alert, Reading

logger = get_logger(__name__)


@dataclass(frozen=True)
class IngestOutcome:
    """What one ingestion changed."""

    reading: Reading
    efficiency: float
    energy_kwh: float
    new_alerts: list[Alert] = field(default_factory=list)
    persisted: bool = True


class SolarMonitor:
    """Sequences storage, ledger and alert evaluation for each reading.

    Ingestion is serialized; the monitor owns neither the alert set nor the
    ledger total, it only holds the components.

    Persistence failures do not stop the pipeline: the ledger and alert state
    are updated regardless, then PersistenceFailure is raised to the caller.
    """

    def __init__(
        self,
        storage: ReadingStore | None = None,
        alerts: AlertEngine | None = None,
        ledger: EnvironmentalLedger | None = None,
        config: Settings | None = None,
    ) -> None:
        self.config = config or default_settings
        self.storage = storage if storage is not None else InMemoryReadingStore()
        self.alerts = alerts or AlertEngine(config=self.config)
        self.ledger = ledger or EnvironmentalLedger(config=self.config)
        self._lock = threading.Lock()

    def ingest(self, reading: Reading) -> IngestOutcome:
        """Persist a reading and update ledger and alert state.

        Args:
            reading: Reading to ingest

        Returns:
            IngestOutcome describing the energy added and alerts raised

        Raises:
            PersistenceFailure: The storage collaborator failed; in-memory
                state was still updated and is attached as ``outcome``
        """
        with self._lock:
            failure: PersistenceFailure | None = None
            try:
                self.storage.store(reading)
            except PersistenceFailure as e:
                logger.error(
                    "ingest.persistence_failed",
                    reading_timestamp=reading.timestamp.isoformat(),
                    error=str(e),
                )
                failure = e

            energy_kwh = self.ledger.add_energy(
                reading.power_produced, self.config.reading_interval_hours
            )
            new_alerts = self.alerts.evaluate(reading)

            outcome = IngestOutcome(
                reading=reading,
                efficiency=efficiency(
                    reading.irradiance, reading.power_produced, self.config.nameplate_watts
                ),
                energy_kwh=energy_kwh,
                new_alerts=new_alerts,
                persisted=failure is None,
            )
            logger.debug(
                "ingest.complete",
                reading_timestamp=reading.timestamp.isoformat(),
                energy_kwh=energy_kwh,
                new_alerts=len(new_alerts),
            )

        if failure is not None:
            raise PersistenceFailure(str(failure), reading=reading, outcome=outcome) from failure
        return outcome
