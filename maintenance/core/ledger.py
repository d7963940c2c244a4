"""Environmental impact ledger.

Accumulates energy produced and derives avoided CO2 and tree equivalents.
"""

import threading
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from config import Settings, settings as default_settings
from logging_config import get_logger
from models.reading import utc_now

logger = get_logger(__name__)


class LedgerReport(BaseModel):
    """Point-in-time snapshot of the ledger totals."""

    model_config = ConfigDict(frozen=True)

    started_at: datetime
    total_kwh: float
    co2_savings_kg: float
    tree_equivalents: float


class EnvironmentalLedger:
    """Running total of energy produced (kWh) since ``started_at``.

    The total never decreases: non-positive contributions are ignored.
    """

    def __init__(self, config: Settings | None = None, started_at: datetime | None = None) -> None:
        self.config = config or default_settings
        self.started_at = started_at or utc_now()
        self._total_kwh = 0.0
        self._lock = threading.Lock()

    @property
    def total_kwh(self) -> float:
        with self._lock:
            return self._total_kwh

    def add_energy(self, power_watts: float, duration_hours: float) -> float:
        """Add ``power_watts`` sustained for ``duration_hours`` to the total.

        Args:
            power_watts: Average power over the interval in W
            duration_hours: Interval length in hours

        Returns:
            kWh added to the ledger (0.0 when the contribution was ignored)
        """
        energy_kwh = power_watts * duration_hours / 1000.0
        if energy_kwh <= 0:
            if energy_kwh < 0:
                logger.warning(
                    "ledger.negative_energy_ignored",
                    power_watts=power_watts,
                    duration_hours=duration_hours,
                )
            return 0.0

        with self._lock:
            self._total_kwh += energy_kwh
        return energy_kwh

    def co2_savings(self) -> float:
        """Avoided emissions in kg CO2."""
        return self.total_kwh * self.config.co2_per_kwh

    def tree_equivalents(self) -> float:
        """Equivalent number of trees planted."""
        return self.total_kwh * self.config.trees_per_kwh

    def report(self) -> LedgerReport:
        """Consistent snapshot of all ledger figures."""
        total = self.total_kwh
        return LedgerReport(
            started_at=self.started_at,
            total_kwh=total,
            co2_savings_kg=total * self.config.co2_per_kwh,
            tree_equivalents=total * self.config.trees_per_kwh,
        )
