"""Alert engine: detection rules and alert lifecycle.

Each incoming reading first expires alerts older than the retention window,
then runs one rule per AlertCategory. A rule returns at most one new Alert.
Conditions that persist across readings raise a new alert every time; alerts
are never merged or updated in place.
"""

import threading
from collections.abc import Callable
from datetime import datetime, timedelta

from config import Settings, settings as default_settings
from core.efficiency import efficiency
from core.history import HistoricalEfficiencyStore
from logging_config import get_logger
from models.enums import AlertCategory
from models.reading import Alert, Reading, utc_now

logger = get_logger(__name__)

Rule = Callable[[Reading, datetime], Alert | None]


class AlertEngine:
    """Owns the active-alert set and the historical efficiency store.

    Evaluation builds the next alert list privately and swaps it in under a
    lock, so readers never observe a partially evaluated set.

    ``rules`` maps every AlertCategory to the name of the method that checks
    it; reserved categories map to ``check_reserved``.
    """

    rules: dict[AlertCategory, str] = {
        AlertCategory.PANEL_DEGRADATION: "check_panel_degradation",
        AlertCategory.HIGH_TEMPERATURE: "check_high_temperature",
        AlertCategory.LOW_EFFICIENCY: "check_reserved",
        AlertCategory.INVERTER_ISSUE: "check_reserved",
        AlertCategory.BATTERY_DEGRADATION: "check_reserved",
    }

    def __init__(
        self,
        config: Settings | None = None,
        clock: Callable[[], datetime] = utc_now,
        history: HistoricalEfficiencyStore | None = None,
    ) -> None:
        self.config = config or default_settings
        self.clock = clock
        self.history = history if history is not None else HistoricalEfficiencyStore()
        self._alerts: list[Alert] = []
        self._lock = threading.RLock()

        missing = set(AlertCategory) - set(self.rules)
        if missing:
            raise ValueError(f"No rule registered for: {sorted(c.value for c in missing)}")
        self._rules: dict[AlertCategory, Rule] = {
            category: getattr(self, name) for category, name in self.rules.items()
        }

    @property
    def retention(self) -> timedelta:
        return timedelta(days=self.config.alert_retention_days)

    def active_alerts(self) -> tuple[Alert, ...]:
        """Currently active alerts in insertion order."""
        with self._lock:
            return tuple(self._alerts)

    def evaluate(self, reading: Reading) -> list[Alert]:
        """Run the expiry pass and every detection rule for one reading.

        Args:
            reading: The newly ingested reading

        Returns:
            Alerts raised by this evaluation, in rule order
        """
        with self._lock:
            now = self.clock()
            cutoff = now - self.retention
            kept = [alert for alert in self._alerts if alert.created_at >= cutoff]
            expired = len(self._alerts) - len(kept)
            if expired:
                logger.info("alerts.expired", count=expired, cutoff=cutoff.isoformat())

            raised = []
            for category in AlertCategory:
                alert = self._rules[category](reading, now)
                if alert is not None:
                    raised.append(alert)
                    logger.info(
                        "alerts.raised",
                        category=alert.category.value,
                        severity=round(alert.severity, 4),
                        reading_timestamp=reading.timestamp.isoformat(),
                    )

            self._alerts = kept + raised
            return raised

    def check_panel_degradation(self, reading: Reading, now: datetime) -> Alert | None:
        """Compare current efficiency with the trailing window average.

        Always records the current efficiency; only compares once enough
        history exists.
        """
        cfg = self.config
        current = efficiency(reading.irradiance, reading.power_produced, cfg.nameplate_watts)
        self.history.record(reading.timestamp, current)

        if len(self.history) < cfg.degradation_min_history:
            return None

        stats = self.history.windowed_average(
            reading.timestamp, timedelta(days=cfg.degradation_window_days)
        )
        # A zero average leaves the ratio undefined
        if stats.count == 0 or not stats.average:
            return None

        degradation = 1.0 - (current / stats.average)
        if degradation <= cfg.degradation_threshold:
            return None

        return Alert(
            category=AlertCategory.PANEL_DEGRADATION,
            message=f"Panel degradation detected: {int(degradation * 100)}% performance loss",
            severity=degradation / cfg.degradation_threshold,
            created_at=now,
        )

    def check_high_temperature(self, reading: Reading, now: datetime) -> Alert | None:
        """Flag panel temperatures above the alert threshold."""
        cfg = self.config
        if reading.temperature <= cfg.temperature_alert_threshold:
            return None

        severity = (reading.temperature - cfg.temperature_alert_threshold) / cfg.temperature_severity_span
        return Alert(
            category=AlertCategory.HIGH_TEMPERATURE,
            message=f"High panel temperature: {int(reading.temperature)}°C",
            severity=min(severity, 1.0),
            created_at=now,
        )

    def check_reserved(self, reading: Reading, now: datetime) -> Alert | None:
        """Categories without trigger logic never fire."""
        return None
