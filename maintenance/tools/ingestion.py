"""Reading ingestion tool.

Front door for sensor feeds: builds a Reading and hands it to the monitor.
"""

from typing import Annotated

from pydantic import Field

from core import PersistenceFailure
from logging_config import get_logger
from models.reading import Reading
from models.requests import parse_timestamp
from models.responses import IngestResponse
from session import get_monitor
from tools.alerts import build_alert_entry

logger = get_logger(__name__)


def ingest_reading(
    power_produced: Annotated[float, Field(description="Power produced in W")],
    power_consumed: Annotated[float, Field(description="Power consumed in W")],
    battery_soc: Annotated[float, Field(description="Battery state of charge in %")],
    irradiance: Annotated[float, Field(description="Irradiance in W/m2")],
    temperature: Annotated[float, Field(description="Panel temperature in degC")],
    panel_voltage: Annotated[float, Field(description="Panel voltage in V")],
    panel_current: Annotated[float, Field(description="Panel current in A")],
    timestamp: Annotated[
        str | None,
        Field(description="Capture time in ISO-8601 (optional, defaults to now)"),
    ] = None,
) -> dict:
    """Ingest one sensor reading.

    Persists the reading, adds its energy to the environmental ledger and runs
    the maintenance checks. A storage failure is reported with
    persisted=false; ledger and alerts are still updated.

    Returns:
        IngestResponse with efficiency, energy added and any new alerts
    """
    values = dict(
        power_produced=power_produced,
        power_consumed=power_consumed,
        battery_soc=battery_soc,
        irradiance=irradiance,
        temperature=temperature,
        panel_voltage=panel_voltage,
        panel_current=panel_current,
    )
    if timestamp is not None:
        values["timestamp"] = parse_timestamp(timestamp)
    reading = Reading(**values)

    monitor = get_monitor()
    message = None
    try:
        outcome = monitor.ingest(reading)
    except PersistenceFailure as e:
        logger.warning("tools.ingest.not_persisted", error=str(e))
        outcome = e.outcome
        message = f"Reading processed but not stored: {e}"

    return IngestResponse(
        timestamp=reading.timestamp.isoformat(),
        persisted=outcome.persisted,
        efficiency=round(outcome.efficiency, 4),
        energyKwhAdded=round(outcome.energy_kwh, 4),
        totalEnergyKwh=round(monitor.ledger.total_kwh, 4),
        newAlerts=[build_alert_entry(a) for a in outcome.new_alerts],
        activeAlertCount=len(monitor.alerts.active_alerts()),
        message=message,
    ).model_dump()
