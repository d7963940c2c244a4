"""
Shared test fixtures for the Solar Maintenance Service.

Every test gets a fresh SolarMonitor with an in-memory store and a
controllable clock, installed as the service session.
"""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from fastmcp import Client

# Add parent directory to path so we can import service modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from core import AlertEngine, EnvironmentalLedger, InMemoryReadingStore, SolarMonitor
from models.reading import Reading
from session import set_monitor

BASE_TIME = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock standing in for wall-clock time."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock():
    """Clock frozen at BASE_TIME."""
    return FakeClock(BASE_TIME)


@pytest.fixture
def make_reading():
    """Factory for readings with benign defaults (efficiency 0.8, 25 degC)."""

    def _make(**overrides) -> Reading:
        values = {
            "timestamp": BASE_TIME,
            "power_produced": 240.0,
            "power_consumed": 150.0,
            "battery_soc": 80.0,
            "irradiance": 1000.0,
            "temperature": 25.0,
            "panel_voltage": 36.0,
            "panel_current": 6.7,
        }
        values.update(overrides)
        return Reading(**values)

    return _make


@pytest.fixture
def hourly_readings(make_reading):
    """Factory for consecutive hourly readings starting at BASE_TIME."""

    def _make(count: int, start: datetime = BASE_TIME, **overrides) -> list[Reading]:
        return [
            make_reading(timestamp=start + timedelta(hours=i), **overrides)
            for i in range(count)
        ]

    return _make


@pytest.fixture
def alert_engine(clock):
    """Fresh alert engine on the fake clock."""
    return AlertEngine(clock=clock)


@pytest.fixture
def monitor(clock):
    """Fresh monitor installed as the service session."""
    monitor = SolarMonitor(
        storage=InMemoryReadingStore(),
        alerts=AlertEngine(clock=clock),
        ledger=EnvironmentalLedger(started_at=BASE_TIME),
    )
    set_monitor(monitor)
    yield monitor
    set_monitor(None)


@pytest.fixture
async def mcp_client(monitor):
    """
    FastMCP Client fixture for testing tools.
    Uses in-memory transport (no network).
    """
    from server import mcp

    async with Client(mcp) as client:
        yield client
