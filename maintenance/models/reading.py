"""Domain models for sensor readings, efficiency points and alerts.

These are immutable value objects passed between the core components.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.enums import AlertCategory


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Reading(BaseModel):
    """One timestamped snapshot of the installation's sensors."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=utc_now)
    power_produced: float  # W
    power_consumed: float  # W
    battery_soc: float  # %
    irradiance: float  # W/m2
    temperature: float  # degC, panel
    panel_voltage: float  # V
    panel_current: float  # A

    @field_validator("timestamp")
    @classmethod
    def normalize_timestamp(cls, v: datetime) -> datetime:
        """Store every capture time as aware UTC."""
        return as_utc(v)


class EfficiencyPoint(BaseModel):
    """Efficiency ratio observed at a reading timestamp."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    ratio: float


class Alert(BaseModel):
    """A maintenance alert raised by a detection rule.

    Alerts are never updated in place; they are created by a rule and removed
    once older than the retention window.
    """

    model_config = ConfigDict(frozen=True)

    category: AlertCategory
    message: str
    severity: float  # rule-specific, may exceed 1.0
    created_at: datetime = Field(default_factory=utc_now)

    @property
    def display_severity(self) -> float:
        """Severity clamped to [0, 1] for rendering."""
        return min(max(self.severity, 0.0), 1.0)
