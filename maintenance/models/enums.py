"""
Shared enumerations for the maintenance service.
Single source of truth for category and status values to prevent spelling bugs.
"""

from enum import Enum


class AlertCategory(str, Enum):
    """Maintenance alert categories.

    Only PANEL_DEGRADATION and HIGH_TEMPERATURE have detection rules; the
    others are reserved so new rules slot in without changing the alert shape.
    """

    PANEL_DEGRADATION = "panel_degradation"
    HIGH_TEMPERATURE = "high_temperature"
    LOW_EFFICIENCY = "low_efficiency"
    INVERTER_ISSUE = "inverter_issue"
    BATTERY_DEGRADATION = "battery_degradation"


class AlertLevel(str, Enum):
    """Display level derived from an alert's severity score."""

    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class DataStatus(str, Enum):
    """Status codes for tool responses indicating data availability."""

    OK = "ok"  # Data retrieved successfully
    NO_DATA = "no_data"  # Nothing recorded yet
    NO_DATA_IN_WINDOW = "no_data_in_window"  # Data exists, but not for requested window
