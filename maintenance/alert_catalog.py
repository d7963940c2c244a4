"""Alert category definitions.

Centralized catalog of maintenance alert categories with descriptions and
suggested fixes, plus the severity bands used to label alerts for display.
"""

from typing import TypedDict

from models.enums import AlertCategory, AlertLevel


class AlertDefinition(TypedDict):
    """Definition for a single alert category."""

    description: str
    fix: str


ALERT_CATALOG: dict[AlertCategory, AlertDefinition] = {
    AlertCategory.PANEL_DEGRADATION: {
        "description": "Panel efficiency dropped below its trailing 30-day average",
        "fix": "Inspect panels for soiling, shading, cracks or delamination",
    },
    AlertCategory.HIGH_TEMPERATURE: {
        "description": "Panel temperature above the safe operating threshold",
        "fix": "Check ventilation behind the array and verify mounting clearance",
    },
    AlertCategory.LOW_EFFICIENCY: {
        "description": "Output well below expected for the measured irradiance",
        "fix": "Compare with irradiance sensor and check string connections",
    },
    AlertCategory.INVERTER_ISSUE: {
        "description": "Inverter output inconsistent with panel voltage and current",
        "fix": "Check inverter status codes and DC input wiring",
    },
    AlertCategory.BATTERY_DEGRADATION: {
        "description": "Battery state of charge behaviour indicates capacity loss",
        "fix": "Schedule a battery capacity test",
    },
}

# Lower bounds of each display level, checked highest first
SEVERITY_LEVELS: list[tuple[float, AlertLevel]] = [
    (1.0, AlertLevel.CRITICAL),
    (0.5, AlertLevel.WARNING),
    (0.0, AlertLevel.INFO),
]


def get_alert_definition(category: AlertCategory) -> AlertDefinition:
    """Look up the catalog entry for an alert category.

    Args:
        category: Alert category

    Returns:
        AlertDefinition with description and suggested fix
    """
    return ALERT_CATALOG[category]


def severity_level(severity: float) -> AlertLevel:
    """Map a raw severity score onto a display level.

    Args:
        severity: Rule-specific severity (may exceed 1.0)

    Returns:
        CRITICAL at 1.0 and above, WARNING from 0.5, INFO otherwise
    """
    for floor, level in SEVERITY_LEVELS:
        if severity >= floor:
            return level
    return AlertLevel.INFO
