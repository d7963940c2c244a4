"""Maintenance alert tools.

Exposes the alert engine's active-alert set for inspection.
"""

from typing import Annotated

from pydantic import Field

from alert_catalog import get_alert_definition, severity_level
from models.reading import Alert
from models.requests import validate_category
from models.responses import AlertEntry, AlertListResponse
from session import get_monitor


def build_alert_entry(alert: Alert) -> AlertEntry:
    """Convert a domain alert into its response entry."""
    return AlertEntry(
        category=alert.category.value,
        message=alert.message,
        severity=round(alert.severity, 4),
        displaySeverity=round(alert.display_severity, 4),
        level=severity_level(alert.severity).value,
        createdAt=alert.created_at.isoformat(),
        suggestedFix=get_alert_definition(alert.category)["fix"],
    )


def list_active_alerts(
    category: Annotated[
        str | None,
        Field(description="Only return alerts of this category, e.g. 'high_temperature' (optional)"),
    ] = None,
) -> dict:
    """List maintenance alerts raised within the retention window.

    Alerts are returned in the order they were raised. A condition that
    persists across readings appears once per reading that triggered it.

    Args:
        category: Optional alert category filter

    Returns:
        AlertListResponse with alert entries and a summary
    """
    alerts = get_monitor().alerts.active_alerts()

    if category is not None:
        wanted = validate_category(category)
        alerts = tuple(a for a in alerts if a.category == wanted)

    entries = [build_alert_entry(a) for a in alerts]

    if not entries:
        summary = "No active maintenance alerts"
    else:
        critical = sum(1 for e in entries if e.level == "critical")
        summary = f"{len(entries)} active alert(s), {critical} critical"

    return AlertListResponse(
        count=len(entries),
        category=category,
        alerts=entries,
        summary=summary,
    ).model_dump()
