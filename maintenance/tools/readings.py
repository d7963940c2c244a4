"""Stored reading tools.

Queries the storage collaborator for raw readings in a time range.
"""

from typing import Annotated

from pydantic import Field

from config import settings
from models.enums import DataStatus
from models.reading import Reading
from models.requests import ReadingQueryParams
from models.responses import ReadingListResponse, ReadingPoint
from session import get_monitor


def _reading_point(reading: Reading) -> ReadingPoint:
    return ReadingPoint(
        timestamp=reading.timestamp.isoformat(),
        powerProduced=reading.power_produced,
        powerConsumed=reading.power_consumed,
        batterySoc=reading.battery_soc,
        irradiance=reading.irradiance,
        temperature=reading.temperature,
        panelVoltage=reading.panel_voltage,
        panelCurrent=reading.panel_current,
    )


def query_readings(
    start: Annotated[str, Field(description="Range start in ISO-8601 (inclusive)")],
    end: Annotated[str, Field(description="Range end in ISO-8601 (inclusive)")],
    limit: Annotated[
        int | None, Field(description="Maximum readings to return (optional)", ge=1)
    ] = None,
) -> dict:
    """Get stored readings between two timestamps, oldest first.

    Args:
        start: Range start (inclusive)
        end: Range end (inclusive)
        limit: Maximum number of readings (defaults to the service limit)

    Returns:
        ReadingListResponse with the matching readings
    """
    params = ReadingQueryParams(start=start, end=end, limit=limit)
    limit = params.limit or settings.default_result_limit

    readings = get_monitor().storage.query(params.start, params.end)

    if not readings:
        return ReadingListResponse(
            start=params.start.isoformat(),
            end=params.end.isoformat(),
            status=DataStatus.NO_DATA_IN_WINDOW.value,
            count=0,
            readings=[],
            message="No readings stored for the specified time range",
        ).model_dump()

    return ReadingListResponse(
        start=params.start.isoformat(),
        end=params.end.isoformat(),
        status=DataStatus.OK.value,
        count=len(readings),
        truncated=len(readings) > limit,
        readings=[_reading_point(r) for r in readings[:limit]],
    ).model_dump()
