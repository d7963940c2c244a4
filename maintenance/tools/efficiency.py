"""Efficiency trend tools.

Summarizes the historical efficiency record the degradation rule works from.
"""

from datetime import timedelta
from typing import Annotated

from pydantic import Field

from models.enums import DataStatus
from models.requests import TrendParams
from models.responses import EfficiencyDay, EfficiencyTrendResponse
from session import get_monitor


def get_efficiency_trend(
    days: Annotated[int, Field(description="Trailing window in days (1-365)", ge=1, le=365)] = 30,
) -> dict:
    """Get the efficiency trend over a trailing window.

    The window ends at the most recent recorded point. Returns the window
    average, the latest ratio and daily means.

    Args:
        days: Trailing window in days

    Returns:
        EfficiencyTrendResponse with window statistics and daily means
    """
    days = TrendParams(days=days).days

    # One consistent view for all the statistics below
    history = get_monitor().alerts.history.snapshot()
    latest = history.latest()

    if latest is None:
        return EfficiencyTrendResponse(
            status=DataStatus.NO_DATA.value,
            windowDays=days,
            totalPoints=0,
            message="No efficiency data recorded yet",
        ).model_dump()

    window = timedelta(days=days)
    stats = history.windowed_average(latest.timestamp, window)

    df = history.to_frame()
    df = df[df.index >= latest.timestamp - window]
    daily_df = df["ratio"].resample("1D").agg(["mean", "count"])
    daily_df = daily_df[daily_df["count"] > 0]

    daily = [
        EfficiencyDay(
            date=ts.strftime("%Y-%m-%d"),
            averageEfficiency=round(float(row["mean"]), 4),
            points=int(row["count"]),
        )
        for ts, row in daily_df.iterrows()
    ]

    change_percent = None
    if stats.average:
        change_percent = round((latest.ratio / stats.average - 1.0) * 100, 2)

    return EfficiencyTrendResponse(
        status=DataStatus.OK.value,
        windowDays=days,
        totalPoints=len(history),
        windowEnd=latest.timestamp.isoformat(),
        pointsInWindow=stats.count,
        averageEfficiency=round(stats.average, 4) if stats.average is not None else None,
        latestEfficiency=round(latest.ratio, 4),
        changePercent=change_percent,
        daily=daily,
    ).model_dump()
