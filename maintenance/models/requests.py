"""Input validation helpers for MCP tool parameters.

Provides reusable validation for common parameter types across tools.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from models.enums import AlertCategory
from models.reading import as_utc


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp string into aware UTC.

    Args:
        value: Timestamp such as '2024-06-15T12:00:00Z' or '2024-06-15'

    Returns:
        Aware UTC datetime (naive input is taken as UTC)

    Raises:
        ValueError: If the string is not ISO-8601
    """
    try:
        return as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except ValueError:
        raise ValueError(f"Invalid timestamp: {value}. Use ISO-8601, e.g. 2024-06-15T12:00:00Z")


def validate_category(category: str) -> AlertCategory:
    """Validate an alert category name.

    Raises:
        ValueError: If the category is unknown
    """
    try:
        return AlertCategory(category)
    except ValueError:
        valid = ", ".join(c.value for c in AlertCategory)
        raise ValueError(f"Invalid category: {category}. Must be one of: {valid}")


class TimeRangeParams(BaseModel):
    """Validates an inclusive timestamp range."""

    start: datetime
    end: datetime

    @field_validator("start", "end", mode="before")
    @classmethod
    def validate_timestamp(cls, v):
        """Accept ISO strings and normalize to UTC."""
        if isinstance(v, str):
            return parse_timestamp(v)
        return as_utc(v)

    @field_validator("end")
    @classmethod
    def validate_order(cls, v: datetime, info) -> datetime:
        """Ensure the range is not reversed."""
        start = info.data.get("start")
        if start is not None and v < start:
            raise ValueError("End must not be before start")
        return v


class ReadingQueryParams(TimeRangeParams):
    """Validates a reading query: an inclusive range and an optional limit."""

    limit: int | None = Field(default=None, ge=1)


class TrendParams(BaseModel):
    """Validates the trailing window of an efficiency trend."""

    days: int = Field(default=30, ge=1, le=365)
