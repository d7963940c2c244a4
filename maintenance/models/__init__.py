"""Pydantic models for the solar maintenance service.

Contains domain value objects, request validation and response envelopes.
"""

from .enums import AlertCategory, AlertLevel, DataStatus
from .reading import Alert, EfficiencyPoint, Reading
from .requests import (
    ReadingQueryParams,
    TimeRangeParams,
    TrendParams,
    parse_timestamp,
    validate_category,
)
from .responses import (
    # Shared
    AlertEntry,
    ReadingPoint,
    # Ingestion
    IngestResponse,
    # Alerts
    AlertListResponse,
    # Ledger
    EnvironmentalReportResponse,
    # Efficiency
    EfficiencyDay,
    EfficiencyTrendResponse,
    # Storage
    ReadingListResponse,
    # Health
    DatabasePoolStats,
    HealthCheckResponse,
)

__all__ = [
    # Enums
    "AlertCategory",
    "AlertLevel",
    "DataStatus",
    # Domain
    "Alert",
    "EfficiencyPoint",
    "Reading",
    # Requests
    "ReadingQueryParams",
    "TimeRangeParams",
    "TrendParams",
    "parse_timestamp",
    "validate_category",
    # Shared
    "AlertEntry",
    "ReadingPoint",
    # Ingestion
    "IngestResponse",
    # Alerts
    "AlertListResponse",
    # Ledger
    "EnvironmentalReportResponse",
    # Efficiency
    "EfficiencyDay",
    "EfficiencyTrendResponse",
    # Storage
    "ReadingListResponse",
    # Health
    "DatabasePoolStats",
    "HealthCheckResponse",
]
