"""Pydantic models for MCP tool responses.

Type-safe response envelopes for the maintenance tools.
Each tool returns a specific response model serialized with .model_dump().
Timestamps are ISO-8601 strings so payloads are JSON-ready.
"""

from typing import Optional

from pydantic import BaseModel


# ============================================================
# Shared
# ============================================================
class AlertEntry(BaseModel):
    """Single alert as exposed to consumers."""

    category: str
    message: str
    severity: float  # raw rule score, may exceed 1.0
    displaySeverity: float  # clamped to [0, 1]
    level: str  # "info" | "warning" | "critical"
    createdAt: str
    suggestedFix: Optional[str] = None


class ReadingPoint(BaseModel):
    """Single stored reading."""

    timestamp: str
    powerProduced: float
    powerConsumed: float
    batterySoc: float
    irradiance: float
    temperature: float
    panelVoltage: float
    panelCurrent: float


# ============================================================
# TOOL 1: ingest_reading
# ============================================================
class IngestResponse(BaseModel):
    """Response for ingest_reading tool."""

    type: str = "ingest_result"
    timestamp: str
    persisted: bool
    efficiency: float
    energyKwhAdded: float
    totalEnergyKwh: float
    newAlerts: list[AlertEntry]
    activeAlertCount: int
    message: Optional[str] = None


# ============================================================
# TOOL 2: list_active_alerts
# ============================================================
class AlertListResponse(BaseModel):
    """Response for list_active_alerts tool."""

    type: str = "alert_list"
    count: int
    category: Optional[str] = None
    alerts: list[AlertEntry]
    summary: Optional[str] = None


# ============================================================
# TOOL 3: get_environmental_report
# ============================================================
class EnvironmentalReportResponse(BaseModel):
    """Response for get_environmental_report tool."""

    type: str = "environmental_report"
    ledgerStart: str
    totalEnergyKwh: float
    co2SavingsKg: float
    treeEquivalents: float
    summary: str


# ============================================================
# TOOL 4: get_efficiency_trend
# ============================================================
class EfficiencyDay(BaseModel):
    """Daily mean efficiency."""

    date: str
    averageEfficiency: float
    points: int


class EfficiencyTrendResponse(BaseModel):
    """Response for get_efficiency_trend tool."""

    type: str = "efficiency_trend"
    status: str  # "ok", "no_data"
    windowDays: int
    totalPoints: int
    windowEnd: Optional[str] = None
    pointsInWindow: Optional[int] = None
    averageEfficiency: Optional[float] = None
    latestEfficiency: Optional[float] = None
    changePercent: Optional[float] = None  # latest vs window average
    daily: list[EfficiencyDay] = []
    message: Optional[str] = None


# ============================================================
# TOOL 5: query_readings
# ============================================================
class ReadingListResponse(BaseModel):
    """Response for query_readings tool."""

    type: str = "reading_list"
    start: str
    end: str
    status: Optional[str] = None  # "ok", "no_data_in_window"
    count: int
    truncated: bool = False
    readings: list[ReadingPoint]
    message: Optional[str] = None


# ============================================================
# TOOL 6: health_check - Service Health
# ============================================================
class DatabasePoolStats(BaseModel):
    """Database connection pool statistics."""

    pool_size: int
    checked_in: int
    checked_out: int
    overflow: int


class HealthCheckResponse(BaseModel):
    """Response for health_check tool."""

    type: str = "health_check"
    status: str  # "healthy" or "degraded"
    storage: str  # "sql" or "memory"
    database: str  # "healthy", "not_applicable" or error message
    efficiencyPoints: Optional[int] = None
    pool_stats: Optional[DatabasePoolStats] = None
