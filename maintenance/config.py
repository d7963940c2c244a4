"""Configuration constants for the solar maintenance service.

Centralizes detection thresholds, ledger factors and service settings so they
can be tuned per installation through the environment.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Solar maintenance configuration with environment variable support.

    All settings can be overridden via environment variables with SOLAR_ prefix.
    Example: SOLAR_NAMEPLATE_WATTS=350
    """

    # Efficiency reference
    nameplate_watts: float = 300.0  # W at 1000 W/m2

    # Panel degradation rule
    degradation_threshold: float = 0.05  # 5% drop vs trailing average
    degradation_window_days: int = 30
    degradation_min_history: int = 30  # points required before comparing

    # High temperature rule
    temperature_alert_threshold: float = 70.0  # degC
    temperature_severity_span: float = 10.0  # degC above threshold for full severity

    # Alert lifecycle
    alert_retention_days: int = 7

    # Environmental ledger
    reading_interval_hours: float = 1.0  # each reading stands for one interval
    co2_per_kwh: float = 0.4  # kg CO2 avoided per kWh
    trees_per_kwh: float = 0.01  # tree equivalents per kWh

    # Storage collaborator
    storage_backend: str = "sql"  # "sql" or "memory"
    database_url: str = "sqlite:///solar_readings.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_pre_ping: bool = True

    # Query limits
    default_result_limit: int = 100

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # MCP Server
    mcp_host: str = "0.0.0.0"
    mcp_port: int = 4000
    mcp_transport: str = "http"

    model_config = {"env_prefix": "SOLAR_"}


settings = Settings()
