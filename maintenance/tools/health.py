"""Health check tool for service monitoring.

Verifies the storage collaborator is reachable.
"""

from database import SqlReadingStore, check_connection
from models.responses import DatabasePoolStats, HealthCheckResponse
from session import get_monitor


def health_check() -> dict:
    """Check service health and storage connectivity.

    For SQL storage, verifies the database connection and returns pool
    statistics when the pool exposes them.

    Returns:
        HealthCheckResponse with status and pool stats
    """
    monitor = get_monitor()
    storage = monitor.storage

    if not isinstance(storage, SqlReadingStore):
        return HealthCheckResponse(
            status="healthy",
            storage="memory",
            database="not_applicable",
            efficiencyPoints=len(monitor.alerts.history),
        ).model_dump()

    db_status = check_connection(storage.engine)

    if db_status["status"] == "healthy":
        pool_stats = None
        if "pool_size" in db_status:
            pool_stats = DatabasePoolStats(
                pool_size=db_status["pool_size"],
                checked_in=db_status["checked_in"],
                checked_out=db_status["checked_out"],
                overflow=db_status["overflow"],
            )
        return HealthCheckResponse(
            status="healthy",
            storage="sql",
            database="healthy",
            efficiencyPoints=len(monitor.alerts.history),
            pool_stats=pool_stats,
        ).model_dump()

    return HealthCheckResponse(
        status="degraded",
        storage="sql",
        database=db_status.get("error", "unknown error"),
    ).model_dump()
