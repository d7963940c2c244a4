"""Database connection module and SQL-backed reading store.

Uses SQLAlchemy so the same store runs on SQLite (default, single node) or
PostgreSQL. Reads go through pandas; writes use SQLAlchemy Core inserts.
Timestamps are stored as UTC.
"""

from datetime import datetime
from typing import Any

import pandas as pd
from sqlalchemy import Column, DateTime, Float, Integer, MetaData, Table, create_engine, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import Executable
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from config import settings
from core.errors import PersistenceFailure
from logging_config import get_logger
from models.reading import Reading, as_utc

logger = get_logger(__name__)

metadata = MetaData()

readings_table = Table(
    "readings",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("timestamp", DateTime(timezone=True), nullable=False, index=True),
    Column("power_produced", Float, nullable=False),
    Column("power_consumed", Float, nullable=False),
    Column("battery_soc", Float, nullable=False),
    Column("irradiance", Float, nullable=False),
    Column("temperature", Float, nullable=False),
    Column("panel_voltage", Float, nullable=False),
    Column("panel_current", Float, nullable=False),
)

READING_FIELDS = [c.name for c in readings_table.columns if c.name != "id"]


def create_db_engine(url: str) -> Engine:
    """Create an engine with pooling suited to the backend.

    SQLite in-memory databases share one connection so every session sees the
    same data; file and server databases use the configured pool.
    """
    if url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=False, **kwargs)

    return create_engine(
        url,
        echo=False,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
    )


# Create engine with connection pooling using settings
engine = create_db_engine(settings.database_url)


def init_schema(bind: Engine | None = None) -> None:
    """Create the readings table if it does not exist."""
    metadata.create_all(bind or engine)


def _log_retry(retry_state) -> None:
    logger.warning(
        "database.retry",
        attempt=retry_state.attempt_number,
        error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
    )


_transient_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((OperationalError, InterfaceError)),
    before_sleep=_log_retry,
    reraise=True,
)


@_transient_retry
def execute_query(
    query: Executable | str, params: dict[str, Any] | None = None, bind: Engine | None = None
) -> pd.DataFrame:
    """Execute a query with automatic retry on transient failures.

    Retries up to 3 times with exponential backoff on:
    - OperationalError (connection issues)
    - InterfaceError (connection pool issues)

    Args:
        query: SQLAlchemy selectable or SQL string
        params: Query parameters
        bind: Engine to use (defaults to the module engine)

    Returns:
        DataFrame with query results
    """
    logger.debug("database.query.start")
    with (bind or engine).connect() as conn:
        result = pd.read_sql_query(query, conn, params=params)
    logger.debug("database.query.complete", rows=len(result))
    return result


@_transient_retry
def _insert_reading(bind: Engine, reading: Reading) -> None:
    with bind.begin() as conn:
        conn.execute(readings_table.insert().values(**reading.model_dump()))


def _row_to_reading(row: dict[str, Any]) -> Reading:
    ts = pd.Timestamp(row["timestamp"])
    ts = ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")
    values = {name: float(row[name]) for name in READING_FIELDS if name != "timestamp"}
    return Reading(timestamp=ts.to_pydatetime(), **values)


class SqlReadingStore:
    """Reading store backed by the ``readings`` table.

    SQLAlchemy errors are wrapped in PersistenceFailure after transient
    retries are exhausted.
    """

    def __init__(self, bind: Engine | None = None) -> None:
        self.engine = bind or engine

    def init_schema(self) -> None:
        init_schema(self.engine)

    def store(self, reading: Reading) -> None:
        try:
            _insert_reading(self.engine, reading)
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to store reading: {e}", reading=reading) from e

    def query(self, start: datetime, end: datetime) -> list[Reading]:
        stmt = (
            select(*[readings_table.c[name] for name in READING_FIELDS])
            .where(readings_table.c.timestamp >= as_utc(start))
            .where(readings_table.c.timestamp <= as_utc(end))
            .order_by(readings_table.c.timestamp, readings_table.c.id)
        )
        try:
            df = execute_query(stmt, bind=self.engine)
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to query readings: {e}") from e

        return [_row_to_reading(row) for row in df.to_dict("records")]


def check_connection(bind: Engine | None = None) -> dict[str, Any]:
    """Check database connectivity and return pool statistics.

    Returns:
        Dictionary with connection status and pool stats (when the pool
        exposes them)
    """
    bind = bind or engine
    try:
        with bind.connect() as conn:
            conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("database.health_check.failed", error=str(e))
        return {
            "status": "unhealthy",
            "error": str(e),
        }

    status: dict[str, Any] = {"status": "healthy"}
    pool = bind.pool
    if all(hasattr(pool, attr) for attr in ("size", "checkedin", "checkedout", "overflow")):
        status.update(
            pool_size=pool.size(),
            checked_in=pool.checkedin(),
            checked_out=pool.checkedout(),
            overflow=pool.overflow(),
        )
    return status
