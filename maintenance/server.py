"""Solar Maintenance Service - Dual Transport Server.

Exposes the maintenance engine via:
- HTTP REST API at /api/* (stateless, for dashboards and sensor gateways)
- FastMCP at /mcp (for MCP clients)

Tools available:
- ingest_reading: Store a reading, update the energy ledger, run maintenance checks
- list_active_alerts: Inspect alerts raised within the retention window
- get_environmental_report: Cumulative energy, CO2 avoided and tree equivalents
- get_efficiency_trend: Trailing-window efficiency statistics
- query_readings: Stored readings in a time range
- health_check: Storage connectivity
"""

import logging

import uvicorn
from fastmcp import FastMCP
from starlette.applications import Starlette
from starlette.routing import Mount

from config import settings
from http_api import create_http_app
from logging_config import configure_logging
from tools import register_tools

logger = logging.getLogger(__name__)

mcp = FastMCP("solar-maintenance")
register_tools(mcp)


def create_app() -> Starlette:
    """Create the combined ASGI application with HTTP API and MCP endpoint."""
    http_app = create_http_app()
    mcp_app = mcp.http_app(path="/mcp", transport=settings.mcp_transport)

    app = Starlette(
        routes=[
            Mount("/api", app=http_app),
            Mount("/", app=mcp_app),
        ],
        lifespan=mcp_app.lifespan,
    )

    logger.info("Created HTTP API and MCP server")
    return app


if __name__ == "__main__":
    configure_logging()
    logger.info(f"Starting solar-maintenance server on {settings.mcp_host}:{settings.mcp_port}")

    app = create_app()
    uvicorn.run(
        app,
        host=settings.mcp_host,
        port=settings.mcp_port,
    )
