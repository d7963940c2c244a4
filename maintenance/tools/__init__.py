"""Tool registry for FastMCP server.

Exports all tool functions and provides a registration helper.
"""

from fastmcp import FastMCP

from .ingestion import ingest_reading
from .alerts import list_active_alerts
from .environment import get_environmental_report
from .efficiency import get_efficiency_trend
from .readings import query_readings
from .health import health_check


def register_tools(mcp: FastMCP) -> None:
    """Register all tools with the MCP server.

    Args:
        mcp: FastMCP server instance
    """
    mcp.tool(ingest_reading)
    mcp.tool(list_active_alerts)
    mcp.tool(get_environmental_report)
    mcp.tool(get_efficiency_trend)
    mcp.tool(query_readings)
    mcp.tool(health_check)


__all__ = [
    "register_tools",
    "ingest_reading",
    "list_active_alerts",
    "get_environmental_report",
    "get_efficiency_trend",
    "query_readings",
    "health_check",
]
