"""HTTP REST API for the maintenance tools.

Exposes all MCP tools as stateless HTTP POST endpoints for clients that do
not speak MCP (dashboards, sensor gateways).
"""

import json
import logging
from typing import Any

from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from tools import (
    get_efficiency_trend,
    get_environmental_report,
    health_check,
    ingest_reading,
    list_active_alerts,
    query_readings,
)

logger = logging.getLogger(__name__)

# Tool registry mapping tool names to functions
TOOL_REGISTRY: dict[str, Any] = {
    "ingest_reading": ingest_reading,
    "list_active_alerts": list_active_alerts,
    "get_environmental_report": get_environmental_report,
    "get_efficiency_trend": get_efficiency_trend,
    "query_readings": query_readings,
    "health_check": health_check,
}

# Tool schemas for client discovery
TOOL_SCHEMAS: dict[str, dict] = {
    "ingest_reading": {
        "description": "Ingest one sensor reading: store it, add its energy to the ledger and run maintenance checks.",
        "parameters": {
            "power_produced": {"type": "number", "description": "Power produced in W", "required": True},
            "power_consumed": {"type": "number", "description": "Power consumed in W", "required": True},
            "battery_soc": {"type": "number", "description": "Battery state of charge in %", "required": True},
            "irradiance": {"type": "number", "description": "Irradiance in W/m2", "required": True},
            "temperature": {"type": "number", "description": "Panel temperature in degC", "required": True},
            "panel_voltage": {"type": "number", "description": "Panel voltage in V", "required": True},
            "panel_current": {"type": "number", "description": "Panel current in A", "required": True},
            "timestamp": {
                "type": "string",
                "description": "Capture time in ISO-8601 (optional, defaults to now)",
            },
        },
    },
    "list_active_alerts": {
        "description": "List maintenance alerts raised within the last 7 days.",
        "parameters": {
            "category": {
                "type": "string",
                "description": "Only return alerts of this category (optional)",
            },
        },
    },
    "get_environmental_report": {
        "description": "Report cumulative solar energy, CO2 avoided and tree equivalents.",
        "parameters": {},
    },
    "get_efficiency_trend": {
        "description": "Get the efficiency trend over a trailing window ending at the latest reading.",
        "parameters": {
            "days": {
                "type": "integer",
                "description": "Trailing window in days (1-365)",
                "default": 30,
            },
        },
    },
    "query_readings": {
        "description": "Get stored readings between two ISO-8601 timestamps, oldest first.",
        "parameters": {
            "start": {"type": "string", "description": "Range start (inclusive)", "required": True},
            "end": {"type": "string", "description": "Range end (inclusive)", "required": True},
            "limit": {"type": "integer", "description": "Maximum readings to return (optional)"},
        },
    },
    "health_check": {
        "description": "Check service health and storage connectivity.",
        "parameters": {},
    },
}


async def call_tool(request: Request) -> JSONResponse:
    """Execute a tool by name with provided arguments."""
    tool_name = request.path_params["tool_name"]

    if tool_name not in TOOL_REGISTRY:
        return JSONResponse(
            {
                "success": False,
                "error": f"Unknown tool: {tool_name}",
                "available_tools": list(TOOL_REGISTRY.keys()),
            },
            status_code=404,
        )

    try:
        body = await request.json() if request.method == "POST" else {}
    except json.JSONDecodeError:
        body = {}

    tool_fn = TOOL_REGISTRY[tool_name]

    try:
        logger.info(f"Executing tool: {tool_name} with args: {body}")
        result = tool_fn(**body)
        logger.info(f"Tool {tool_name} executed successfully")
        return JSONResponse({"success": True, "result": result})
    except (TypeError, ValueError, ValidationError) as e:
        logger.warning(f"Invalid parameters for tool {tool_name}: {e}")
        return JSONResponse(
            {"success": False, "error": f"Invalid parameters: {str(e)}"},
            status_code=400,
        )
    except Exception as e:
        logger.error(f"Tool {tool_name} failed: {e}")
        return JSONResponse(
            {"success": False, "error": str(e)},
            status_code=500,
        )


async def list_tools_endpoint(request: Request) -> JSONResponse:
    """Return available tools and their schemas."""
    return JSONResponse({"tools": TOOL_SCHEMAS})


async def api_health(request: Request) -> JSONResponse:
    """Health check endpoint."""
    try:
        result = health_check()
        status = "healthy" if result.get("status") == "healthy" else "degraded"
        return JSONResponse({"status": status, "service": "solar-maintenance-http", "details": result})
    except Exception as e:
        return JSONResponse(
            {"status": "unhealthy", "service": "solar-maintenance-http", "error": str(e)},
            status_code=503,
        )


# Define routes
routes = [
    Route("/health", api_health, methods=["GET"]),
    Route("/tools", list_tools_endpoint, methods=["GET"]),
    Route("/tools/{tool_name}", call_tool, methods=["POST"]),
]


def create_http_app() -> Starlette:
    """Create the HTTP API application."""
    app = Starlette(routes=routes)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    return app
