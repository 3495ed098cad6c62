"""MCP (Model Context Protocol) gateway for caiyun-weather.

    from caiyun_weather.mcp import create_mcp_server

    server = create_mcp_server(config)
    server.run()  # Runs on stdio
"""
from __future__ import annotations

from caiyun_weather.mcp.exceptions import MCPError, MCPTransportError
from caiyun_weather.mcp.logging import (
    close_logging,
    configure_logging,
    log_tool_exception,
)
from caiyun_weather.mcp.server import WeatherMCPServer, create_mcp_server

__all__ = [
    # Server
    "WeatherMCPServer",
    "create_mcp_server",
    # Exceptions
    "MCPError",
    "MCPTransportError",
    # Logging
    "configure_logging",
    "close_logging",
    "log_tool_exception",
]
