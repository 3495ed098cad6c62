"""
caiyun_weather - Caiyun weather tools for MCP hosts

Fetches weather reports from the Caiyun API (and addresses from AMap
geocoding), reshapes them into compact records and serves them as MCP
tools.

Example usage:
    from caiyun_weather.weather import CaiyunClient, normalize

    client = CaiyunClient("your-token")
    raw = client.daily(116.4, 39.9, daily_steps=3, language="en_US")
    report = normalize("daily", raw, "en_US")

    # Serve as an MCP server (requires a Caiyun token)
    from caiyun_weather.config import ConfigManager
    from caiyun_weather.mcp import create_mcp_server

    create_mcp_server(ConfigManager().load()).run()
"""

__version__ = "0.1.0"

# Core exports
from caiyun_weather.core import (
    ToolEntry,
    ToolError,
    ToolNotFoundError,
    ToolOutput,
    ToolRegistry,
    ToolResult,
    ToolValidationError,
    tool_output,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "ToolRegistry",
    "ToolEntry",
    "ToolOutput",
    "ToolResult",
    "ToolError",
    "ToolNotFoundError",
    "ToolValidationError",
    "tool_output",
]
