"""MCP Server - exposes the weather tools to MCP hosts."""
from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any, Optional

import anyio
import anyio.to_thread
import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from caiyun_weather import __version__
from caiyun_weather.core.exceptions import ToolNotFoundError, ToolValidationError
from caiyun_weather.mcp.exceptions import MCPTransportError
from caiyun_weather.mcp.logging import log_tool_exception

if TYPE_CHECKING:
    from caiyun_weather.config import Config
    from caiyun_weather.core.registry import ToolRegistry

logger = logging.getLogger(__name__)


class WeatherMCPServer:
    """MCP Server that exposes a tool registry.

    Argument errors are reported as protocol errors before the tool runs.
    Anything a tool raises is returned to the host as an error-flagged
    text result, so one failed call never takes the server down.

    Usage:
        registry = build_registry(client, geocoder, config)
        server = WeatherMCPServer(registry)
        server.run()  # Runs on stdio
    """

    def __init__(
        self,
        registry: "ToolRegistry",
        name: str = "caiyun-weather",
        version: str = __version__,
    ):
        self.registry = registry
        self.name = name
        self.version = version
        self._server: Optional[Server] = None

    def _create_server(self) -> Server:
        """Create the low-level MCP server and attach handlers."""
        server = Server(self.name, version=self.version)

        @server.list_tools()
        async def handle_list_tools() -> list[types.Tool]:
            return self.list_tools()

        # Registered directly so McpError reaches the host as a protocol error
        server.request_handlers[types.CallToolRequest] = self._handle_call_tool

        self._server = server
        return server

    def list_tools(self) -> list[types.Tool]:
        """Describe every registered tool with its input schema."""
        return [
            types.Tool(
                name=entry.name,
                description=entry.get_description(),
                inputSchema=entry.input_schema(),
            )
            for entry in self.registry
        ]

    async def _handle_call_tool(self, req: types.CallToolRequest) -> types.ServerResult:
        result = await self.call_tool(req.params.name, req.params.arguments or {})
        return types.ServerResult(result)

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> types.CallToolResult:
        """Validate, run and serialize one tool call.

        Raises:
            McpError: Unknown tool (METHOD_NOT_FOUND) or bad arguments (INVALID_PARAMS).
        """
        try:
            entry, kwargs = self.registry.validate(name, arguments)
        except ToolNotFoundError as e:
            raise McpError(types.ErrorData(code=types.METHOD_NOT_FOUND, message=str(e)))
        except ToolValidationError as e:
            logger.warning(f"Rejected arguments for {name}: {e}")
            raise McpError(types.ErrorData(
                code=types.INVALID_PARAMS,
                message=f"Invalid arguments for {name}: {e}",
            ))

        logger.info(f"Calling tool {entry.name}")
        try:
            output = await anyio.to_thread.run_sync(functools.partial(entry.callable_fn, **kwargs))
        except Exception as e:
            message = log_tool_exception(e, context=f"Tool {entry.name} failed")
            return types.CallToolResult(
                content=[types.TextContent(type="text", text=f"Error: {message}")],
                isError=True,
            )

        return types.CallToolResult(
            content=[types.TextContent(type="text", text=_format_output(output))],
        )

    def run(self, transport: str = "stdio") -> None:
        """Run the MCP server until the host disconnects.

        Args:
            transport: Transport type - only "stdio" is supported
        """
        if transport != "stdio":
            raise MCPTransportError(f"Unknown transport: {transport}")

        server = self._create_server()
        logger.info(f"Starting MCP server '{self.name}' with {transport} transport")
        anyio.run(self._serve_stdio, server)

    async def _serve_stdio(self, server: Server) -> None:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())


def _format_output(output: Any) -> str:
    """Text sent back to the host for a tool's return value."""
    if getattr(output, "llm_format", None):
        return output.llm_format
    if hasattr(output, "data"):
        return str(output.data)
    return str(output)


def create_mcp_server(config: "Config", name: str = "caiyun-weather") -> WeatherMCPServer:
    """Build the client, geocoder and registry for a config and wrap them in a server.

    Args:
        config: Resolved configuration; must carry a Caiyun API key
        name: Server name

    Returns:
        WeatherMCPServer instance
    """
    from caiyun_weather.tools import build_registry
    from caiyun_weather.weather import CaiyunClient, Geocoder

    client = CaiyunClient(
        config.caiyun_api_key,
        base_url=config.get("caiyun_base_url"),
        timeout=config.get("timeout"),
    )
    geocoder = Geocoder(
        config.amap_api_key,
        url=config.get("amap_geocode_url"),
        timeout=config.get("timeout"),
    )
    registry = build_registry(client, geocoder, config)
    return WeatherMCPServer(registry, name=name)
