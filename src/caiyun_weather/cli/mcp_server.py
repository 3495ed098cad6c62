#!/usr/bin/env python3
"""CLI entry point for running the Caiyun weather MCP server (caiyun-weather-mcp command).

Serves the weather tools over stdio to MCP clients like Claude Desktop.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

MISSING_KEY_HELP = """Error: no Caiyun weather API key provided.
Provide one in any of these ways:
  1. Environment variable: CAIYUN_API_KEY=<token> caiyun-weather-mcp
  2. Command-line flag:    caiyun-weather-mcp --api-key <token>
  3. Config file:          "caiyun_api_key" in ~/.caiyun-weather/config.json
  4. The "env" block of your MCP client's server settings"""


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for caiyun-weather-mcp."""
    parser = argparse.ArgumentParser(
        prog="caiyun-weather-mcp",
        description="Run the Caiyun weather tools as an MCP server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    caiyun-weather-mcp --api-key TOKEN          # Serve on stdio
    caiyun-weather-mcp --list-tools             # List available tools
    CAIYUN_API_KEY=TOKEN AMAP_API_KEY=KEY caiyun-weather-mcp

To use with Claude Desktop, add to your MCP settings:
    {
      "mcpServers": {
        "caiyun-weather": {
          "command": "caiyun-weather-mcp",
          "env": {"CAIYUN_API_KEY": "TOKEN", "AMAP_API_KEY": "KEY"}
        }
      }
    }
        """,
    )
    parser.add_argument(
        "--api-key", "-k",
        help="Caiyun API token (default: $CAIYUN_API_KEY)"
    )
    parser.add_argument(
        "--amap-key",
        help="AMap geocoding key (default: $AMAP_API_KEY)"
    )
    parser.add_argument(
        "--language",
        choices=["zh_CN", "en_US"],
        help="Default response language (default: zh_CN)"
    )
    parser.add_argument(
        "--unit",
        choices=["metric", "imperial"],
        help="Default unit system (default: metric)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="HTTP timeout in seconds (default: none)"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Config file (default: ~/.caiyun-weather/config.json)"
    )
    parser.add_argument(
        "--name", "-n",
        default="caiyun-weather",
        help="Server name (default: caiyun-weather)"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write logs to this file"
    )
    parser.add_argument(
        "--list-tools", "-l",
        action="store_true",
        help="List available tools and exit"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the caiyun-weather-mcp CLI."""
    args = build_parser().parse_args(argv)

    # Import here to avoid loading everything for --help
    from caiyun_weather.config import ConfigManager
    from caiyun_weather.mcp import configure_logging, create_mcp_server

    configure_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
    )
    logger = logging.getLogger("caiyun_weather.cli")

    try:
        config = ConfigManager(config_file=args.config).load(
            caiyun_api_key=args.api_key,
            amap_api_key=args.amap_key,
            language=args.language,
            unit=args.unit,
            timeout=args.timeout,
        )

        if not config.caiyun_api_key and not args.list_tools:
            print(MISSING_KEY_HELP, file=sys.stderr)
            sys.exit(1)

        if not config.amap_api_key:
            logger.warning("No AMap API key; address lookups will use the default coordinates (Beijing)")

        server = create_mcp_server(config, name=args.name)

        if args.list_tools:
            print("Available tools:")
            for tool in server.list_tools():
                print(f"  {tool.name}")
                if tool.description:
                    print(f"    {tool.description}")
            return

        server.run(transport="stdio")

    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
