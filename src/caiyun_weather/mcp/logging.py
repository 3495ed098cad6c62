"""MCP server logging configuration.

Logs go to stderr, because stdout carries the stdio protocol stream, and
optionally to a file. Tool failures are logged with full tracebacks while
the host only receives a short message.
"""
from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path
from typing import Optional

LOGGER_NAME = "caiyun_weather"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Module-level state
_handlers: list[logging.Handler] = []


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[Path] = None,
) -> Optional[Path]:
    """Configure logging for the server process.

    Replaces handlers installed by a previous call, so it is safe to call
    more than once.

    Args:
        level: Logging level for the package logger
        log_file: Optional file that receives the same records (appended)

    Returns:
        Path to the log file, or None when logging to stderr only
    """
    close_logging()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    _handlers.append(stream_handler)

    if log_file is not None:
        log_file = Path(log_file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        _handlers.append(file_handler)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in _handlers:
        logger.addHandler(handler)

    return log_file


def close_logging() -> None:
    """Detach and close the handlers installed by configure_logging."""
    logger = logging.getLogger(LOGGER_NAME)
    while _handlers:
        handler = _handlers.pop()
        logger.removeHandler(handler)
        handler.close()


def log_tool_exception(
    error: Exception,
    context: str = "",
    include_traceback: bool = True,
) -> str:
    """Log a tool failure with full details.

    Args:
        error: The exception to log
        context: What was happening, usually the tool name
        include_traceback: Whether to include the traceback in the log

    Returns:
        User-friendly error message (without traceback)
    """
    logger = logging.getLogger(f"{LOGGER_NAME}.mcp")

    error_type = type(error).__name__
    error_msg = str(error) or error_type

    if include_traceback:
        tb_str = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        logger.error(f"{context}\n{error_type}: {error_msg}\n\nTraceback:\n{tb_str}")
    else:
        logger.error(f"{context} - {error_type}: {error_msg}")

    return error_msg
