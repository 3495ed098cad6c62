"""
Decorators for the tool registry.
"""

from __future__ import annotations

import functools
from typing import Any, Callable

from caiyun_weather.core.datamodels import ToolOutput


def tool_output(llm_format: str | Callable[[Any], str] | None = None) -> Callable:
    """
    Decorator that wraps function return value in ToolOutput.

    Usage:
        @tool_output(llm_format=to_pretty_json)
        def get_realtime_weather(...): ...

        @tool_output(llm_format="{temperature}°C, {weather}")
        def get_realtime_weather(...): ...
    """
    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args, **kwargs) -> ToolOutput:
            result = fn(*args, **kwargs)
            return ToolOutput.create(result, llm_format=_resolve_format(llm_format, result))

        return wrapper
    return decorator


def _resolve_format(fmt: str | Callable[[Any], str] | None, data: Any) -> str | None:
    """Resolve format string or callable to final string."""
    if fmt is None:
        return None
    if callable(fmt):
        return fmt(data)
    if isinstance(fmt, str) and isinstance(data, dict):
        try:
            return fmt.format(**data)
        except KeyError:
            return fmt
    return str(fmt)
