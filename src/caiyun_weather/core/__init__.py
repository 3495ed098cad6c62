"""
Core module for the caiyun_weather package.

Provides the Tool Registry and related models used to expose weather
operations as typed, schema-validated tools.
"""

from caiyun_weather.core.decorators import tool_output
from caiyun_weather.core.exceptions import (
    ToolError,
    ToolNotFoundError,
    ToolValidationError,
)
from caiyun_weather.core.datamodels import ToolEntry, ToolOutput, ToolResult
from caiyun_weather.core.registry import ToolRegistry

__all__ = [
    # Registry
    "ToolRegistry",
    # Models
    "ToolEntry",
    "ToolOutput",
    "ToolResult",
    # Exceptions
    "ToolError",
    "ToolNotFoundError",
    "ToolValidationError",
    # Decorators
    "tool_output",
]
