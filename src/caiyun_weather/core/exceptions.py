"""
Exception classes for the tool registry.
"""


class ToolError(Exception):
    """Base exception for tool-related errors."""


class ToolNotFoundError(ToolError):
    """Tool not found in registry."""


class ToolValidationError(ToolError):
    """Tool arguments do not match the tool's parameter schema."""
