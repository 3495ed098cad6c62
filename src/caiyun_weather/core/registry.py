"""
Tool Registry for managing and executing tools.
"""

from __future__ import annotations

from typing import Any, Callable

from pydantic import ValidationError

from caiyun_weather.core.exceptions import (
    ToolError,
    ToolNotFoundError,
    ToolValidationError,
)
from caiyun_weather.core.helpers import _normalize_name
from caiyun_weather.core.datamodels import ToolEntry, ToolResult


class ToolRegistry:
    """Registry for managing tools."""

    def __init__(self):
        self._tools: dict[str, ToolEntry] = {}

    def register(
        self,
        fn: Callable | None = None,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> Callable:
        """
        Register a tool. Can be used as decorator with or without arguments.

        Usage:
            @registry.register
            def my_tool(x: int) -> str: ...

            @registry.register(name="custom_name")
            def my_tool(x: int) -> str: ...
        """
        def decorator(func: Callable) -> Callable:
            canonical = _normalize_name(name or func.__name__)

            if canonical in self._tools:
                raise ToolError(f"Tool name collision: {canonical}")

            self._tools[canonical] = ToolEntry(
                name=canonical,
                callable_fn=func,
                description=description,
            )

            func.__tool_name__ = canonical
            return func

        # Handle @registry.register vs @registry.register(...)
        if fn is not None:
            return decorator(fn)
        return decorator

    def get(self, name: str) -> ToolEntry:
        """Resolve a tool by name."""
        key = _normalize_name(name)

        if key not in self._tools:
            raise ToolNotFoundError(f"Unknown tool: {name}")

        return self._tools[key]

    def validate(self, name: str, arguments: dict[str, Any]) -> tuple[ToolEntry, dict[str, Any]]:
        """Check arguments against the tool's schema without calling it.

        Returns:
            The resolved entry and the validated keyword arguments, with
            defaults filled in.

        Raises:
            ToolNotFoundError: If no tool has that name.
            ToolValidationError: If the arguments have the wrong shape or types.
        """
        entry = self.get(name)
        params_model = entry.get_params_model()

        if not isinstance(arguments, dict):
            raise ToolValidationError(f"Arguments for {entry.name} must be an object")

        try:
            validated = params_model.model_validate(arguments)
        except ValidationError as e:
            raise ToolValidationError(str(e)) from e

        return entry, validated.model_dump()

    def execute(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        """Execute a tool with the given arguments."""
        entry, kwargs = self.validate(name, arguments)
        output = entry.callable_fn(**kwargs)

        return ToolResult(
            name=entry.name,
            arguments=arguments,
            output=output,
        )

    def __contains__(self, name: str) -> bool:
        try:
            self.get(name)
            return True
        except ToolNotFoundError:
            return False

    def __iter__(self):
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
