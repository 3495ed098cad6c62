"""
Weather tools - Caiyun forecasts and AMap geocoding exposed as tools.

Each tool fetches one report, normalizes it and returns the normalized
dict. The LLM-facing rendering is the dict as indented JSON.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import Field

from caiyun_weather.config import Config
from caiyun_weather.core import ToolRegistry, tool_output
from caiyun_weather.weather import CaiyunClient, Geocoder, ReportKind, normalize
from caiyun_weather.weather.models import (
    DAILY_STEPS_RANGE,
    DEFAULT_DAILY_STEPS,
    DEFAULT_HOURLY_STEPS,
    HOURLY_STEPS_RANGE,
    Language,
    StepCount,
    Unit,
)


def to_pretty_json(data: Any) -> str:
    """Render tool data as 2-space indented JSON, keeping non-ASCII text."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def _steps_field(default: int, bounds: tuple[int, int], description: str) -> Any:
    # Range is advertised to the host but not enforced; the client clamps.
    low, high = bounds
    return Field(
        default=default,
        description=f"{description} ({low}-{high})",
        json_schema_extra={"minimum": low, "maximum": high},
    )


def build_registry(client: CaiyunClient, geocoder: Geocoder, config: Config | None = None) -> ToolRegistry:
    """Create a registry holding the weather tools.

    Args:
        client: Caiyun client used for every forecast.
        geocoder: Resolves addresses for get_weather_by_address.
        config: Supplies the default language and unit.

    Returns:
        ToolRegistry with the seven weather tools registered.
    """
    config = config or Config()
    registry = ToolRegistry()

    def longitude_field() -> Any:
        return Field(description="Longitude in degrees")

    def latitude_field() -> Any:
        return Field(description="Latitude in degrees")

    def language_field() -> Any:
        return Field(default=config.get("language"), description="Response language")

    def unit_field() -> Any:
        return Field(default=config.get("unit"), description="Unit system (metric or imperial)")

    def daily_steps_field() -> Any:
        return _steps_field(DEFAULT_DAILY_STEPS, DAILY_STEPS_RANGE, "Number of forecast days")

    def hourly_steps_field() -> Any:
        return _steps_field(DEFAULT_HOURLY_STEPS, HOURLY_STEPS_RANGE, "Number of forecast hours")

    @registry.register
    @tool_output(llm_format=to_pretty_json)
    def get_weather_by_location(
        longitude: float = longitude_field(),
        latitude: float = latitude_field(),
        daily_steps: StepCount = daily_steps_field(),
        hourly_steps: StepCount = hourly_steps_field(),
        language: Language = language_field(),
        unit: Unit = unit_field(),
    ) -> dict[str, Any]:
        """Get combined weather (current, forecasts, alerts) for a coordinate."""
        raw = client.weather(
            longitude,
            latitude,
            daily_steps=daily_steps,
            hourly_steps=hourly_steps,
            language=language,
            unit=unit,
        )
        return normalize(ReportKind.COMBINED, raw, language)

    @registry.register
    @tool_output(llm_format=to_pretty_json)
    def get_weather_by_address(
        address: str = Field(description='Address, e.g. "北京市海淀区"'),
        daily_steps: StepCount = daily_steps_field(),
        hourly_steps: StepCount = hourly_steps_field(),
        language: Language = language_field(),
        unit: Unit = unit_field(),
    ) -> dict[str, Any]:
        """Get combined weather (current, forecasts, alerts) for an address."""
        longitude, latitude = geocoder.geocode(address)
        raw = client.weather(
            longitude,
            latitude,
            daily_steps=daily_steps,
            hourly_steps=hourly_steps,
            language=language,
            unit=unit,
        )
        return normalize(ReportKind.COMBINED, raw, language)

    @registry.register
    @tool_output(llm_format=to_pretty_json)
    def get_realtime_weather(
        longitude: float = longitude_field(),
        latitude: float = latitude_field(),
        language: Language = language_field(),
        unit: Unit = unit_field(),
    ) -> dict[str, Any]:
        """Get current weather conditions for a coordinate."""
        raw = client.realtime(longitude, latitude, language=language, unit=unit)
        return normalize(ReportKind.REALTIME, raw, language)

    @registry.register
    @tool_output(llm_format=to_pretty_json)
    def get_minutely_forecast(
        longitude: float = longitude_field(),
        latitude: float = latitude_field(),
        language: Language = language_field(),
        unit: Unit = unit_field(),
    ) -> dict[str, Any]:
        """Get the minute-level precipitation forecast for the next two hours."""
        raw = client.minutely(longitude, latitude, language=language, unit=unit)
        return normalize(ReportKind.MINUTELY, raw, language)

    @registry.register
    @tool_output(llm_format=to_pretty_json)
    def get_hourly_forecast(
        longitude: float = longitude_field(),
        latitude: float = latitude_field(),
        hourly_steps: StepCount = hourly_steps_field(),
        language: Language = language_field(),
        unit: Unit = unit_field(),
    ) -> dict[str, Any]:
        """Get the hourly weather forecast for a coordinate."""
        raw = client.hourly(longitude, latitude, hourly_steps=hourly_steps, language=language, unit=unit)
        return normalize(ReportKind.HOURLY, raw, language)

    @registry.register
    @tool_output(llm_format=to_pretty_json)
    def get_daily_forecast(
        longitude: float = longitude_field(),
        latitude: float = latitude_field(),
        daily_steps: StepCount = daily_steps_field(),
        language: Language = language_field(),
        unit: Unit = unit_field(),
    ) -> dict[str, Any]:
        """Get the daily weather forecast for a coordinate."""
        raw = client.daily(longitude, latitude, daily_steps=daily_steps, language=language, unit=unit)
        return normalize(ReportKind.DAILY, raw, language)

    @registry.register
    @tool_output(llm_format=to_pretty_json)
    def get_weather_alert(
        longitude: float = longitude_field(),
        latitude: float = latitude_field(),
        language: Language = language_field(),
        unit: Unit = unit_field(),
    ) -> dict[str, Any]:
        """Get active weather alerts for a coordinate."""
        raw = client.alert(longitude, latitude, language=language, unit=unit)
        return normalize(ReportKind.ALERT, raw, language)

    return registry
