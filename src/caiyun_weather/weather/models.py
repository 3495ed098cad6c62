"""
Data models for weather requests.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, NamedTuple

from pydantic import BaseModel, BeforeValidator

Language = Literal["zh_CN", "en_US"]
Unit = Literal["metric", "imperial"]

DAILY_STEPS_RANGE = (1, 15)
HOURLY_STEPS_RANGE = (1, 360)
DEFAULT_DAILY_STEPS = 5
DEFAULT_HOURLY_STEPS = 24


def _whole_number(value: Any) -> Any:
    """Turn 3.0 into 3; fractional floats and strings are left for validation to reject."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


# JSON hosts may send step counts as 3.0
StepCount = Annotated[int, BeforeValidator(_whole_number)]


class Coordinate(NamedTuple):
    """A (longitude, latitude) pair in degrees."""
    longitude: float
    latitude: float


class ReportKind(str, Enum):
    """Kinds of report the weather provider can produce."""
    REALTIME = "realtime"
    MINUTELY = "minutely"
    HOURLY = "hourly"
    DAILY = "daily"
    ALERT = "alert"
    COMBINED = "combined"

    @property
    def path(self) -> str:
        """Upstream path segment. Alerts are served by the combined endpoint."""
        if self in (ReportKind.ALERT, ReportKind.COMBINED):
            return "weather"
        return self.value


def clamp(value: int, bounds: tuple[int, int]) -> int:
    """Clamp value into the inclusive range given by bounds."""
    low, high = bounds
    return min(max(value, low), high)


def _format_degrees(value: float) -> str:
    """Render a coordinate the way the provider expects (116.0 -> "116")."""
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


class ReportRequest(BaseModel):
    """One upstream weather request.

    Step counts are stored as given and clamped when the query is built.
    """

    model_config = {"frozen": True}

    kind: ReportKind
    coordinate: Coordinate
    daily_steps: int = DEFAULT_DAILY_STEPS
    hourly_steps: int = DEFAULT_HOURLY_STEPS
    alert: bool = True
    language: Language = "zh_CN"
    unit: Unit = "metric"

    def path(self, api_key: str) -> str:
        """Build ``/{key}/{lon},{lat}/{report}``."""
        lon = _format_degrees(self.coordinate.longitude)
        lat = _format_degrees(self.coordinate.latitude)
        return f"/{api_key}/{lon},{lat}/{self.kind.path}"

    def query_params(self) -> dict[str, str]:
        """Query string parameters for this request."""
        params: dict[str, str] = {}

        if self.kind is ReportKind.HOURLY:
            params["hourlysteps"] = str(clamp(self.hourly_steps, HOURLY_STEPS_RANGE))
        elif self.kind is ReportKind.DAILY:
            params["dailysteps"] = str(clamp(self.daily_steps, DAILY_STEPS_RANGE))
        elif self.kind is ReportKind.ALERT:
            params["alert"] = "true"
            params["dailysteps"] = "1"
            params["hourlysteps"] = "1"
        elif self.kind is ReportKind.COMBINED:
            params["dailysteps"] = str(clamp(self.daily_steps, DAILY_STEPS_RANGE))
            params["hourlysteps"] = str(clamp(self.hourly_steps, HOURLY_STEPS_RANGE))
            params["alert"] = "true" if self.alert else "false"

        params["lang"] = self.language
        params["unit"] = self.unit
        return params
