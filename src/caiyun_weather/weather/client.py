"""
Caiyun weather API client.

Every operation performs exactly one GET against
``{base_url}/{api_key}/{lon},{lat}/{report}`` and returns the decoded JSON
envelope. Nothing is cached or retried.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Optional

from caiyun_weather.weather.exceptions import TransportError, UpstreamError
from caiyun_weather.weather.models import (
    DEFAULT_DAILY_STEPS,
    DEFAULT_HOURLY_STEPS,
    Coordinate,
    Language,
    ReportKind,
    ReportRequest,
    Unit,
)

logger = logging.getLogger(__name__)

CAIYUN_BASE_URL = "https://api.caiyunapp.com/v2.6"


class CaiyunClient:
    """Fetches raw reports from the Caiyun weather API.

    Usage:
        client = CaiyunClient(api_key)
        raw = client.daily(116.4, 39.9, daily_steps=7, language="en_US")
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = CAIYUN_BASE_URL,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def build_url(self, request: ReportRequest) -> str:
        """Full request URL, query string included."""
        query = urllib.parse.urlencode(request.query_params())
        return f"{self.base_url}{request.path(self.api_key)}?{query}"

    def fetch(self, request: ReportRequest) -> dict[str, Any]:
        """Perform the GET for a report request.

        Raises:
            UpstreamError: Non-2xx response, a body that is not a JSON object,
                or an envelope whose status is not "ok".
            TransportError: The provider could not be reached.
        """
        url = self.build_url(request)
        logger.debug(f"GET {request.kind.value} report at {request.coordinate}")

        try:
            with urllib.request.urlopen(url, timeout=self.timeout) as resp:
                data = json.loads(resp.read())
        except urllib.error.HTTPError as e:
            raise UpstreamError(f"Caiyun API error: {_http_error_message(e)}") from e
        except (urllib.error.URLError, OSError) as e:
            reason = getattr(e, "reason", e)
            raise TransportError(f"Caiyun API unreachable: {reason}") from e
        except ValueError as e:
            raise UpstreamError(f"Caiyun API error: invalid response ({e})") from e

        if not isinstance(data, dict):
            raise UpstreamError("Caiyun API error: unexpected response body")
        if data.get("status", "ok") != "ok":
            raise UpstreamError(f"Caiyun API error: {data.get('error') or data.get('status')}")
        return data

    def realtime(
        self,
        longitude: float,
        latitude: float,
        language: Language = "zh_CN",
        unit: Unit = "metric",
    ) -> dict[str, Any]:
        """Current conditions."""
        return self.fetch(ReportRequest(
            kind=ReportKind.REALTIME,
            coordinate=Coordinate(longitude, latitude),
            language=language,
            unit=unit,
        ))

    def minutely(
        self,
        longitude: float,
        latitude: float,
        language: Language = "zh_CN",
        unit: Unit = "metric",
    ) -> dict[str, Any]:
        """Two-hour minute-level precipitation forecast."""
        return self.fetch(ReportRequest(
            kind=ReportKind.MINUTELY,
            coordinate=Coordinate(longitude, latitude),
            language=language,
            unit=unit,
        ))

    def hourly(
        self,
        longitude: float,
        latitude: float,
        hourly_steps: int = DEFAULT_HOURLY_STEPS,
        language: Language = "zh_CN",
        unit: Unit = "metric",
    ) -> dict[str, Any]:
        """Hourly forecast; hourly_steps is clamped to 1-360."""
        return self.fetch(ReportRequest(
            kind=ReportKind.HOURLY,
            coordinate=Coordinate(longitude, latitude),
            hourly_steps=hourly_steps,
            language=language,
            unit=unit,
        ))

    def daily(
        self,
        longitude: float,
        latitude: float,
        daily_steps: int = DEFAULT_DAILY_STEPS,
        language: Language = "zh_CN",
        unit: Unit = "metric",
    ) -> dict[str, Any]:
        """Daily forecast; daily_steps is clamped to 1-15."""
        return self.fetch(ReportRequest(
            kind=ReportKind.DAILY,
            coordinate=Coordinate(longitude, latitude),
            daily_steps=daily_steps,
            language=language,
            unit=unit,
        ))

    def alert(
        self,
        longitude: float,
        latitude: float,
        language: Language = "zh_CN",
        unit: Unit = "metric",
    ) -> dict[str, Any]:
        """Active weather alerts, via the combined endpoint with minimal forecasts."""
        return self.fetch(ReportRequest(
            kind=ReportKind.ALERT,
            coordinate=Coordinate(longitude, latitude),
            language=language,
            unit=unit,
        ))

    def weather(
        self,
        longitude: float,
        latitude: float,
        daily_steps: int = DEFAULT_DAILY_STEPS,
        hourly_steps: int = DEFAULT_HOURLY_STEPS,
        alert: bool = True,
        language: Language = "zh_CN",
        unit: Unit = "metric",
    ) -> dict[str, Any]:
        """Combined report: realtime, minutely, hourly, daily and optionally alerts."""
        return self.fetch(ReportRequest(
            kind=ReportKind.COMBINED,
            coordinate=Coordinate(longitude, latitude),
            daily_steps=daily_steps,
            hourly_steps=hourly_steps,
            alert=alert,
            language=language,
            unit=unit,
        ))


def _http_error_message(error: urllib.error.HTTPError) -> str:
    """Prefer the provider's own error text over the HTTP reason."""
    try:
        body = json.loads(error.read() or b"{}")
    except (ValueError, OSError):
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {error.code} {error.reason}"
