"""
Address to coordinate resolution using the AMap geocoding API.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Optional

from caiyun_weather.weather.exceptions import ResolutionError
from caiyun_weather.weather.models import Coordinate

logger = logging.getLogger(__name__)

AMAP_GEOCODE_URL = "https://restapi.amap.com/v3/geocode/geo"

# Central Beijing, used when no AMap key is configured
DEFAULT_COORDINATE = Coordinate(116.3976, 39.9075)


class Geocoder:
    """Resolves free-text addresses to coordinates.

    Without an API key every address resolves to DEFAULT_COORDINATE. The
    first candidate AMap returns always wins; nothing is cached.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: str = AMAP_GEOCODE_URL,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key
        self.url = url
        self.timeout = timeout

    def default_coordinate(self) -> Coordinate:
        """Coordinate returned when geocoding is unavailable."""
        return DEFAULT_COORDINATE

    def geocode(self, address: str) -> Coordinate:
        """Resolve an address.

        Args:
            address: Free-text address, e.g. "北京市海淀区".

        Returns:
            Coordinate of the first candidate.

        Raises:
            ResolutionError: No candidates, a failed status, or the request
                itself failed.
        """
        if not self.api_key:
            logger.warning(f"No AMap API key, using default coordinates for '{address}'")
            return self.default_coordinate()

        query = urllib.parse.urlencode({"address": address, "key": self.api_key, "output": "JSON"})
        try:
            with urllib.request.urlopen(f"{self.url}?{query}", timeout=self.timeout) as resp:
                data = json.loads(resp.read())
        except urllib.error.HTTPError as e:
            raise ResolutionError(f"Geocoding error: {_http_error_info(e)}") from e
        except (urllib.error.URLError, OSError) as e:
            raise ResolutionError(f"Geocoding error: {getattr(e, 'reason', e)}") from e
        except ValueError as e:
            raise ResolutionError(f"Geocoding error: invalid response ({e})") from e

        if not isinstance(data, dict):
            raise ResolutionError(f"Geocoding error: unexpected response for {address}")

        geocodes = data.get("geocodes") or []
        if data.get("status") == "1" and geocodes:
            lon, lat = geocodes[0]["location"].split(",")
            coordinate = Coordinate(float(lon), float(lat))
            logger.debug(f"Geocoded '{address}' to {coordinate}")
            return coordinate

        info = data.get("info")
        if data.get("status") != "1" and info:
            raise ResolutionError(f"Could not find address: {address} ({info})")
        raise ResolutionError(f"Could not find address: {address}")


def _http_error_info(error: urllib.error.HTTPError) -> str:
    """AMap's ``info`` field from an error body, else the HTTP status."""
    try:
        body = json.loads(error.read() or b"{}")
    except (ValueError, OSError):
        body = None
    if isinstance(body, dict) and body.get("info"):
        return str(body["info"])
    return f"HTTP {error.code} {error.reason}"
