"""
Weather domain: Caiyun client, response normalizer and geocoding.
"""

from caiyun_weather.weather.client import CAIYUN_BASE_URL, CaiyunClient
from caiyun_weather.weather.exceptions import (
    MissingSectionError,
    ResolutionError,
    TransportError,
    UpstreamError,
    WeatherError,
)
from caiyun_weather.weather.geocode import AMAP_GEOCODE_URL, DEFAULT_COORDINATE, Geocoder
from caiyun_weather.weather.models import Coordinate, ReportKind, ReportRequest
from caiyun_weather.weather.normalizer import (
    format_alert,
    format_daily,
    format_hourly,
    format_minutely,
    format_realtime,
    format_weather,
    iso_utc,
    normalize,
)
from caiyun_weather.weather.skycon import SKYCON_EN, SKYCON_ZH, skycon_text

__all__ = [
    # Client
    "CaiyunClient",
    "CAIYUN_BASE_URL",
    # Geocoding
    "Geocoder",
    "AMAP_GEOCODE_URL",
    "DEFAULT_COORDINATE",
    # Models
    "Coordinate",
    "ReportKind",
    "ReportRequest",
    # Normalizer
    "normalize",
    "format_realtime",
    "format_minutely",
    "format_hourly",
    "format_daily",
    "format_alert",
    "format_weather",
    "iso_utc",
    # Skycon
    "skycon_text",
    "SKYCON_ZH",
    "SKYCON_EN",
    # Exceptions
    "WeatherError",
    "UpstreamError",
    "TransportError",
    "ResolutionError",
    "MissingSectionError",
]
