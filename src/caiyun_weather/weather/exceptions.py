"""
Exception classes for weather and geocoding lookups.
"""


class WeatherError(Exception):
    """Base exception for weather-related errors."""


class UpstreamError(WeatherError):
    """The weather provider rejected the request or returned an error payload."""


class TransportError(WeatherError):
    """The HTTP request failed before the provider could answer."""


class ResolutionError(WeatherError):
    """An address could not be turned into coordinates."""


class MissingSectionError(WeatherError):
    """A report section was formatted from a payload that lacks it."""
