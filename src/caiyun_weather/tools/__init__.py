"""
Weather tools for the caiyun_weather package.

Tools are bound to a client and geocoder at startup, so the registry is
built by a factory instead of at import time.
"""

from caiyun_weather.tools.weather import build_registry, to_pretty_json

__all__ = [
    "build_registry",
    "to_pretty_json",
]
