"""Configuration management for caiyun-weather."""

from caiyun_weather.config.config import (
    DEFAULTS,
    ENV_VARS,
    Config,
    ConfigManager,
)

__all__ = [
    "DEFAULTS",
    "ENV_VARS",
    "Config",
    "ConfigManager",
]
