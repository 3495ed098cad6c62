"""
Configuration management for caiyun-weather.

Settings come from three layers, lowest precedence first:

1. ~/.caiyun-weather/config.json (optional)
2. Environment variables (CAIYUN_API_KEY, AMAP_API_KEY)
3. Explicit overrides, usually command-line flags

The resolved Config is built once at startup and treated as read-only.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


# Default values - single source of truth
DEFAULTS = {
    "language": "zh_CN",
    "unit": "metric",
    "caiyun_base_url": "https://api.caiyunapp.com/v2.6",
    "amap_geocode_url": "https://restapi.amap.com/v3/geocode/geo",
    "timeout": None,
}

ENV_VARS = {
    "caiyun_api_key": "CAIYUN_API_KEY",
    "amap_api_key": "AMAP_API_KEY",
}


class Config(BaseModel):
    """Configuration settings for caiyun-weather.

    All settings are optional. Use DEFAULTS for default values.
    """

    model_config = {"extra": "ignore", "frozen": True}  # Ignore unknown fields like _comment

    # Credentials
    caiyun_api_key: Optional[str] = Field(
        default=None,
        description="Caiyun weather API token (required to serve)"
    )
    amap_api_key: Optional[str] = Field(
        default=None,
        description="AMap web service key; without it addresses resolve to a fixed coordinate"
    )

    # Request defaults
    language: Optional[Literal["zh_CN", "en_US"]] = Field(
        default=None,
        description="Default response language"
    )
    unit: Optional[Literal["metric", "imperial"]] = Field(
        default=None,
        description="Default unit system"
    )

    # Endpoints
    caiyun_base_url: Optional[str] = Field(
        default=None,
        description="Caiyun API base URL"
    )
    amap_geocode_url: Optional[str] = Field(
        default=None,
        description="AMap geocoding endpoint"
    )
    timeout: Optional[float] = Field(
        default=None,
        description="HTTP timeout in seconds (unset: wait indefinitely)"
    )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value with fallback to DEFAULTS, then to provided default."""
        value = getattr(self, key, None)
        if value is not None:
            return value
        return DEFAULTS.get(key, default)


class ConfigManager:
    """Loads configuration from file, environment and overrides."""

    CONFIG_DIR = Path.home() / ".caiyun-weather"
    CONFIG_FILE = CONFIG_DIR / "config.json"

    def __init__(self, config_file: Path | None = None, environ: dict[str, str] | None = None):
        self.config_file = Path(config_file) if config_file else self.CONFIG_FILE
        self.environ = os.environ if environ is None else environ
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current config, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load_file(self) -> dict[str, Any]:
        """Read raw settings from the config file.

        Returns:
            Settings dict, empty if the file is missing or unreadable.
        """
        if not self.config_file.exists():
            return {}

        try:
            data = json.loads(self.config_file.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Invalid config file {self.config_file} ({e}), ignoring it")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Config file {self.config_file} is not a JSON object, ignoring it")
            return {}
        return data

    def load(self, **overrides: Any) -> Config:
        """Resolve configuration from all layers.

        Args:
            **overrides: Explicit values (e.g. from CLI flags). None means unset.

        Returns:
            Frozen Config with the merged settings.

        Raises:
            pydantic.ValidationError: If a setting has an invalid value.
        """
        data = self.load_file()

        for key, env_var in ENV_VARS.items():
            value = self.environ.get(env_var)
            if value:
                data[key] = value

        for key, value in overrides.items():
            if value is not None:
                data[key] = value

        self._config = Config.model_validate(data)
        return self._config
