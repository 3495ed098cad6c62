"""
Sky condition (skycon) codes and their display text.

The provider reports sky conditions as enum codes such as ``CLEAR_DAY`` or
``LIGHT_RAIN``. Each supported language has one fixed table; codes missing
from a table are shown as-is.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

SKYCON_ZH: Mapping[str, str] = MappingProxyType({
    "CLEAR_DAY": "晴天",
    "CLEAR_NIGHT": "晴夜",
    "PARTLY_CLOUDY_DAY": "多云",
    "PARTLY_CLOUDY_NIGHT": "多云",
    "CLOUDY": "阴",
    "LIGHT_HAZE": "轻度雾霾",
    "MODERATE_HAZE": "中度雾霾",
    "HEAVY_HAZE": "重度雾霾",
    "LIGHT_RAIN": "小雨",
    "MODERATE_RAIN": "中雨",
    "HEAVY_RAIN": "大雨",
    "STORM_RAIN": "暴雨",
    "FOG": "雾",
    "LIGHT_SNOW": "小雪",
    "MODERATE_SNOW": "中雪",
    "HEAVY_SNOW": "大雪",
    "STORM_SNOW": "暴雪",
    "DUST": "浮尘",
    "SAND": "沙尘",
    "WIND": "大风",
})

SKYCON_EN: Mapping[str, str] = MappingProxyType({
    "CLEAR_DAY": "Clear Day",
    "CLEAR_NIGHT": "Clear Night",
    "PARTLY_CLOUDY_DAY": "Partly Cloudy Day",
    "PARTLY_CLOUDY_NIGHT": "Partly Cloudy Night",
    "CLOUDY": "Cloudy",
    "LIGHT_HAZE": "Light Haze",
    "MODERATE_HAZE": "Moderate Haze",
    "HEAVY_HAZE": "Heavy Haze",
    "LIGHT_RAIN": "Light Rain",
    "MODERATE_RAIN": "Moderate Rain",
    "HEAVY_RAIN": "Heavy Rain",
    "STORM_RAIN": "Storm Rain",
    "FOG": "Fog",
    "LIGHT_SNOW": "Light Snow",
    "MODERATE_SNOW": "Moderate Snow",
    "HEAVY_SNOW": "Heavy Snow",
    "STORM_SNOW": "Storm Snow",
    "DUST": "Dust",
    "SAND": "Sand",
    "WIND": "Wind",
})

SKYCON_TABLES: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "zh_CN": SKYCON_ZH,
    "en_US": SKYCON_EN,
})


def skycon_text(code: str, language: str = "zh_CN") -> str:
    """Convert a skycon code to display text.

    Args:
        code: Provider sky condition code, e.g. "LIGHT_RAIN".
        language: "zh_CN" or "en_US". Anything else uses the English table.

    Returns:
        The localized description, or ``code`` itself when the code is unknown.

    Example:
        >>> skycon_text("LIGHT_RAIN", "en_US")
        'Light Rain'
        >>> skycon_text("THUNDER", "en_US")
        'THUNDER'
    """
    table = SKYCON_TABLES.get(language, SKYCON_EN)
    return table.get(code, code)
