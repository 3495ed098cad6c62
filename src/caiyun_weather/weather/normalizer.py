"""
Response normalizer for Caiyun reports.

Turns the provider's verbose envelope into compact records meant for
display or for an LLM to read. Per-timestep sections arrive as parallel
arrays (one array per quantity); they are zipped positionally, with the
temperature array deciding how many steps there are.

Every normalized report starts with the provider's ``location`` echo and
``server_time`` as an ISO-8601 UTC string. The envelope's ``tzshift`` and
``timezone`` fields are not applied.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Optional, Sequence

from caiyun_weather.weather.exceptions import MissingSectionError
from caiyun_weather.weather.models import ReportKind
from caiyun_weather.weather.skycon import skycon_text


def iso_utc(epoch_seconds: float) -> str:
    """Epoch seconds to ``YYYY-MM-DDTHH:MM:SS.mmmZ``.

    >>> iso_utc(0)
    '1970-01-01T00:00:00.000Z'
    """
    dt = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _at(items: Optional[Sequence[Any]], index: int) -> Any:
    """items[index], or None when the array is missing or too short."""
    if not items or index >= len(items):
        return None
    return items[index]


def _section(raw: dict[str, Any], name: str) -> Optional[dict[str, Any]]:
    return (raw.get("result") or {}).get(name)


def _require(raw: dict[str, Any], name: str, label: str) -> dict[str, Any]:
    section = _section(raw, name)
    if section is None:
        raise MissingSectionError(f"No {label} data in response")
    return section


def _header(raw: dict[str, Any]) -> dict[str, Any]:
    server_time = raw.get("server_time")
    return {
        "location": raw.get("location"),
        "server_time": iso_utc(server_time) if server_time is not None else None,
    }


def _wind(entry: dict[str, Any]) -> dict[str, Any]:
    return {"speed": entry.get("speed"), "direction": entry.get("direction")}


def _range(entry: dict[str, Any]) -> dict[str, Any]:
    return {"max": entry.get("max"), "min": entry.get("min"), "avg": entry.get("avg")}


# -----------------------------
# Per-kind formatters
# -----------------------------

def format_realtime(raw: dict[str, Any], language: str = "zh_CN") -> dict[str, Any]:
    """Current conditions as a single record."""
    realtime = _require(raw, "realtime", "realtime weather")

    precipitation = realtime.get("precipitation") or {}
    nearest = precipitation.get("nearest") or {}
    air = realtime.get("air_quality") or {}
    life = realtime.get("life_index") or {}

    return {
        **_header(raw),
        "temperature": realtime.get("temperature"),
        "apparent_temperature": realtime.get("apparent_temperature"),
        "humidity": realtime.get("humidity"),
        "weather": skycon_text(realtime.get("skycon"), language),
        "weather_code": realtime.get("skycon"),
        "wind": _wind(realtime.get("wind") or {}),
        "pressure": realtime.get("pressure"),
        "visibility": realtime.get("visibility"),
        "precipitation": {
            "local": (precipitation.get("local") or {}).get("intensity"),
            "nearest": nearest.get("intensity") or 0,
            "nearest_distance": nearest.get("distance") or 0,
        },
        "air_quality": {
            "aqi": (air.get("aqi") or {}).get("chn"),
            "pm25": air.get("pm25"),
            "pm10": air.get("pm10"),
            "o3": air.get("o3"),
            "so2": air.get("so2"),
            "no2": air.get("no2"),
            "co": air.get("co"),
            "description": (air.get("description") or {}).get("chn"),
        },
        "life_index": {
            "comfort": (life.get("comfort") or {}).get("desc"),
            "ultraviolet": (life.get("ultraviolet") or {}).get("desc"),
        },
    }


def format_minutely(raw: dict[str, Any], language: str = "zh_CN") -> dict[str, Any]:
    """Minute-level precipitation. The series carry no timestamps."""
    minutely = _require(raw, "minutely", "minutely precipitation")
    return {
        **_header(raw),
        "description": minutely.get("description"),
        "precipitation": minutely.get("precipitation"),
        "precipitation_2h": minutely.get("precipitation_2h"),
        "probability": minutely.get("probability"),
    }


def _hourly_step(hourly: dict[str, Any], index: int, temp: dict[str, Any], language: str) -> dict[str, Any]:
    skycon = hourly["skycon"][index]["value"]
    precipitation = hourly["precipitation"][index]
    air = hourly.get("air_quality") or {}

    step = {
        "time": temp.get("datetime"),
        "temperature": temp.get("value"),
    }
    apparent = _at(hourly.get("apparent_temperature"), index)
    if apparent is not None:
        step["apparent_temperature"] = apparent.get("value")
    step.update({
        "weather": skycon_text(skycon, language),
        "weather_code": skycon,
        "wind": _wind(hourly["wind"][index]),
        "humidity": hourly["humidity"][index]["value"],
        "cloudrate": hourly["cloudrate"][index]["value"],
        "pressure": hourly["pressure"][index]["value"],
        "visibility": hourly["visibility"][index]["value"],
        "precipitation": {
            "value": precipitation.get("value"),
            "probability": precipitation.get("probability"),
        },
        "air_quality": {
            "aqi": (air["aqi"][index].get("value") or {}).get("chn"),
            "pm25": air["pm25"][index]["value"],
        },
    })
    return step


def format_hourly(raw: dict[str, Any], language: str = "zh_CN") -> dict[str, Any]:
    """Hourly forecast, one record per hour."""
    hourly = _require(raw, "hourly", "hourly forecast")
    return {
        **_header(raw),
        "description": hourly.get("description"),
        "forecast": [
            _hourly_step(hourly, index, temp, language)
            for index, temp in enumerate(hourly.get("temperature") or [])
        ],
    }


def _daily_step(daily: dict[str, Any], index: int, temp: dict[str, Any], language: str) -> dict[str, Any]:
    skycon = daily["skycon"][index]["value"]
    skycon_day = daily["skycon_08h_20h"][index]["value"]
    skycon_night = daily["skycon_20h_32h"][index]["value"]
    precipitation = daily["precipitation"][index]
    air = daily.get("air_quality") or {}
    astro = daily["astro"][index]
    life = daily.get("life_index") or {}

    step: dict[str, Any] = {"date": temp.get("date"), "temperature": _range(temp)}

    temp_day = _at(daily.get("temperature_08h_20h"), index)
    if temp_day is not None:
        step["temperature_day"] = _range(temp_day)
    temp_night = _at(daily.get("temperature_20h_32h"), index)
    if temp_night is not None:
        step["temperature_night"] = _range(temp_night)

    step.update({
        "weather": skycon_text(skycon, language),
        "weather_code": skycon,
        "weather_day": skycon_text(skycon_day, language),
        "weather_day_code": skycon_day,
        "weather_night": skycon_text(skycon_night, language),
        "weather_night_code": skycon_night,
        "wind": _wind(daily["wind"][index]["avg"]),
    })

    wind_day = _at(daily.get("wind_08h_20h"), index)
    if wind_day is not None:
        step["wind_day"] = _wind(wind_day["avg"])
    wind_night = _at(daily.get("wind_20h_32h"), index)
    if wind_night is not None:
        step["wind_night"] = _wind(wind_night["avg"])

    step.update({
        "humidity": daily["humidity"][index]["avg"],
        "cloudrate": daily["cloudrate"][index]["avg"],
        "pressure": daily["pressure"][index]["avg"],
        "visibility": daily["visibility"][index]["avg"],
        "precipitation": {
            **_range(precipitation),
            "probability": precipitation.get("probability"),
        },
        "air_quality": {
            "aqi": (air["aqi"][index].get("avg") or {}).get("chn"),
            "pm25": air["pm25"][index]["avg"],
        },
        "astro": {
            "sunrise": astro["sunrise"]["time"],
            "sunset": astro["sunset"]["time"],
        },
        "life_index": {
            name: life[name][index]["desc"]
            for name in ("comfort", "ultraviolet", "carWashing", "dressing", "coldRisk")
        },
    })
    return step


def format_daily(raw: dict[str, Any], language: str = "zh_CN") -> dict[str, Any]:
    """Daily forecast, one record per day."""
    daily = _require(raw, "daily", "daily forecast")
    return {
        **_header(raw),
        "forecast": [
            _daily_step(daily, index, temp, language)
            for index, temp in enumerate(daily.get("temperature") or [])
        ],
    }


def format_alert(raw: dict[str, Any], language: str = "zh_CN") -> dict[str, Any]:
    """Active alerts. A payload without an alert section yields no alerts."""
    alert = _section(raw, "alert") or {}
    return {
        **_header(raw),
        "alerts": [
            {
                "title": item.get("title"),
                "description": item.get("description"),
                "code": item.get("code"),
                "source": item.get("source"),
                "location": item.get("location"),
                "region": {
                    "province": item.get("province"),
                    "city": item.get("city"),
                    "county": item.get("county"),
                    "adcode": item.get("adcode"),
                },
                "pub_time": iso_utc(item["pubtimestamp"]) if item.get("pubtimestamp") is not None else None,
            }
            for item in alert.get("content") or []
        ],
    }


def format_weather(raw: dict[str, Any], language: str = "zh_CN") -> dict[str, Any]:
    """Combined report holding whichever sections the payload carries.

    Sections that normalize to nothing (no temperature, no description,
    an empty forecast list) are left out entirely.
    """
    sections = raw.get("result") or {}

    report = _header(raw)
    if sections.get("forecast_keypoint"):
        report["forecast_keypoint"] = sections["forecast_keypoint"]

    if sections.get("realtime") is not None:
        realtime = format_realtime(raw, language)
        if realtime["temperature"] is not None:
            report["realtime"] = realtime

    if sections.get("minutely") is not None:
        minutely = format_minutely(raw, language)
        if minutely["description"]:
            report["minutely"] = minutely

    if sections.get("hourly") is not None:
        hourly = format_hourly(raw, language)
        if hourly["forecast"]:
            report["hourly"] = hourly

    if sections.get("daily") is not None:
        daily = format_daily(raw, language)
        if daily["forecast"]:
            report["daily"] = daily

    if sections.get("alert") is not None:
        report["alert"] = format_alert(raw, language)

    return report


FORMATTERS: dict[ReportKind, Callable[[dict[str, Any], str], dict[str, Any]]] = {
    ReportKind.REALTIME: format_realtime,
    ReportKind.MINUTELY: format_minutely,
    ReportKind.HOURLY: format_hourly,
    ReportKind.DAILY: format_daily,
    ReportKind.ALERT: format_alert,
    ReportKind.COMBINED: format_weather,
}


def normalize(kind: ReportKind | str, raw: dict[str, Any], language: str = "zh_CN") -> dict[str, Any]:
    """Normalize a raw report of the given kind.

    Args:
        kind: Report kind (enum member or its string value).
        raw: Decoded provider envelope.
        language: Selects the skycon table ("zh_CN" or "en_US").

    Raises:
        MissingSectionError: The payload has no section for a realtime,
            minutely, hourly or daily request.
    """
    return FORMATTERS[ReportKind(kind)](raw, language)
