"""
Shared fixtures: sample Caiyun payloads and a urlopen stand-in.
"""

import io
import json
import urllib.error
from unittest.mock import MagicMock

import pytest


def envelope(**sections):
    """Wrap result sections in a Caiyun response envelope."""
    return {
        "status": "ok",
        "api_version": "v2.6",
        "api_status": "active",
        "lang": "zh_CN",
        "unit": "metric",
        "tzshift": 28800,
        "timezone": "Asia/Shanghai",
        "server_time": 0,
        "location": [39.9, 116.4],
        "result": sections,
    }


def realtime_section():
    return {
        "status": "ok",
        "temperature": 21.5,
        "humidity": 0.42,
        "cloudrate": 0.1,
        "skycon": "PARTLY_CLOUDY_DAY",
        "visibility": 25.0,
        "dswrf": 512.3,
        "wind": {"speed": 8.2, "direction": 135.0},
        "pressure": 101120.0,
        "apparent_temperature": 20.1,
        "precipitation": {
            "local": {"status": "ok", "datasource": "radar", "intensity": 0.0},
            "nearest": {"status": "ok", "distance": 34.5, "intensity": 0.19},
        },
        "air_quality": {
            "pm25": 12, "pm10": 30, "o3": 80, "so2": 3, "no2": 18, "co": 0.4,
            "aqi": {"chn": 35, "usa": 50},
            "description": {"chn": "优", "usa": "Good"},
        },
        "life_index": {
            "ultraviolet": {"index": 3.0, "desc": "弱"},
            "comfort": {"index": 5, "desc": "舒适"},
        },
    }


def minutely_section():
    return {
        "status": "ok",
        "datasource": "radar",
        "precipitation_2h": [0.0] * 120,
        "precipitation": [0.0] * 60,
        "probability": [0.0, 0.0, 0.05, 0.1],
        "description": "未来两小时不会下雨",
    }


def hourly_section(count=3, apparent=None):
    """Hourly section with ``count`` steps; ``apparent`` limits apparent_temperature."""
    times = [f"2024-05-01T{hour:02d}:00+08:00" for hour in range(count)]
    apparent_count = count if apparent is None else apparent
    return {
        "status": "ok",
        "description": "多云",
        "temperature": [{"datetime": t, "value": 20 + i} for i, t in enumerate(times)],
        "apparent_temperature": [
            {"datetime": t, "value": 19 + i} for i, t in enumerate(times[:apparent_count])
        ],
        "precipitation": [{"datetime": t, "value": 0.0, "probability": 10} for t in times],
        "wind": [{"datetime": t, "speed": 5.0, "direction": 90.0} for t in times],
        "humidity": [{"datetime": t, "value": 0.5} for t in times],
        "cloudrate": [{"datetime": t, "value": 0.3} for t in times],
        "skycon": [{"datetime": t, "value": "CLEAR_DAY"} for t in times],
        "pressure": [{"datetime": t, "value": 101000.0} for t in times],
        "visibility": [{"datetime": t, "value": 20.0} for t in times],
        "dswrf": [{"datetime": t, "value": 300.0} for t in times],
        "air_quality": {
            "aqi": [{"datetime": t, "value": {"chn": 40, "usa": 55}} for t in times],
            "pm25": [{"datetime": t, "value": 15} for t in times],
        },
    }


def _range(date, low, high):
    return {"date": date, "max": high, "min": low, "avg": (low + high) / 2}


def _wind(date):
    return {
        "date": date,
        "max": {"speed": 12.0, "direction": 180.0},
        "min": {"speed": 2.0, "direction": 170.0},
        "avg": {"speed": 7.0, "direction": 175.0},
    }


def _life(date, desc):
    return {"date": date, "index": "1", "desc": desc}


def daily_section(count=3, day_night=True):
    """Daily section with ``count`` days; day/night windows optional."""
    dates = [f"2024-05-{day + 1:02d}T00:00+08:00" for day in range(count)]
    section = {
        "status": "ok",
        "astro": [
            {"date": d, "sunrise": {"time": "05:12"}, "sunset": {"time": "19:15"}} for d in dates
        ],
        "precipitation": [
            {"date": d, "max": 1.0, "min": 0.0, "avg": 0.2, "probability": 30} for d in dates
        ],
        "temperature": [_range(d, 12, 26) for d in dates],
        "wind": [_wind(d) for d in dates],
        "humidity": [_range(d, 0.3, 0.7) for d in dates],
        "cloudrate": [_range(d, 0.0, 0.8) for d in dates],
        "pressure": [_range(d, 100500.0, 101500.0) for d in dates],
        "visibility": [_range(d, 10.0, 30.0) for d in dates],
        "dswrf": [_range(d, 0.0, 800.0) for d in dates],
        "air_quality": {
            "aqi": [
                {
                    "date": d,
                    "max": {"chn": 60, "usa": 80},
                    "avg": {"chn": 45, "usa": 60},
                    "min": {"chn": 30, "usa": 40},
                }
                for d in dates
            ],
            "pm25": [{"date": d, "max": 30, "avg": 20, "min": 10} for d in dates],
        },
        "skycon": [{"date": d, "value": "LIGHT_RAIN"} for d in dates],
        "skycon_08h_20h": [{"date": d, "value": "CLOUDY"} for d in dates],
        "skycon_20h_32h": [{"date": d, "value": "CLEAR_NIGHT"} for d in dates],
        "life_index": {
            "ultraviolet": [_life(d, "最弱") for d in dates],
            "carWashing": [_life(d, "不宜") for d in dates],
            "dressing": [_life(d, "舒适") for d in dates],
            "comfort": [_life(d, "舒适") for d in dates],
            "coldRisk": [_life(d, "少发") for d in dates],
        },
    }
    if day_night:
        section["temperature_08h_20h"] = [_range(d, 18, 26) for d in dates]
        section["temperature_20h_32h"] = [_range(d, 12, 17) for d in dates]
        section["wind_08h_20h"] = [_wind(d) for d in dates]
        section["wind_20h_32h"] = [_wind(d) for d in dates]
    return section


def alert_section(count=2):
    return {
        "status": "ok",
        "content": [
            {
                "province": "北京市",
                "status": "预警中",
                "code": "0902",
                "description": f"大风蓝色预警 {i}",
                "regionId": "101010100",
                "county": "海淀区",
                "pubtimestamp": 1714500000 + i,
                "latlon": [39.9, 116.4],
                "city": "北京市",
                "alertId": f"11000041600000_{i}",
                "title": "北京市气象台发布大风蓝色预警",
                "adcode": "110108",
                "source": "国家预警信息发布中心",
                "location": "北京市海淀区",
                "request_status": "ok",
            }
            for i in range(count)
        ],
    }


def mock_response(payload):
    """Context manager object mimicking urlopen's return value."""
    cm = MagicMock()
    cm.__enter__.return_value.read.return_value = json.dumps(payload).encode()
    return cm


def raw_response(body=b"", read_error=None):
    """Like mock_response, but with a raw body or a read() that raises."""
    cm = MagicMock()
    if read_error is not None:
        cm.__enter__.return_value.read.side_effect = read_error
    else:
        cm.__enter__.return_value.read.return_value = body
    return cm


def http_error(code, body, url="https://example.invalid"):
    """An HTTPError whose body is ``body`` serialized as JSON."""
    return urllib.error.HTTPError(
        url, code, "Error", {}, io.BytesIO(json.dumps(body).encode())
    )


@pytest.fixture
def combined_payload():
    return envelope(
        realtime=realtime_section(),
        minutely=minutely_section(),
        hourly=hourly_section(),
        daily=daily_section(),
        alert=alert_section(),
        primary=0,
        forecast_keypoint="多云，今天晚间20点钟后转小雨",
    )
