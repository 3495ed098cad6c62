#!/usr/bin/env python3
"""
Tests for the Caiyun client, request building and skycon lookup.
"""

import urllib.error
from unittest.mock import patch
from urllib.parse import parse_qs, urlsplit

import pytest

from caiyun_weather.weather import (
    SKYCON_EN,
    SKYCON_ZH,
    CaiyunClient,
    Coordinate,
    ReportKind,
    ReportRequest,
    TransportError,
    UpstreamError,
    skycon_text,
)
from caiyun_weather.weather.models import clamp

from conftest import envelope, http_error, mock_response, raw_response, realtime_section


def _query(url):
    return {key: values[0] for key, values in parse_qs(urlsplit(url).query).items()}


# ============================================================================
# Request Building Tests
# ============================================================================

class TestReportRequest:
    """Tests for ReportRequest path and query building."""

    def test_clamp(self):
        assert clamp(0, (1, 15)) == 1
        assert clamp(500, (1, 15)) == 15
        assert clamp(10, (1, 15)) == 10

    @pytest.mark.parametrize("given,sent", [(0, "1"), (-3, "1"), (500, "360"), (10, "10")])
    def test_hourly_steps_clamped(self, given, sent):
        request = ReportRequest(kind=ReportKind.HOURLY, coordinate=Coordinate(116.4, 39.9), hourly_steps=given)
        assert request.query_params()["hourlysteps"] == sent

    @pytest.mark.parametrize("given,sent", [(0, "1"), (500, "15"), (10, "10")])
    def test_daily_steps_clamped(self, given, sent):
        request = ReportRequest(kind=ReportKind.DAILY, coordinate=Coordinate(116.4, 39.9), daily_steps=given)
        assert request.query_params()["dailysteps"] == sent

    def test_combined_params(self):
        request = ReportRequest(
            kind=ReportKind.COMBINED,
            coordinate=Coordinate(116.4, 39.9),
            daily_steps=20,
            hourly_steps=0,
            alert=False,
            language="en_US",
            unit="imperial",
        )
        assert request.query_params() == {
            "dailysteps": "15",
            "hourlysteps": "1",
            "alert": "false",
            "lang": "en_US",
            "unit": "imperial",
        }

    def test_alert_params_are_pinned(self):
        request = ReportRequest(
            kind=ReportKind.ALERT,
            coordinate=Coordinate(116.4, 39.9),
            daily_steps=9,
            hourly_steps=99,
            alert=False,
        )
        params = request.query_params()
        assert params["alert"] == "true"
        assert params["dailysteps"] == "1"
        assert params["hourlysteps"] == "1"

    def test_realtime_has_no_steps(self):
        request = ReportRequest(kind=ReportKind.REALTIME, coordinate=Coordinate(116.4, 39.9))
        assert request.query_params() == {"lang": "zh_CN", "unit": "metric"}

    def test_path(self):
        request = ReportRequest(kind=ReportKind.ALERT, coordinate=Coordinate(116.0, 39.9075))
        assert request.path("TOKEN") == "/TOKEN/116,39.9075/weather"

    def test_kind_paths(self):
        assert ReportKind.REALTIME.path == "realtime"
        assert ReportKind.MINUTELY.path == "minutely"
        assert ReportKind.HOURLY.path == "hourly"
        assert ReportKind.DAILY.path == "daily"
        assert ReportKind.ALERT.path == "weather"
        assert ReportKind.COMBINED.path == "weather"


# ============================================================================
# Skycon Tests
# ============================================================================

class TestSkycon:
    """Tests for skycon_text()."""

    @pytest.mark.parametrize("code", sorted(SKYCON_ZH))
    def test_known_codes(self, code):
        assert skycon_text(code, "zh_CN") == SKYCON_ZH[code]
        assert skycon_text(code, "en_US") == SKYCON_EN[code]

    def test_examples(self):
        assert skycon_text("LIGHT_RAIN", "zh_CN") == "小雨"
        assert skycon_text("LIGHT_RAIN", "en_US") == "Light Rain"

    def test_unknown_code_passes_through(self):
        assert skycon_text("THUNDER_SHOWER", "zh_CN") == "THUNDER_SHOWER"
        assert skycon_text("THUNDER_SHOWER", "en_US") == "THUNDER_SHOWER"

    def test_tables_cover_same_codes(self):
        assert set(SKYCON_ZH) == set(SKYCON_EN)

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            SKYCON_ZH["CLEAR_DAY"] = "x"


# ============================================================================
# CaiyunClient Tests
# ============================================================================

class TestCaiyunClient:
    """Tests for CaiyunClient HTTP behaviour."""

    @pytest.fixture
    def client(self):
        return CaiyunClient("TOKEN")

    def _fetch(self, call, payload=None):
        payload = payload or envelope(realtime=realtime_section())
        with patch("urllib.request.urlopen", return_value=mock_response(payload)) as mock_urlopen:
            data = call()
        assert mock_urlopen.call_count == 1
        return data, mock_urlopen.call_args[0][0]

    def test_realtime(self, client):
        data, url = self._fetch(lambda: client.realtime(116.4, 39.9, language="en_US"))
        assert url.startswith("https://api.caiyunapp.com/v2.6/TOKEN/116.4,39.9/realtime?")
        assert _query(url) == {"lang": "en_US", "unit": "metric"}
        assert data["result"]["realtime"]["temperature"] == 21.5

    def test_minutely(self, client):
        _, url = self._fetch(lambda: client.minutely(116.4, 39.9))
        assert "/116.4,39.9/minutely?" in url

    def test_hourly_clamps(self, client):
        _, url = self._fetch(lambda: client.hourly(116.4, 39.9, hourly_steps=500))
        assert "/hourly?" in url
        assert _query(url)["hourlysteps"] == "360"

    def test_daily_clamps(self, client):
        _, url = self._fetch(lambda: client.daily(116.4, 39.9, daily_steps=0))
        assert "/daily?" in url
        assert _query(url)["dailysteps"] == "1"

    def test_alert(self, client):
        _, url = self._fetch(lambda: client.alert(116.4, 39.9))
        assert "/weather?" in url
        query = _query(url)
        assert query["alert"] == "true"
        assert query["dailysteps"] == "1"
        assert query["hourlysteps"] == "1"

    def test_weather_defaults(self, client):
        _, url = self._fetch(lambda: client.weather(116.4, 39.9))
        query = _query(url)
        assert query["dailysteps"] == "5"
        assert query["hourlysteps"] == "24"
        assert query["alert"] == "true"

    def test_custom_base_url(self):
        client = CaiyunClient("TOKEN", base_url="http://localhost:8080/v2.6/")
        _, url = self._fetch(lambda: client.realtime(1, 2))
        assert url.startswith("http://localhost:8080/v2.6/TOKEN/1,2/realtime?")

    def test_http_error_uses_provider_message(self, client):
        error = http_error(401, {"status": "failed", "error": "token is invalid"})
        with patch("urllib.request.urlopen", side_effect=error):
            with pytest.raises(UpstreamError, match="token is invalid"):
                client.realtime(116.4, 39.9)

    def test_http_error_without_body(self, client):
        error = urllib.error.HTTPError("https://x", 503, "Service Unavailable", {}, None)
        with patch("urllib.request.urlopen", side_effect=error):
            with pytest.raises(UpstreamError, match="503"):
                client.realtime(116.4, 39.9)

    def test_failed_status_in_body(self, client):
        payload = {"status": "failed", "error": "'token is invalid'", "api_version": "v2.6"}
        with patch("urllib.request.urlopen", return_value=mock_response(payload)):
            with pytest.raises(UpstreamError, match="token is invalid"):
                client.daily(116.4, 39.9)

    def test_network_error(self, client):
        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("Name or service not known")):
            with pytest.raises(TransportError, match="Name or service not known") as info:
                client.hourly(116.4, 39.9)
        assert isinstance(info.value.__cause__, urllib.error.URLError)

    def test_timeout(self, client):
        with patch("urllib.request.urlopen", side_effect=TimeoutError("timed out")):
            with pytest.raises(TransportError):
                client.weather(116.4, 39.9)

    def test_timeout_is_passed_through(self):
        client = CaiyunClient("TOKEN", timeout=2.5)
        with patch("urllib.request.urlopen", return_value=mock_response(envelope())) as mock_urlopen:
            client.minutely(116.4, 39.9)
        assert mock_urlopen.call_args.kwargs["timeout"] == 2.5

    def test_connection_reset_while_reading(self, client):
        response = raw_response(read_error=ConnectionResetError("reset by peer"))
        with patch("urllib.request.urlopen", return_value=response):
            with pytest.raises(TransportError, match="reset by peer"):
                client.daily(116.4, 39.9)

    def test_non_json_body(self, client):
        response = raw_response(b"<html>502 Bad Gateway</html>")
        with patch("urllib.request.urlopen", return_value=response):
            with pytest.raises(UpstreamError, match="invalid response"):
                client.realtime(116.4, 39.9)

    def test_non_object_body(self, client):
        with patch("urllib.request.urlopen", return_value=mock_response([1, 2, 3])):
            with pytest.raises(UpstreamError, match="unexpected response"):
                client.realtime(116.4, 39.9)
