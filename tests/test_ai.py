# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
test_ai.py — Unit tests for the optional text-completion client.

requests.post / requests.get are patched; the analysis helpers get fake
`generate` callables. No network calls.
"""

from unittest.mock import MagicMock, patch

import requests

from conftest import make_payload
from weather_insights.ai import (
    detect_weather_phenomena,
    extract_json_array,
    generate_chart_annotations,
    generate_humidity_analysis,
    generate_precipitation_analysis,
    generate_pressure_analysis,
    generate_synoptic_analysis,
    generate_temperature_analysis,
    generate_text,
    generate_wind_analysis,
    health_check,
)
from weather_insights.snapshot import WeatherSnapshot, parse_snapshot


def _response(json_data=None, status_error=None) -> MagicMock:
    resp = MagicMock()
    resp.json.return_value = json_data
    if status_error is not None:
        resp.raise_for_status.side_effect = status_error
    return resp


# ---------------------------------------------------------------------------
# generate_text
# ---------------------------------------------------------------------------

def test_generate_text_posts_message_and_length():
    with patch("weather_insights.ai.requests.post", return_value=_response({"response": "hi"})) as post:
        result = generate_text("Hello", 50, url="http://ai.local/")
    assert result == {"response": "hi"}
    args, kwargs = post.call_args
    assert args[0] == "http://ai.local/generate"
    assert kwargs["json"] == {"message": "Hello", "max_length": 50}


def test_generate_text_connection_error_returns_none(tmp_path):
    with patch("weather_insights.ai.requests.post", side_effect=requests.ConnectionError("refused")):
        result = generate_text("Hello", log_path=tmp_path / "app.log")
    assert result is None
    assert "AI generate endpoint failed" in (tmp_path / "app.log").read_text()


def test_generate_text_http_error_returns_none(tmp_path):
    resp = _response(status_error=requests.HTTPError("500 Server Error"))
    with patch("weather_insights.ai.requests.post", return_value=resp):
        assert generate_text("Hello", log_path=tmp_path / "app.log") is None


def test_generate_text_bad_json_returns_none(tmp_path):
    resp = MagicMock()
    resp.json.side_effect = ValueError("no json")
    with patch("weather_insights.ai.requests.post", return_value=resp):
        assert generate_text("Hello", log_path=tmp_path / "app.log") is None


def test_health_check_unreachable():
    with patch("weather_insights.ai.requests.get", side_effect=requests.Timeout("slow")):
        assert health_check() == {"status": "error", "model_loaded": False}


def test_health_check_server_error():
    resp = _response({"status": "ok"}, status_error=requests.HTTPError("503 Service Unavailable"))
    with patch("weather_insights.ai.requests.get", return_value=resp):
        assert health_check() == {"status": "error", "model_loaded": False}


def test_health_check_ok():
    with patch("weather_insights.ai.requests.get", return_value=_response({"status": "ok"})):
        assert health_check()["status"] == "ok"


# ---------------------------------------------------------------------------
# extract_json_array
# ---------------------------------------------------------------------------

def test_extract_array_from_prose():
    text = 'Sure! Here you go: [{"label": "Ridge"}] Hope that helps.'
    assert extract_json_array(text) == [{"label": "Ridge"}]


def test_extract_array_invalid_json():
    assert extract_json_array("[not, json") == []
    assert extract_json_array("[oops]") == []


def test_extract_array_none():
    assert extract_json_array(None) == []


# ---------------------------------------------------------------------------
# Analysis helpers
# ---------------------------------------------------------------------------

class TestAnalysisHelpers:

    def setup_method(self):
        self.snapshot = parse_snapshot(make_payload(
            current={"pressure_msl": 1015.0},
            hourly={"pressure_msl": 1008.0},
        ))
        self.prompts = []

    def fake_generate(self, message, max_length):
        self.prompts.append((message, max_length))
        return {"response": "analysis"}

    def test_pressure_analysis_reports_trend(self):
        assert generate_pressure_analysis(self.snapshot, generate=self.fake_generate) == "analysis"
        prompt, max_length = self.prompts[0]
        assert "Current Pressure: 1015.0 hPa" in prompt
        assert "Trend: Falling" in prompt
        assert max_length == 300

    def test_wind_analysis_uses_compass(self):
        generate_wind_analysis(self.snapshot, generate=self.fake_generate)
        assert "(S)" in self.prompts[0][0]

    def test_temperature_analysis(self):
        generate_temperature_analysis(self.snapshot, generate=self.fake_generate)
        assert "Trend: Falling (0.0°C)" in self.prompts[0][0]

    def test_humidity_analysis(self):
        generate_humidity_analysis(self.snapshot, generate=self.fake_generate)
        prompt = self.prompts[0][0]
        assert "Average: 50.0%" in prompt
        assert "Dew Point: 10.0°C" in prompt

    def test_precipitation_analysis_dry_day(self):
        generate_precipitation_analysis(self.snapshot, generate=self.fake_generate)
        prompt = self.prompts[0][0]
        assert "Total Precipitation: 0.0 mm" in prompt
        assert "Probability: 0%" in prompt

    def test_synoptic_analysis_longer_reply(self):
        generate_synoptic_analysis(self.snapshot, duration="48-hour", generate=self.fake_generate)
        prompt, max_length = self.prompts[0]
        assert "48-hour period" in prompt
        assert max_length == 400

    def test_empty_response_gives_none(self):
        result = generate_synoptic_analysis(self.snapshot, generate=lambda m, n: {"response": ""})
        assert result is None

    def test_non_dict_response_gives_none(self):
        assert generate_synoptic_analysis(self.snapshot, generate=lambda m, n: ["x"]) is None


def test_helpers_skip_without_current():
    snapshot = WeatherSnapshot()
    called = []

    def generate(message, max_length):
        called.append(message)

    assert generate_pressure_analysis(snapshot, generate=generate) is None
    assert generate_synoptic_analysis(snapshot, generate=generate) is None
    assert detect_weather_phenomena(snapshot, generate=generate) == []
    assert called == []


def test_chart_annotations_parsed_from_reply():
    reply = {"response": 'Annotations:\n[{"label": "Peak", "description": "d", "significance": "high"}]'}
    annotations = generate_chart_annotations("temperature", {"max": 30}, generate=lambda m, n: reply)
    assert annotations[0]["label"] == "Peak"


def test_chart_annotations_unavailable():
    assert generate_chart_annotations("wind", {}, generate=lambda m, n: None) == []
