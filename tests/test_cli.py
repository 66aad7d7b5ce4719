# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
test_cli.py — Tests for the command-line entry point.

fetch_snapshot and geocode are replaced with fakes, so no network calls;
the config file, log file and acknowledgment store all live in tmp_path.
"""

import pytest
import requests

from conftest import make_payload
from weather_insights.cli import build_parser, main
from weather_insights.geocode import LocationNotFoundError
from weather_insights.snapshot import parse_snapshot


def write_config(tmp_path, ai_enabled=False):
    config_file = tmp_path / "config.toml"
    config_file.write_text(f"""
[location]
latitude = 51.5
longitude = -0.12
name = "London"

[forecast]
days = 2

[ai]
enabled = {"true" if ai_enabled else "false"}
url = "http://ai.invalid"
max_length = 300

[alerts]
store_path = "{(tmp_path / "acks.json").as_posix()}"

[log]
path = "{(tmp_path / "app.log").as_posix()}"
""")
    return str(config_file)


@pytest.fixture()
def cold_fetch(monkeypatch):
    """A 3°C morning: report raises a 'cold' alert."""
    snapshot = parse_snapshot(make_payload(current={"temperature_2m": 3.0}))
    monkeypatch.setattr(
        "weather_insights.cli.fetch_snapshot",
        lambda *a, **kw: snapshot,
    )


# ---------------------------------------------------------------------------
# build_parser
# ---------------------------------------------------------------------------

def test_parser_report_defaults():
    args = build_parser().parse_args(["report"])
    assert args.command == "report"
    assert args.days is None
    assert args.ai is False
    assert args.location is None


def test_parser_rejects_days_out_of_range():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["report", "--days", "20"])


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


# ---------------------------------------------------------------------------
# classify
# ---------------------------------------------------------------------------

def test_classify_prints_band(capsys):
    main(["classify", "uv", "9"])
    assert capsys.readouterr().out.strip() == "⚠️ uv 9: Very High (high, #DC2626)"


def test_classify_unknown_metric():
    with pytest.raises(SystemExit) as exc:
        main(["classify", "sunshine", "3"])
    assert exc.value.code == 2


# ---------------------------------------------------------------------------
# report / events / acknowledge
# ---------------------------------------------------------------------------

def test_report_uses_configured_days(tmp_path, monkeypatch, capsys):
    requested = []

    def fetch(latitude, longitude, forecast_days=7, log_path=None):
        requested.append(forecast_days)
        return parse_snapshot(make_payload())

    monkeypatch.setattr("weather_insights.cli.fetch_snapshot", fetch)
    main(["--config", write_config(tmp_path), "report"])

    out = capsys.readouterr().out
    assert requested == [2]
    assert "Fetching 2-day forecast for London..." in out
    assert "📍 London — weather insights" in out
    assert "🤖" not in out


def test_report_days_flag_overrides_config(tmp_path, monkeypatch):
    requested = []

    def fetch(latitude, longitude, forecast_days=7, log_path=None):
        requested.append(forecast_days)
        return parse_snapshot(make_payload())

    monkeypatch.setattr("weather_insights.cli.fetch_snapshot", fetch)
    main(["--config", write_config(tmp_path), "report", "--days", "14"])
    assert requested == [14]


def test_report_with_ai(tmp_path, monkeypatch, capsys, cold_fetch):
    monkeypatch.setattr(
        "weather_insights.cli.generate_synoptic_analysis",
        lambda snapshot, generate, max_length: "Ridge building from the west.",
    )
    main(["--config", write_config(tmp_path), "report", "--ai"])
    assert "🤖 Ridge building from the west." in capsys.readouterr().out


def test_report_ai_uses_configured_max_length(tmp_path, monkeypatch, cold_fetch):
    lengths = []

    def fake_post(url, json, timeout):
        lengths.append(json["max_length"])
        raise requests.ConnectionError("offline")

    monkeypatch.setattr("weather_insights.ai.requests.post", fake_post)
    main(["--config", write_config(tmp_path), "report", "--ai"])
    assert lengths == [300]


def test_report_ai_unavailable(tmp_path, monkeypatch, capsys, cold_fetch):
    monkeypatch.setattr(
        "weather_insights.cli.generate_synoptic_analysis",
        lambda snapshot, generate, max_length: None,
    )
    main(["--config", write_config(tmp_path, ai_enabled=True), "report"])
    assert "🤖 AI analysis temporarily unavailable" in capsys.readouterr().out


def test_acknowledge_silences_alert(tmp_path, capsys, cold_fetch):
    config = write_config(tmp_path)

    main(["--config", config, "report"])
    assert "ALERT: cold" in capsys.readouterr().out

    main(["--config", config, "acknowledge"])
    assert "✅ Acknowledged london-cold-" in capsys.readouterr().out

    main(["--config", config, "report"])
    assert "✅ Alert cold already acknowledged." in capsys.readouterr().out


def test_events_without_ai(tmp_path, capsys, cold_fetch):
    main(["--config", write_config(tmp_path), "events"])
    assert "📅 No significant weather events detected." in capsys.readouterr().out


def test_events_with_ai(tmp_path, monkeypatch, capsys, cold_fetch):
    monkeypatch.setattr(
        "weather_insights.cli.generate_text",
        lambda message, max_length, url=None, log_path=None: {"response": "A quiet week."},
    )
    main(["--config", write_config(tmp_path), "events", "--ai"])
    assert "🤖 A quiet week." in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Failures exit with status 1
# ---------------------------------------------------------------------------

def test_missing_config_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--config", str(tmp_path / "missing.toml"), "report"])
    assert exc.value.code == 1
    assert "[error] Config file not found" in capsys.readouterr().out


def test_unknown_location_exits(tmp_path, monkeypatch, capsys):
    def not_found(place):
        raise LocationNotFoundError(f'Location "{place}" not found. Try a more specific name.')

    monkeypatch.setattr("weather_insights.cli.geocode", not_found)
    with pytest.raises(SystemExit) as exc:
        main(["--config", write_config(tmp_path), "report", "--location", "Atlantis"])
    assert exc.value.code == 1
    assert '[error] Location "Atlantis" not found' in capsys.readouterr().out


def test_geocoded_location_used(tmp_path, monkeypatch, capsys, cold_fetch):
    monkeypatch.setattr(
        "weather_insights.cli.geocode",
        lambda place: {"latitude": 35.7, "longitude": 139.7, "name": "Tokyo, Tokyo, Japan"},
    )
    main(["--config", write_config(tmp_path), "events", "--location", "Tokyo"])
    assert "Fetching 7-day forecast for Tokyo, Tokyo, Japan..." in capsys.readouterr().out


def test_fetch_failure_exits(tmp_path, monkeypatch, capsys):
    def failing(*args, **kwargs):
        raise RuntimeError("All 3 attempts failed for Open-Meteo forecast API.")

    monkeypatch.setattr("weather_insights.cli.fetch_snapshot", failing)
    with pytest.raises(SystemExit) as exc:
        main(["--config", write_config(tmp_path), "report"])
    assert exc.value.code == 1
    assert "All 3 attempts failed" in capsys.readouterr().out
