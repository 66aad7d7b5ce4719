# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
test_chart.py — Tests for the ASCII charts and text report.

bar_width is always passed so output does not depend on the terminal.
"""

from conftest import make_payload
from weather_insights.chart import (
    _bar,
    render_bar_chart,
    render_comfort_chart,
    render_events_table,
    render_hourly_table,
    render_insights_report,
)
from weather_insights.insights import CalculatorResult, compute_insights


# ---------------------------------------------------------------------------
# Bars
# ---------------------------------------------------------------------------

def test_bar_half_filled():
    assert _bar(50, 100, 10) == "█" * 5 + "░" * 5


def test_bar_clamped():
    assert _bar(150, 100, 4) == "████"
    assert _bar(-5, 100, 4) == "░░░░"


def test_bar_zero_max():
    assert _bar(10, 0, 3) == "░░░"


def test_bar_chart_rows():
    chart = render_bar_chart(["Mon", "Tue"], [10, 20], "Rain", unit=" mm", bar_width=4)
    lines = chart.splitlines()
    assert lines[0] == "Rain"
    assert lines[1] == "  Mon │██░░│  10 mm"
    assert lines[2] == "  Tue │████│  20 mm"


# ---------------------------------------------------------------------------
# Comfort / hourly / events
# ---------------------------------------------------------------------------

def test_comfort_chart_without_hours():
    assert render_comfort_chart({"current_comfort": 50, "hourly_comfort": []}) == \
        "Comfort: 50/100 (no hourly data)"


def test_comfort_chart_lists_windows():
    comfort = {
        "current_comfort": 82,
        "hourly_comfort": [{"time": "09:00", "score": 80}, {"time": "10:00", "score": 90}],
        "optimal_windows": [{
            "start": "09:00", "end": "10:00", "duration": 2,
            "score": 85, "activity": "Morning exercise",
        }],
    }
    chart = render_comfort_chart(comfort, bar_width=10)
    assert chart.startswith("Comfort index (now 82/100)")
    assert "  09:00 │████████░░│     80" in chart
    assert "Best windows:\n  09:00-10:00  2h  score 85  Morning exercise" in chart


def test_hourly_table_sky_column():
    rows = [{"time": "00:00", "temperature": 21.0, "feels_like": 20.0, "precip": 0,
             "wind": 5, "cloud": 50, "weather_code": 95}]
    table = render_hourly_table(rows, "London")
    assert table.splitlines()[0] == "📍 London — next 1 hours"
    assert "Thunderstorm" in table


def test_events_table_empty():
    assert render_events_table([], "No significant weather events detected.") == \
        "📅 No significant weather events detected."


def test_events_table_rows():
    events = [{"day": "Tomorrow", "type": "heatwave", "probability": 80,
               "severity": "high", "description": "Hot"}]
    table = render_events_table(events, "1 event")
    assert "Tomorrow    heatwave        80%  high      Hot" in table


# ---------------------------------------------------------------------------
# render_insights_report
# ---------------------------------------------------------------------------

def test_report_contains_sections(payload):
    report = render_insights_report(compute_insights(payload), "London")
    assert report.startswith("📍 London — weather insights")
    assert "Alert: general (low)" in report
    assert "Comfort index" in report


def test_report_shows_errors():
    bad = make_payload()
    bad["daily"]["uv_index_max"] = "high"
    report = render_insights_report(compute_insights(bad), "London")
    assert "❌ comfort: Series daily.uv_index_max must be an array" in report
    assert "Comfort index" not in report


def test_report_skips_missing_results():
    results = {"alert": CalculatorResult("alert", {"type": "cold", "severity": "high"})}
    report = render_insights_report(results, "Oslo")
    assert report == "📍 Oslo — weather insights\n\n⚠️ Alert: cold (high)"
