# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
insights.py — Run every calculator over one forecast payload.

The payload is validated once. Each calculator then receives the same
immutable snapshot and its output is wrapped in a CalculatorResult, so a
caller can tell "ran, nothing triggered" (error is None, value may be
empty) from "the input was invalid" (error set, value None).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from weather_insights.analysis import generate_clothing_recommendations, generate_dynamic_insights
from weather_insights.comfort import calculate_comfort_index
from weather_insights.conditions import detect_rapid_weather_changes
from weather_insights.events import detect_weather_events, generate_event_summary
from weather_insights.impacts import forecast_weather_impacts
from weather_insights.patterns import analyze_weather_patterns
from weather_insights.rules import determine_alert_type, get_alert_severity
from weather_insights.snapshot import SnapshotError, WeatherSnapshot, parse_snapshot
from weather_insights.trends import analyze_weather_trends


@dataclass(frozen=True)
class CalculatorResult:
    """Outcome of one calculator: a value or the reason there is none."""

    name: str
    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _events(snapshot: WeatherSnapshot) -> dict:
    events = detect_weather_events(snapshot)
    return {"events": events, "summary": generate_event_summary(events)}


def _alert(snapshot: WeatherSnapshot) -> dict:
    alert_type = determine_alert_type(snapshot)
    return {"type": alert_type, "severity": get_alert_severity(alert_type)}


CALCULATORS: dict[str, Callable[[WeatherSnapshot], Any]] = {
    "comfort":       calculate_comfort_index,
    "trends":        analyze_weather_trends,
    "patterns":      analyze_weather_patterns,
    "impacts":       forecast_weather_impacts,
    "events":        _events,
    "alert":         _alert,
    "rapid_changes": lambda s: detect_rapid_weather_changes(s.hourly),
    "clothing":      generate_clothing_recommendations,
    "dynamic":       generate_dynamic_insights,
}


def run_calculators(snapshot: WeatherSnapshot) -> dict[str, CalculatorResult]:
    """Apply every calculator to an already-validated snapshot."""
    return {
        name: CalculatorResult(name=name, value=calculator(snapshot))
        for name, calculator in CALCULATORS.items()
    }


def compute_insights(payload: Mapping | WeatherSnapshot) -> dict[str, CalculatorResult]:
    """Validate a raw Open-Meteo payload and run every calculator on it.

    Args:
        payload: Decoded API response, or a WeatherSnapshot parsed earlier.

    Returns:
        Dict of calculator name -> CalculatorResult, in CALCULATORS order.
        When the payload is malformed, every result carries the validation
        message as its error.
    """
    if isinstance(payload, WeatherSnapshot):
        return run_calculators(payload)
    try:
        snapshot = parse_snapshot(payload)
    except SnapshotError as e:
        return {name: CalculatorResult(name=name, error=str(e)) for name in CALCULATORS}
    return run_calculators(snapshot)
