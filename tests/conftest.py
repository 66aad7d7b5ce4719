# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
conftest.py — Fake Open-Meteo payloads shared by the test modules.

The defaults describe a calm, mild early-June week: 21°C, 50% humidity,
light wind, no rain, 1013 hPa. Tests override only what they exercise.
"""

from datetime import datetime, timedelta

import pytest

BASE_TIME = datetime(2024, 6, 1, 0, 0)

CURRENT_DEFAULTS = {
    "time": "2024-06-01T00:00",
    "temperature_2m": 21.0,
    "apparent_temperature": 21.0,
    "relative_humidity_2m": 50,
    "precipitation": 0.0,
    "weather_code": 0,
    "cloud_cover": 50,
    "pressure_msl": 1013.0,
    "wind_speed_10m": 5.0,
    "wind_direction_10m": 180.0,
    "wind_gusts_10m": 10.0,
}

HOURLY_DEFAULTS = {
    "temperature_2m": 21.0,
    "apparent_temperature": 21.0,
    "relative_humidity_2m": 50,
    "dew_point_2m": 10.0,
    "precipitation": 0.0,
    "precipitation_probability": 0,
    "weather_code": 0,
    "cloud_cover": 50,
    "visibility": 20000.0,
    "wind_speed_10m": 5.0,
    "wind_gusts_10m": 10.0,
    "uv_index": 2.0,
    "pressure_msl": 1013.0,
}

DAILY_DEFAULTS = {
    "weather_code": 0,
    "temperature_2m_max": 22.0,
    "temperature_2m_min": 14.0,
    "uv_index_max": 3.0,
    "precipitation_sum": 0.0,
    "precipitation_probability_max": 0,
    "wind_speed_10m_max": 10.0,
    "wind_gusts_10m_max": 20.0,
    "relative_humidity_2m_max": 60,
    "cloud_cover_mean": 50,
}


def _series(defaults: dict, overrides: dict, n: int) -> dict:
    group = {}
    for key, default in defaults.items():
        value = overrides.get(key, default)
        group[key] = list(value) if isinstance(value, (list, tuple)) else [value] * n
    return group


def make_payload(
    hours: int = 48,
    days: int = 7,
    current: dict | None = None,
    hourly: dict | None = None,
    daily: dict | None = None,
) -> dict:
    """Build a full current/hourly/daily payload.

    Override values may be scalars (repeated for every step) or lists
    (used as-is, so their length must match `hours` or `days`).
    """
    hourly_group = {
        "time": [(BASE_TIME + timedelta(hours=i)).strftime("%Y-%m-%dT%H:%M") for i in range(hours)]
    }
    hourly_group.update(_series(HOURLY_DEFAULTS, hourly or {}, hours))

    daily_group = {
        "time": [(BASE_TIME + timedelta(days=i)).strftime("%Y-%m-%d") for i in range(days)]
    }
    daily_group.update(_series(DAILY_DEFAULTS, daily or {}, days))

    return {
        "latitude": 51.5,
        "longitude": -0.12,
        "current": {**CURRENT_DEFAULTS, **(current or {})},
        "hourly": hourly_group,
        "daily": daily_group,
    }


@pytest.fixture
def payload():
    """The calm default payload."""
    return make_payload()


@pytest.fixture
def build_payload():
    """make_payload() itself, for tests that need overrides."""
    return make_payload
