# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
weather.py — Fetch a current/hourly/daily forecast from Open-Meteo.

Open-Meteo is free and requires no API key. One request returns all three
groups; parse_snapshot() in snapshot.py turns the JSON into a
WeatherSnapshot.

API docs: https://open-meteo.com/en/docs
"""

import requests

from weather_insights.snapshot import SnapshotError, WeatherSnapshot, parse_snapshot
from weather_insights.utils import DEFAULT_LOG_PATH, with_retry


OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"

CURRENT_VARIABLES = [
    "temperature_2m",
    "apparent_temperature",
    "relative_humidity_2m",
    "precipitation",
    "weather_code",
    "cloud_cover",
    "pressure_msl",
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
]

HOURLY_VARIABLES = [
    "temperature_2m",
    "apparent_temperature",
    "relative_humidity_2m",
    "dew_point_2m",
    "precipitation",
    "precipitation_probability",
    "weather_code",
    "cloud_cover",
    "visibility",
    "wind_speed_10m",
    "wind_gusts_10m",
    "uv_index",
    "pressure_msl",
]

DAILY_VARIABLES = [
    "weather_code",
    "temperature_2m_max",
    "temperature_2m_min",
    "uv_index_max",
    "precipitation_sum",
    "precipitation_probability_max",
    "wind_speed_10m_max",
    "wind_gusts_10m_max",
    "relative_humidity_2m_max",
    "cloud_cover_mean",
]


COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


def degrees_to_compass(degrees: float) -> str:
    """Nearest of the 16 compass points for a bearing (0 = N, 90 = E)."""
    sector = 360 / len(COMPASS_POINTS)
    return COMPASS_POINTS[round(degrees / sector) % len(COMPASS_POINTS)]


def fetch_forecast_payload(
    latitude: float,
    longitude: float,
    forecast_days: int = 7,
    log_path=DEFAULT_LOG_PATH,
) -> dict:
    """Fetch the raw Open-Meteo JSON for one location.

    Args:
        latitude: Location latitude in decimal degrees.
        longitude: Location longitude in decimal degrees.
        forecast_days: Number of days to fetch (7 or 14 in practice, max 16).
        log_path: Log file for the final retry failure.

    Returns:
        Decoded JSON dict with current, hourly and daily groups.

    Raises:
        RuntimeError: If all retry attempts fail.
    """
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current": ",".join(CURRENT_VARIABLES),
        "hourly": ",".join(HOURLY_VARIABLES),
        "daily": ",".join(DAILY_VARIABLES),
        "forecast_days": forecast_days,
        "timezone": "auto",
    }

    def _call():
        r = requests.get(OPEN_METEO_URL, params=params, timeout=10)
        r.raise_for_status()
        return r.json()

    return with_retry(_call, label="Open-Meteo forecast API", log_path=log_path)


def fetch_snapshot(
    latitude: float,
    longitude: float,
    forecast_days: int = 7,
    log_path=DEFAULT_LOG_PATH,
) -> WeatherSnapshot:
    """Fetch and validate a forecast in one step.

    Raises:
        RuntimeError: If all retry attempts fail, or the API answered with a
            payload that does not have the expected structure.
    """
    data = fetch_forecast_payload(latitude, longitude, forecast_days, log_path=log_path)
    try:
        snapshot = parse_snapshot(data)
    except SnapshotError as e:
        raise RuntimeError(f"Unexpected API response structure: {e}") from e

    if snapshot.current is None and snapshot.hourly is None and snapshot.daily is None:
        raise RuntimeError("Unexpected API response structure: no current, hourly or daily data")
    return snapshot
