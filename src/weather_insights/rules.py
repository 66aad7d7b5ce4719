# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
rules.py — Pick the single most important alert for the current conditions.

determine_alert_type() walks a priority ladder, most critical first, and
returns the first alert type whose check passes. Every check reads the
current group, plus today's UV maximum from the daily group.
"""

from typing import Optional

from weather_insights.snapshot import WeatherSnapshot

# (alert type, check) in priority order; the check receives
# (temperature, humidity, wind_speed, precipitation, uv_today)
ALERT_LADDER = [
    ("extreme-heat",   lambda t, h, w, p, uv: t >= 40),
    ("freezing",       lambda t, h, w, p, uv: t < 0),
    ("dangerous-wind", lambda t, h, w, p, uv: w >= 60),
    ("heavy-rain",     lambda t, h, w, p, uv: p > 10),
    ("high-uv",        lambda t, h, w, p, uv: uv >= 8),
    ("high-heat",      lambda t, h, w, p, uv: t >= 35),
    ("cold",           lambda t, h, w, p, uv: t < 5),
    ("strong-wind",    lambda t, h, w, p, uv: w >= 40),
    ("high-humidity",  lambda t, h, w, p, uv: h >= 85),
    ("precipitation",  lambda t, h, w, p, uv: p > 0),
]

CRITICAL_ALERTS = {"extreme-heat", "freezing", "dangerous-wind", "heavy-rain"}
HIGH_ALERTS = {"high-heat", "cold", "strong-wind", "high-uv"}
MODERATE_ALERTS = {"high-humidity", "precipitation"}


def determine_alert_type(snapshot: Optional[WeatherSnapshot]) -> str:
    """Return the highest-priority alert type, or 'general' if none applies."""
    if snapshot is None or snapshot.current is None:
        return "general"

    current = snapshot.current
    daily = snapshot.daily
    uv_today = daily.uv_index_max[0] if daily is not None and daily.uv_index_max else 0.0

    values = (
        current.temperature,
        current.humidity,
        current.wind_speed,
        current.precipitation,
        uv_today,
    )
    for alert_type, check in ALERT_LADDER:
        if check(*values):
            return alert_type
    return "general"


def get_alert_severity(alert_type: str) -> str:
    """Map an alert type to critical / high / moderate / low."""
    if alert_type in CRITICAL_ALERTS:
        return "critical"
    if alert_type in HIGH_ALERTS:
        return "high"
    if alert_type in MODERATE_ALERTS:
        return "moderate"
    return "low"
