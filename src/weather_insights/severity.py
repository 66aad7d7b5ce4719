# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
severity.py — Colour and severity bands for single weather readings.

Each metric has an ordered ladder of (operator, threshold, colour, label,
severity) rows, read top-down; the first row whose comparison holds wins
and the last row is the catch-all. Colours are hex strings.

Units: temperature °C, humidity %, wind km/h, uv index, precipitation as a
probability in %, visibility in km, pressure hPa, cloud_cover %.
"""

import operator

_GE = operator.ge
_LT = operator.lt

# A catch-all row uses threshold None
LADDERS: dict[str, list[tuple]] = {
    "temperature": [
        (_GE, 40,   "#DC2626", "Extreme Heat",  "critical"),
        (_GE, 35,   "#EA580C", "Very Hot",      "high"),
        (_GE, 30,   "#F59E0B", "Hot",           "moderate"),
        (_GE, 25,   "#10B981", "Warm",          "low"),
        (_GE, 15,   "#06B6D4", "Comfortable",   "low"),
        (_GE, 10,   "#3B82F6", "Cool",          "low"),
        (_GE, 0,    "#6366F1", "Cold",          "moderate"),
        (_GE, None, "#A5F3FC", "Freezing",      "high"),
    ],
    "humidity": [
        (_GE, 85,   "#DC2626", "Very Humid",    "high"),
        (_GE, 70,   "#F59E0B", "Humid",         "moderate"),
        (_GE, 30,   "#10B981", "Comfortable",   "low"),
        (_GE, 20,   "#F59E0B", "Dry",           "moderate"),
        (_GE, None, "#EA580C", "Very Dry",      "high"),
    ],
    "wind": [
        (_GE, 75,   "#7C2D12", "Dangerous",     "critical"),
        (_GE, 60,   "#DC2626", "Very Strong",   "high"),
        (_GE, 40,   "#EA580C", "Strong",        "moderate"),
        (_GE, 20,   "#F59E0B", "Windy",         "low"),
        (_GE, 10,   "#10B981", "Breezy",        "low"),
        (_GE, None, "#06B6D4", "Calm",          "low"),
    ],
    "uv": [
        (_GE, 11,   "#7C2D12", "Extreme",       "critical"),
        (_GE, 8,    "#DC2626", "Very High",     "high"),
        (_GE, 6,    "#EA580C", "High",          "moderate"),
        (_GE, 3,    "#F59E0B", "Moderate",      "low"),
        (_GE, None, "#10B981", "Low",           "low"),
    ],
    "precipitation": [
        (_GE, 80,   "#DC2626", "Very Likely",   "high"),
        (_GE, 60,   "#EA580C", "Likely",        "moderate"),
        (_GE, 40,   "#F59E0B", "Possible",      "low"),
        (_GE, 20,   "#10B981", "Unlikely",      "low"),
        (_GE, None, "#06B6D4", "Very Unlikely", "low"),
    ],
    "visibility": [
        (_LT, 1,    "#DC2626", "Very Poor",     "high"),
        (_LT, 4,    "#EA580C", "Poor",          "moderate"),
        (_LT, 10,   "#F59E0B", "Moderate",      "low"),
        (_LT, None, "#10B981", "Good",          "low"),
    ],
    # Standard atmospheric pressure is 1013 hPa
    "pressure": [
        (_LT, 980,  "#DC2626", "Very Low",      "high"),
        (_LT, 1000, "#EA580C", "Low",           "moderate"),
        (_GE, 1030, "#3B82F6", "Very High",     "moderate"),
        (_GE, 1020, "#06B6D4", "High",          "low"),
        (_GE, None, "#10B981", "Normal",        "low"),
    ],
    "cloud_cover": [
        (_GE, 90,   "#64748B", "Overcast",      "low"),
        (_GE, 70,   "#94A3B8", "Mostly Cloudy", "low"),
        (_GE, 40,   "#CBD5E1", "Partly Cloudy", "low"),
        (_GE, 10,   "#F59E0B", "Mostly Clear",  "low"),
        (_GE, None, "#FBBF24", "Clear",         "low"),
    ],
}

DEFAULT_BAND = {"color": "#10B981", "label": "Normal", "severity": "low"}

SEVERITY_ICONS = {
    "critical": "🚨",
    "high":     "⚠️",
    "moderate": "⚡",
}


def classify(metric: str, value: float) -> dict:
    """Return {color, label, severity} for one reading.

    Unknown metric names get the neutral "Normal" band rather than an error.
    """
    ladder = LADDERS.get(metric)
    if ladder is None:
        return dict(DEFAULT_BAND)

    for compare, threshold, color, label, severity in ladder:
        if threshold is None or compare(value, threshold):
            return {"color": color, "label": label, "severity": severity}
    return dict(DEFAULT_BAND)


def get_severity_icon(severity: str) -> str:
    """Emoji for a severity tier; low and unknown tiers get a check mark."""
    return SEVERITY_ICONS.get(severity, "✓")
