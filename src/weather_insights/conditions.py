# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
conditions.py — WMO weather codes and hour-to-hour condition changes.

WMO code table: https://open-meteo.com/en/docs (section "WMO Weather
interpretation codes").
"""

from weather_insights.snapshot import HourlySeries

WMO_DESCRIPTIONS = {
    0:  "Clear sky",
    1:  "Mainly clear",
    2:  "Partly cloudy",
    3:  "Overcast",
    45: "Foggy",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


def get_weather_description(code: int) -> str:
    """Human-readable label for a WMO weather code, or 'Unknown'."""
    return WMO_DESCRIPTIONS.get(code, "Unknown")


def get_weather_severity(code: int) -> str:
    """Classify a WMO code as 'normal', 'moderate' or 'severe'.

    Clear to overcast (0-3) is normal. Thunderstorms, heavy rain or
    freezing rain (65-67), heavy snow (75-77) and violent showers (82+) are
    severe. Any other precipitation code from 51 up is moderate.
    """
    if code <= 3:
        return "normal"
    if code >= 95:
        return "severe"
    if 65 <= code <= 67 or 75 <= code <= 77:
        return "severe"
    if code >= 82:
        return "severe"
    if code >= 51:
        return "moderate"
    return "normal"


def detect_rapid_weather_changes(hourly: HourlySeries | None, hours_ahead: int = 24) -> list[dict]:
    """Flag sharp changes between consecutive forecast hours.

    Three kinds of change are reported, each as a dict with hour, type,
    description, severity:
        temperature    more than 5°C in one hour (severe above 10°C)
        condition      the weather code changes to a non-normal code
        precipitation  rain probability moves more than 30 points
    """
    if hourly is None:
        return []

    temps = hourly.temperature[:hours_ahead]
    codes = hourly.weather_code[:hours_ahead]
    probs = hourly.precipitation_probability[:hours_ahead]
    changes = []

    for i in range(1, max(len(temps), len(codes), len(probs))):
        if i < len(temps):
            delta = abs(temps[i] - temps[i - 1])
            if delta > 5:
                changes.append({
                    "hour":        i,
                    "type":        "temperature",
                    "description": (
                        f"Rapid temperature {'rise' if temps[i] > temps[i - 1] else 'drop'} "
                        f"of {delta:.1f}°C"
                    ),
                    "severity":    "severe" if delta > 10 else "moderate",
                })

        if i < len(codes) and codes[i] != codes[i - 1]:
            level = get_weather_severity(codes[i])
            if level != "normal":
                changes.append({
                    "hour":        i,
                    "type":        "condition",
                    "description": f"Weather changing to {get_weather_description(codes[i])}",
                    "severity":    level,
                })

        if i < len(probs):
            jump = abs(probs[i] - probs[i - 1])
            if jump > 30:
                changes.append({
                    "hour":        i,
                    "type":        "precipitation",
                    "description": (
                        f"Precipitation probability "
                        f"{'increasing' if probs[i] > probs[i - 1] else 'decreasing'} by {jump:.0f}%"
                    ),
                    "severity":    "moderate" if probs[i] > 70 else "normal",
                })

    return changes
