# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
patterns.py — Qualitative weather patterns from fixed thresholds.

Every detector looks at a short slice of the forecast (24 or 48 hours, or
today's daily values) and returns a single record or None. Anomaly
detection is the exception and returns a list.

Confidence values are fixed per rule. They describe how strongly the rule
fired, not a calibrated probability.
"""

from __future__ import annotations

from weather_insights.series import mean, round_half_up, safe_max, safe_min
from weather_insights.snapshot import CurrentConditions, DailySeries, HourlySeries, WeatherSnapshot


def detect_precipitation_pattern(hourly: HourlySeries) -> dict | None:
    """Extended or intermittent rain from hours with > 60% chance in the next 48h."""
    probs = hourly.precipitation_probability[:48]
    wet_hours = sum(1 for p in probs if p > 60)

    if wet_hours > 12:
        avg = mean(probs)
        return {
            "type":        "recurring",
            "confidence":  min(95, round_half_up(avg)),
            "title":       "Extended Wet Period Detected",
            "description": (
                f"Weather models show sustained precipitation probability averaging {avg:.0f}% "
                "over the next 48 hours. This pattern suggests a slow-moving weather system "
                "or frontal boundary."
            ),
            "icon":        "🌧",
            "timeframe":   "Next 48 hours",
        }
    if wet_hours > 6:
        return {
            "type":        "recurring",
            "confidence":  75,
            "title":       "Intermittent Rain Pattern",
            "description": (
                f"Scattered showers expected with {wet_hours} hours of elevated precipitation "
                "probability. Typical of unstable atmospheric conditions."
            ),
            "icon":        "🌦",
            "timeframe":   "Next 24-48 hours",
        }
    return None


def detect_temperature_trend(daily: DailySeries) -> dict | None:
    """Warming or cooling when at least four day-over-day highs move the same way."""
    highs = daily.temperature_max[:7]
    rising = sum(1 for a, b in zip(highs, highs[1:]) if b > a)
    falling = sum(1 for a, b in zip(highs, highs[1:]) if b < a)

    if rising >= 4:
        per_day = (highs[-1] - highs[0]) / len(highs)
        return {
            "type":        "prediction",
            "confidence":  85,
            "title":       "Warming Trend Identified",
            "description": (
                "Temperature analysis shows consistent warming over the next 7 days, "
                f"averaging +{per_day:.1f}°C per day. This indicates a high-pressure system "
                "or warm air mass moving into the region."
            ),
            "icon":        "📈",
            "timeframe":   "Next 7 days",
        }
    if falling >= 4:
        per_day = (highs[0] - highs[-1]) / len(highs)
        return {
            "type":        "prediction",
            "confidence":  85,
            "title":       "Cooling Trend Identified",
            "description": (
                "Temperature forecast shows consistent cooling over the next 7 days, "
                f"averaging -{per_day:.1f}°C per day. Cold front or polar air mass approaching."
            ),
            "icon":        "📉",
            "timeframe":   "Next 7 days",
        }
    return None


def detect_temperature_volatility(hourly: HourlySeries) -> dict | None:
    """Anomaly when hourly temperatures swing more than 15°C within 48h."""
    temps = hourly.temperature[:48]
    if not temps:
        return None
    swing = max(temps) - min(temps)
    if swing > 15:
        return {
            "type":        "anomaly",
            "confidence":  90,
            "title":       "High Temperature Volatility",
            "description": (
                f"Expect significant temperature fluctuations of up to {swing:.1f}°C over the "
                "next 48 hours. This indicates transitional weather with competing air masses."
            ),
            "icon":        "⚡",
            "timeframe":   "Next 48 hours",
        }
    return None


def detect_pressure_pattern(current: CurrentConditions | None, hourly: HourlySeries) -> dict | None:
    """High/low pressure system, or a rapid change over the next 24 hours.

    The change rate compares the 24th forecast hour (or the last one
    available) with the current reading, in hPa per hour.
    """
    if current is None or current.pressure_msl is None:
        return None
    pressure = current.pressure_msl

    if pressure > 1020:
        return {
            "type":        "recurring",
            "confidence":  88,
            "title":       "High Pressure System Dominant",
            "description": (
                f"Atmospheric pressure at {pressure:.0f} hPa indicates a strong high-pressure "
                "system. Expect generally stable, clear conditions with light winds. "
                "Good weather for outdoor activities."
            ),
            "icon":        "☀️",
            "timeframe":   "Current",
        }
    if pressure < 1000:
        return {
            "type":        "recurring",
            "confidence":  88,
            "title":       "Low Pressure System Active",
            "description": (
                f"Atmospheric pressure at {pressure:.0f} hPa indicates a low-pressure system. "
                "Associated with unsettled weather, increased cloudiness, and higher "
                "precipitation probability."
            ),
            "icon":        "☁️",
            "timeframe":   "Current",
        }

    upcoming = hourly.pressure_msl[:24]
    if not upcoming:
        return None
    rate = (upcoming[-1] - pressure) / 24
    if abs(rate) > 0.5:
        direction = "rising" if rate > 0 else "falling"
        implication = "improving" if rate > 0 else "deteriorating"
        return {
            "type":        "prediction",
            "confidence":  82,
            "title":       f"Rapidly {direction.capitalize()} Pressure",
            "description": (
                f"Pressure {direction} at {abs(rate):.1f} hPa/hour over the next 24 hours, "
                f"suggesting {implication} weather conditions. Monitor for weather changes."
            ),
            "icon":        "📊",
            "timeframe":   "Next 24 hours",
        }
    return None


def detect_humidity_pattern(hourly: HourlySeries) -> dict | None:
    """Persistently humid or very dry air from the 24h average."""
    humidity = hourly.humidity[:24]
    if not humidity:
        return None
    avg = mean(humidity)

    if avg > 85:
        return {
            "type":        "recurring",
            "confidence":  90,
            "title":       "Persistent High Humidity",
            "description": (
                f"Humidity levels averaging {avg:.0f}% over the next 24 hours. Saturated air "
                "mass present, increasing heat index and potential for fog or mist formation."
            ),
            "icon":        "💧",
            "timeframe":   "Next 24 hours",
        }
    if avg < 30:
        return {
            "type":        "recurring",
            "confidence":  85,
            "title":       "Very Dry Air Mass",
            "description": (
                f"Humidity levels averaging {avg:.0f}% indicate very dry conditions. "
                "Increased fire risk, static electricity, and potential respiratory discomfort."
            ),
            "icon":        "🏜",
            "timeframe":   "Next 24 hours",
        }
    return None


def detect_wind_pattern(hourly: HourlySeries) -> dict | None:
    """Severe gusts take priority over sustained strong wind."""
    max_gust = safe_max(hourly.wind_gusts[:24])
    if max_gust is not None and max_gust > 60:
        return {
            "type":        "anomaly",
            "confidence":  95,
            "title":       "Severe Wind Event Expected",
            "description": (
                f"Wind gusts forecast to reach {max_gust:.0f} km/h. Strong pressure gradients "
                "driving intense air movement. Secure loose objects, avoid exposed areas."
            ),
            "icon":        "💨",
            "timeframe":   "Next 24 hours",
        }

    speeds = hourly.wind_speed[:24]
    avg = mean(speeds)
    if speeds and avg > 30:
        return {
            "type":        "recurring",
            "confidence":  85,
            "title":       "Sustained Strong Winds",
            "description": (
                f"Average wind speeds of {avg:.0f} km/h expected. Persistent strong winds "
                "suggest active weather system or topographic wind channeling."
            ),
            "icon":        "💨",
            "timeframe":   "Next 24 hours",
        }
    return None


def detect_anomalies(daily: DailySeries) -> list[dict]:
    """Today's UV alert plus at most one of heat wave / freeze.

    Heat wave (max >= 35°C) wins over freeze (min <= 0°C) when both hold.
    """
    anomalies: list[dict] = []

    max_uv = daily.uv_index_max[0] if daily.uv_index_max else None
    if max_uv is not None and max_uv >= 8:
        anomalies.append({
            "type":        "anomaly",
            "confidence":  95,
            "title":       "Very High UV Index Alert",
            "description": (
                f"UV index forecast at {max_uv:.1f} (Very High/Extreme). Skin damage can occur "
                "in less than 15 minutes. Use SPF 30+ sunscreen."
            ),
            "icon":        "☀️",
            "timeframe":   "Today",
        })

    max_temp = daily.temperature_max[0] if daily.temperature_max else None
    min_temp = daily.temperature_min[0] if daily.temperature_min else None
    if max_temp is not None and max_temp >= 35:
        anomalies.append({
            "type":        "anomaly",
            "confidence":  92,
            "title":       "Heat Wave Conditions",
            "description": (
                f"Temperature reaching {max_temp:.1f}°C. Extreme heat event. High risk of heat "
                "exhaustion and heat stroke. Stay hydrated, seek air conditioning."
            ),
            "icon":        "🌡",
            "timeframe":   "Today",
        })
    elif min_temp is not None and min_temp <= 0:
        anomalies.append({
            "type":        "anomaly",
            "confidence":  92,
            "title":       "Freezing Conditions Expected",
            "description": (
                f"Temperature dropping to {min_temp:.1f}°C. Below freezing point. Risk of ice "
                "formation on roads and surfaces. Protect sensitive plants and pipes."
            ),
            "icon":        "❄️",
            "timeframe":   "Today",
        })

    return anomalies


def analyze_weather_patterns(snapshot: WeatherSnapshot | None) -> dict:
    """Run every pattern detector over one forecast.

    Returns dict with key patterns (list of dicts with type, confidence,
    title, description, icon, timeframe). Empty when the hourly or daily
    group is missing.
    """
    if snapshot is None or snapshot.hourly is None or snapshot.daily is None:
        return {"patterns": []}

    hourly, daily = snapshot.hourly, snapshot.daily
    found = [
        detect_precipitation_pattern(hourly),
        detect_temperature_trend(daily),
        detect_temperature_volatility(hourly),
        detect_pressure_pattern(snapshot.current, hourly),
        detect_humidity_pattern(hourly),
        detect_wind_pattern(hourly),
    ]
    patterns = [p for p in found if p is not None]
    patterns.extend(detect_anomalies(daily))
    return {"patterns": patterns}
