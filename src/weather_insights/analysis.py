# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
analysis.py — Short-range heuristics over the next 12-24 forecast hours.

Hour-to-hour transitions, how volatile the day looks, what to wear, and a
simple outdoor-window finder that also weighs cloud cover and rain chance.
The comfort-index windows in comfort.py are the more thorough version of
the last one; this module only needs the hourly group.
"""

from __future__ import annotations

from weather_insights.series import safe_max, std_dev
from weather_insights.snapshot import HourlySeries, WeatherSnapshot
from weather_insights.utils import fmt_hour


def _at(series: tuple, i: int) -> float:
    return series[i] if i < len(series) else 0.0


def analyze_hourly_transitions(hourly: HourlySeries, hours: int = 12) -> list[dict]:
    """The five most significant hour-to-hour changes in the next `hours` hours.

    Significance adds up each change that passes its threshold:
    temperature > 3°C (weighted x2), rain chance > 20 points, wind > 10 km/h,
    cloud cover > 30 points (weighted x0.5). Only hours scoring above 10
    are kept.
    """
    transitions = []
    for i in range(1, min(hours, len(hourly.time))):
        temp = _at(hourly.temperature, i) - _at(hourly.temperature, i - 1)
        precip = (_at(hourly.precipitation_probability, i)
                  - _at(hourly.precipitation_probability, i - 1))
        wind = _at(hourly.wind_speed, i) - _at(hourly.wind_speed, i - 1)
        cloud = _at(hourly.cloud_cover, i) - _at(hourly.cloud_cover, i - 1)

        significance = 0.0
        if abs(temp) > 3:
            significance += abs(temp) * 2
        if abs(precip) > 20:
            significance += abs(precip)
        if abs(wind) > 10:
            significance += abs(wind)
        if abs(cloud) > 30:
            significance += abs(cloud) / 2

        if significance > 10:
            transitions.append({
                "hour":           i,
                "time":           fmt_hour(hourly.time[i]),
                "temp_change":    temp,
                "precip_change":  precip,
                "wind_change":    wind,
                "cloud_change":   cloud,
                "significance":   significance,
            })

    return sorted(transitions, key=lambda t: -t["significance"])[:5]


def generate_clothing_recommendations(snapshot: WeatherSnapshot) -> list[dict]:
    """What to wear over the next 12 hours.

    Returns list of dicts with keys: icon, item, reason.
    """
    hourly = snapshot.hourly
    if hourly is None or not hourly.temperature:
        return []
    current = snapshot.current

    temps = hourly.temperature[:12]
    low, high = min(temps), max(temps)
    spread = high - low
    max_precip = safe_max(hourly.precipitation_probability[:12], default=0.0)

    recs = []
    if spread > 8:
        recs.append({
            "icon":   "🧥",
            "item":   "Layered clothing",
            "reason": f"Temperature will swing {spread:.1f}°C ({low:.0f}° to {high:.0f}°C)",
        })
    if low < 15:
        recs.append({
            "icon":   "🧣",
            "item":   "Jacket or sweater",
            "reason": f"Temperature drops to {low:.0f}°C",
        })
    if max_precip > 30:
        recs.append({
            "icon":   "☂️",
            "item":   "Umbrella",
            "reason": f"{max_precip:.0f}% chance of rain",
        })

    uv = None
    if current is not None and current.uv_index is not None:
        uv = current.uv_index
    elif hourly.uv_index:
        uv = hourly.uv_index[0]
    if uv is not None and uv > 3:
        recs.append({
            "icon":   "🕶️",
            "item":   "Sunscreen & sunglasses",
            "reason": f"UV index: {uv:.1f}",
        })

    winds = list(hourly.wind_speed[:12])
    if current is not None:
        winds.append(current.wind_speed)
    peak_wind = safe_max(winds)
    if peak_wind is not None and peak_wind > 25:
        recs.append({
            "icon":   "🧢",
            "item":   "Secure hat/cap",
            "reason": f"Strong winds up to {peak_wind:.0f} km/h",
        })

    return recs


def _outdoor_score(temp: float, precip: float, wind: float, cloud: float) -> float:
    score = 100.0
    if temp < 10 or temp > 30:
        score -= abs(temp - 20) * 2
    score -= precip * 0.8
    score -= max(0.0, (wind - 20) * 2)
    score -= (cloud - 50) * 0.3
    return score


def find_optimal_time_windows(hourly: HourlySeries, hours: int = 12) -> list[dict]:
    """Runs of at least two good outdoor hours in the next `hours` hours.

    An hour is good when its outdoor score is above 60 and rain chance is
    below 30%. A window's score is the score of its first hour. The best
    three windows are returned, highest score first.
    """
    limit = min(hours, len(hourly.time))
    windows = []
    start = None

    def close(end: int) -> None:
        if end - start + 1 >= 2:
            windows.append({
                "start":      start,
                "end":        end,
                "start_time": fmt_hour(hourly.time[start]),
                "end_time":   fmt_hour(hourly.time[end]),
                "duration":   end - start + 1,
                "score":      start_score,
            })

    start_score = 0.0
    for i in range(limit):
        precip = _at(hourly.precipitation_probability, i)
        score = _outdoor_score(
            _at(hourly.temperature, i), precip, _at(hourly.wind_speed, i), _at(hourly.cloud_cover, i),
        )
        good = score > 60 and precip < 30
        if good and start is None:
            start, start_score = i, score
        elif not good and start is not None:
            close(i - 1)
            start = None

    if start is not None:
        close(limit - 1)

    return sorted(windows, key=lambda w: -w["score"])[:3]


def analyze_weather_volatility(hourly: HourlySeries, hours: int = 24) -> dict:
    """How changeable the next `hours` hours look.

    score = 2 x std(temperature) + 0.5 x std(rain chance) + 1.5 x std(wind);
    above 50 is highly_volatile, above 30 moderate, otherwise stable.
    """
    temp_sd = std_dev(hourly.temperature[:hours])
    precip_sd = std_dev(hourly.precipitation_probability[:hours])
    wind_sd = std_dev(hourly.wind_speed[:hours])
    score = temp_sd * 2 + precip_sd * 0.5 + wind_sd * 1.5

    if score > 50:
        level, description = "highly_volatile", "Expect significant weather changes throughout the day"
    elif score > 30:
        level, description = "moderate", "Some weather variations expected"
    else:
        level, description = "stable", "Weather conditions are relatively stable"

    return {
        "score":                score,
        "level":                level,
        "description":          description,
        "temp_variability":     temp_sd,
        "precip_variability":   precip_sd,
        "wind_variability":     wind_sd,
    }


def generate_dynamic_insights(snapshot: WeatherSnapshot) -> list[dict]:
    """Short prioritised messages built from volatility, transitions and windows.

    Returns list of dicts with keys: type, priority, message.
    """
    hourly = snapshot.hourly
    if hourly is None:
        return []

    insights = []
    volatility = analyze_weather_volatility(hourly)
    if volatility["level"] == "highly_volatile":
        insights.append({
            "type":     "volatility",
            "priority": "high",
            "message":  (
                f"{volatility['description']}. Temperature variability: "
                f"{volatility['temp_variability']:.1f}°C, prepare for changing conditions."
            ),
        })

    transitions = analyze_hourly_transitions(hourly)
    if transitions:
        top = transitions[0]
        parts = []
        if abs(top["temp_change"]) > 3:
            direction = "warming" if top["temp_change"] > 0 else "cooling"
            parts.append(f"{direction} by {abs(top['temp_change']):.1f}°C")
        if abs(top["precip_change"]) > 20:
            parts.append("rain likely" if top["precip_change"] > 0 else "clearing")
        if parts:
            insights.append({
                "type":     "transition",
                "priority": "high",
                "message":  f"Major change at {top['time']}: {', '.join(parts)}",
            })

    windows = find_optimal_time_windows(hourly)
    if windows:
        best = windows[0]
        insights.append({
            "type":     "opportunity",
            "priority": "medium",
            "message":  (
                f"Best outdoor window: {best['start_time']} - {best['end_time']} "
                f"({best['duration']} hours)"
            ),
        })

    return insights


def hourly_condition_summary(hourly: HourlySeries, hours: int = 12) -> list[dict]:
    """Flat per-hour rows for the terminal table."""
    rows = []
    for i, t in enumerate(hourly.time[:hours]):
        rows.append({
            "time":         fmt_hour(t),
            "temperature":  _at(hourly.temperature, i),
            "feels_like":   _at(hourly.feels_like, i),
            "precip":       _at(hourly.precipitation_probability, i),
            "wind":         _at(hourly.wind_speed, i),
            "cloud":        _at(hourly.cloud_cover, i),
            "weather_code": int(_at(hourly.weather_code, i)),
            "uv":           _at(hourly.uv_index, i),
        })
    return rows
