# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
trends.py — Week-over-week comparison, trend insights and regression slopes.

Works on the first seven days of the daily forecast. The weekly comparison
splits the week into days [0, 3) and [4, 7); day 3 sits in neither half, and
every downstream direction and percentage depends on that split.
"""

from __future__ import annotations

from datetime import date

from weather_insights.series import linear_regression, mean, safe_max, safe_min, std_dev
from weather_insights.snapshot import DailySeries, WeatherSnapshot

WEEK_DAYS = 7
MIN_COMPARISON_DAYS = 5

# Simplified northern-hemisphere monthly mean temperature (°C)
SEASONAL_AVERAGES = {
    1: 5, 2: 6, 3: 9, 4: 12, 5: 16, 6: 19,
    7: 21, 8: 21, 9: 18, 10: 14, 11: 9, 12: 6,
}

_DIRECTIONS = {
    "temperature":   ("warmer", "cooler", "°C"),
    "precipitation": ("wetter", "drier", "mm"),
    "wind":          ("windier", "calmer", " km/h"),
}


def _week(series: tuple) -> list[float]:
    return list(series[:WEEK_DAYS])


def _compare_halves(values: list[float], metric: str) -> dict:
    first = mean(values[0:3])
    second = mean(values[4:7])
    change = second - first
    up, down, unit = _DIRECTIONS[metric]
    direction = up if change > 0 else down
    percentage = abs(change / first) * 100 if first != 0 else 0.0
    return {
        "change":     change,
        "direction":  direction,
        "percentage": percentage,
        "summary":    f"{abs(change):.1f}{unit} {direction}",
    }


def calculate_weekly_comparison(daily: DailySeries | None) -> dict:
    """Compare the start of the week (days 0-2) with the end (days 4-6).

    Returns dict keyed by temperature, precipitation, wind; each value has
    change (second-half mean minus first-half mean), direction, percentage
    (0 when the first-half mean is 0) and summary. Empty dict when fewer
    than five days are available.
    """
    if daily is None or len(daily.time) < MIN_COMPARISON_DAYS:
        return {}
    return {
        "temperature":   _compare_halves(_week(daily.temperature_max), "temperature"),
        "precipitation": _compare_halves(_week(daily.precipitation_sum), "precipitation"),
        "wind":          _compare_halves(_week(daily.wind_speed_max), "wind"),
    }


def generate_trend_insights(daily: DailySeries, comparison: dict) -> list[dict]:
    """Threshold-gated insight records for the coming week.

    Each record has keys: type, severity, icon, title, description, value, unit.
    """
    insights: list[dict] = []

    temp = comparison.get("temperature")
    if temp and abs(temp["change"]) > 3:
        warmer = temp["direction"] == "warmer"
        insights.append({
            "type":        "temperature",
            "severity":    "high" if abs(temp["change"]) > 5 else "medium",
            "icon":        "📈" if warmer else "📉",
            "title":       f"Significant {'Warming' if warmer else 'Cooling'} Trend",
            "description": (
                f"Temperature trending {temp['change']:.1f}°C {temp['direction']} over the week "
                f"({temp['percentage']:.0f}% change). "
                f"Prepare for {'warmer' if warmer else 'cooler'} conditions."
            ),
            "value":       temp["change"],
            "unit":        "°C",
        })

    precip = _week(daily.precipitation_sum)
    if precip:
        total = sum(precip)
        wetter = comparison.get("precipitation", {}).get("direction") == "wetter"
        if total > 10:
            insights.append({
                "type":        "precipitation",
                "severity":    "high" if total > 30 else "medium",
                "icon":        "🌧",
                "title":       "Wet Week Ahead",
                "description": (
                    f"Total precipitation forecast: {total:.1f}mm over the next 7 days. "
                    f"{'Conditions becoming wetter' if wetter else 'Conditions improving'}. "
                    "Keep umbrella handy."
                ),
                "value":       total,
                "unit":        "mm",
            })
        elif total < 1:
            insights.append({
                "type":        "precipitation",
                "severity":    "low",
                "icon":        "☀️",
                "title":       "Dry Week Expected",
                "description": (
                    f"Very little precipitation forecast ({total:.1f}mm total). "
                    "Excellent for outdoor activities and events. Low humidity expected."
                ),
                "value":       total,
                "unit":        "mm",
            })

    uv = _week(daily.uv_index_max)
    avg_uv = mean(uv)
    if avg_uv > 6:
        insights.append({
            "type":        "uv",
            "severity":    "high" if avg_uv > 8 else "medium",
            "icon":        "☀️",
            "title":       "High UV Levels This Week",
            "description": (
                f"Average UV index: {avg_uv:.1f} (High to Very High). Sun protection essential. "
                "Seek shade during peak hours (10 AM - 4 PM). Use SPF 30+ sunscreen."
            ),
            "value":       avg_uv,
            "unit":        "UV Index",
        })

    max_wind = safe_max(_week(daily.wind_speed_max))
    if max_wind is not None and max_wind > 40:
        windier = comparison.get("wind", {}).get("direction") == "windier"
        insights.append({
            "type":        "wind",
            "severity":    "high" if max_wind > 60 else "medium",
            "icon":        "💨",
            "title":       "Strong Winds Expected",
            "description": (
                f"Peak wind speeds forecast: {max_wind:.0f} km/h. "
                f"{'Conditions becoming windier' if windier else 'Winds moderating'}. "
                "Secure loose objects outdoors."
            ),
            "value":       max_wind,
            "unit":        "km/h",
        })

    highs = _week(daily.temperature_max)
    highest = safe_max(highs)
    lowest = safe_min(_week(daily.temperature_min))
    if highest is not None and lowest is not None and highest - lowest > 20:
        spread = highest - lowest
        insights.append({
            "type":        "temperature",
            "severity":    "medium",
            "icon":        "🌡",
            "title":       "Large Temperature Variations",
            "description": (
                f"Temperature range: {spread:.1f}°C across the week "
                f"({lowest:.1f}°C to {highest:.1f}°C). "
                "Dress in layers and be prepared for changing conditions."
            ),
            "value":       spread,
            "unit":        "°C range",
        })

    if highs:
        variability = std_dev(highs)
        if variability < 2:
            insights.append({
                "type":        "stability",
                "severity":    "low",
                "icon":        "📊",
                "title":       "Stable Weather Pattern",
                "description": (
                    f"Very consistent temperatures throughout the week "
                    f"(variability: {variability:.1f}°C). Stable high-pressure system likely. "
                    "Reliable conditions for planning outdoor activities."
                ),
                "value":       variability,
                "unit":        "°C variability",
            })
        elif variability > 5:
            insights.append({
                "type":        "stability",
                "severity":    "medium",
                "icon":        "⚡",
                "title":       "Unstable Weather Pattern",
                "description": (
                    f"Highly variable temperatures (variability: {variability:.1f}°C). "
                    "Multiple weather systems passing through. "
                    "Be prepared for changing conditions."
                ),
                "value":       variability,
                "unit":        "°C variability",
            })

    return insights


def _trend(name: str, values: tuple[float, ...], strong_above: float, describe) -> dict:
    slope = linear_regression(values)["slope"]
    return {
        "name":        name,
        "slope":       slope,
        "direction":   "increasing" if slope > 0 else "decreasing",
        "strength":    "strong" if abs(slope) > strong_above else "weak",
        "description": describe(slope),
    }


def calculate_trends(daily: DailySeries) -> list[dict]:
    """Regression slopes for daily highs, rain chance and cloud cover.

    Regressions run over every forecast day, not just the first week.
    Always returns exactly three records. Cloud cover falls back to the
    precipitation probability series when the forecast has no cloud data.
    """
    precip_prob = daily.precipitation_probability_max
    cloud = daily.cloud_cover_mean or precip_prob
    return [
        _trend(
            "Temperature Trend", daily.temperature_max, 1,
            lambda s: f"{abs(s):.2f}°C per day {'increase' if s > 0 else 'decrease'}",
        ),
        _trend(
            "Precipitation Probability", precip_prob, 5,
            lambda s: f"{abs(s):.1f}% per day {'increase' if s > 0 else 'decrease'}",
        ),
        _trend(
            "Cloud Cover", cloud, 5,
            lambda s: "Becoming cloudier" if s > 0 else "Clearing up",
        ),
    ]


def analyze_weather_trends(snapshot: WeatherSnapshot | None) -> dict:
    """Weekly comparison, insights and regression trends for one forecast.

    Returns dict with keys: weekly_comparison, insights, trends. All three
    are empty when the daily or hourly group is missing or the daily group
    covers fewer than two days.
    """
    if (
        snapshot is None
        or snapshot.daily is None
        or snapshot.hourly is None
        or len(snapshot.daily.time) < 2
    ):
        return {"weekly_comparison": {}, "insights": [], "trends": []}

    comparison = calculate_weekly_comparison(snapshot.daily)
    return {
        "weekly_comparison": comparison,
        "insights":          generate_trend_insights(snapshot.daily, comparison),
        "trends":            calculate_trends(snapshot.daily),
    }


def get_historical_comparison(snapshot: WeatherSnapshot | None, month: int | None = None) -> dict:
    """Compare this week's average high with a typical value for the month.

    Args:
        snapshot: Parsed forecast; only the daily highs are used.
        month: Calendar month 1-12. Defaults to the current month.

    Returns:
        Dict with vs_seasonal_average {difference, percentage, description}
        and anomaly (None, or {severity, description} when the difference
        exceeds 5°C). Empty dict when there are no daily highs.
    """
    if snapshot is None or snapshot.daily is None or not snapshot.daily.temperature_max:
        return {}

    if month is None:
        month = date.today().month
    seasonal = SEASONAL_AVERAGES.get(month, 15)
    difference = mean(snapshot.daily.temperature_max) - seasonal
    side = "above" if difference > 0 else "below"

    anomaly = None
    if abs(difference) > 10:
        anomaly = {"severity": "extreme", "description": "Extreme temperature anomaly detected"}
    elif abs(difference) > 5:
        anomaly = {
            "severity":    "significant",
            "description": "Significant temperature deviation from normal",
        }

    return {
        "vs_seasonal_average": {
            "difference":  difference,
            "percentage":  difference / seasonal * 100,
            "description": f"{abs(difference):.1f}°C {side} seasonal average",
        },
        "anomaly": anomaly,
    }
