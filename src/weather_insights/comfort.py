# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
comfort.py — Comfort index (0-100) for the current hour and the next 24 hours.

Each weather factor takes an independently capped deduction from a
starting score of 100. The same scoring runs over every forecast hour, and
runs of comfortable hours become "optimal windows" with a suggested
activity.
"""

from __future__ import annotations

from weather_insights.series import round_half_up
from weather_insights.snapshot import WeatherSnapshot
from weather_insights.utils import fmt_hour, parse_time

IDEAL_TEMPERATURE = 21.0
COMFORT_HOURS = 24
WINDOW_THRESHOLD = 70
MIN_WINDOW_HOURS = 2
MAX_WINDOWS = 3


def calculate_comfort_score(
    temp: float,
    humidity: float,
    wind_speed: float,
    uv_index: float,
    precipitation: float,
    feels_like: float,
) -> int:
    """Combine six weather factors into one 0-100 comfort score.

    Deductions (each capped):
        temperature    2.0 per °C beyond ±3 of 21°C      max 30
        feels-like     1.5 per °C of gap beyond 3°C      max 15
        humidity       0.5 per % above 70 or below 30    max 20
        wind           0.5 per km/h above 15             max 20
        UV             2.0 per point above 5             max 15
        precipitation  5.0 per mm                        max 25
    """
    score = 100.0

    temp_diff = abs(temp - IDEAL_TEMPERATURE)
    if temp_diff > 3:
        score -= min(30, temp_diff * 2)

    feels_diff = abs(feels_like - temp)
    if feels_diff > 3:
        score -= min(15, feels_diff * 1.5)

    if humidity > 70:
        score -= min(20, (humidity - 70) * 0.5)
    elif humidity < 30:
        score -= min(20, (30 - humidity) * 0.5)

    if wind_speed > 15:
        score -= min(20, (wind_speed - 15) * 0.5)

    if uv_index > 5:
        score -= min(15, (uv_index - 5) * 2)

    if precipitation > 0:
        score -= min(25, precipitation * 5)

    return max(0, round_half_up(score))


# ─────────────────────────────────────────────────────────────
# Per-factor scores
# ─────────────────────────────────────────────────────────────

def calculate_temperature_score(temp: float) -> int:
    diff = abs(temp - IDEAL_TEMPERATURE)
    if diff <= 3:
        return 100
    if diff <= 6:
        return 80
    if diff <= 10:
        return 60
    if diff <= 15:
        return 40
    return 20


def get_temperature_impact(temp: float) -> str:
    if 18 <= temp <= 24:
        return "Optimal temperature for comfort"
    if 24 < temp <= 30:
        return "Warm - may feel slightly uncomfortable"
    if temp > 30:
        return "Hot - uncomfortable for most people"
    if 10 <= temp < 18:
        return "Cool - light jacket recommended"
    return "Cold - warm clothing needed"


def calculate_humidity_score(humidity: float) -> int:
    if 40 <= humidity <= 60:
        return 100
    if 30 <= humidity <= 70:
        return 80
    if 20 <= humidity <= 80:
        return 60
    if 10 <= humidity <= 90:
        return 40
    return 20


def get_humidity_impact(humidity: float) -> str:
    if 40 <= humidity <= 60:
        return "Ideal humidity levels"
    if humidity > 70:
        return "High humidity - feels muggy and oppressive"
    if humidity > 60:
        return "Slightly humid - may feel warmer than actual temperature"
    if humidity < 30:
        return "Very dry - may cause skin and respiratory discomfort"
    return "Dry air - stay hydrated"


def calculate_wind_score(wind_speed: float) -> int:
    if wind_speed <= 10:
        return 100
    if wind_speed <= 20:
        return 80
    if wind_speed <= 30:
        return 60
    if wind_speed <= 40:
        return 40
    return 20


def get_wind_impact(wind_speed: float) -> str:
    if wind_speed <= 10:
        return "Calm to light breeze - pleasant conditions"
    if wind_speed <= 20:
        return "Moderate breeze - comfortable for most activities"
    if wind_speed <= 30:
        return "Fresh breeze - may affect some outdoor activities"
    if wind_speed <= 40:
        return "Strong breeze - difficult conditions for some activities"
    return "Very strong winds - outdoor activities challenging"


def calculate_uv_score(uv_index: float) -> int:
    if uv_index <= 2:
        return 100
    if uv_index <= 5:
        return 80
    if uv_index <= 7:
        return 60
    if uv_index <= 10:
        return 40
    return 20


def get_uv_impact(uv_index: float) -> str:
    if uv_index <= 2:
        return "Low UV - minimal sun protection needed"
    if uv_index <= 5:
        return "Moderate UV - sun protection recommended"
    if uv_index <= 7:
        return "High UV - sun protection essential"
    if uv_index <= 10:
        return "Very high UV - extra precautions required"
    return "Extreme UV - avoid sun exposure during midday"


def calculate_precipitation_score(precipitation: float) -> int:
    if precipitation == 0:
        return 100
    if precipitation <= 1:
        return 70
    if precipitation <= 5:
        return 40
    return 20


def get_precipitation_impact(precipitation: float) -> str:
    if precipitation == 0:
        return "No precipitation - ideal conditions"
    if precipitation <= 1:
        return "Light precipitation - minor impact"
    if precipitation <= 5:
        return "Moderate precipitation - umbrella recommended"
    return "Heavy precipitation - outdoor activities affected"


def calculate_feels_like_score(temp: float, feels_like: float) -> int:
    diff = abs(feels_like - temp)
    if diff <= 2:
        return 100
    if diff <= 5:
        return 80
    if diff <= 8:
        return 60
    return 40


def get_feels_like_impact(temp: float, feels_like: float) -> str:
    diff = feels_like - temp
    if abs(diff) <= 2:
        return "Feels like actual temperature"
    if diff > 0:
        return f"Feels {abs(diff):.1f}°C warmer due to humidity"
    return f"Feels {abs(diff):.1f}°C cooler due to wind chill"


def calculate_factor_breakdown(
    temp: float,
    humidity: float,
    wind_speed: float,
    uv_index: float,
    precipitation: float,
    feels_like: float,
) -> dict:
    """Score and describe each comfort factor on its own.

    Returns dict keyed by temperature, humidity, wind, uv, precipitation,
    feels_like; each value has score, impact, value and ideal.
    """
    return {
        "temperature": {
            "score":  calculate_temperature_score(temp),
            "impact": get_temperature_impact(temp),
            "value":  temp,
            "ideal":  "18-24°C",
        },
        "humidity": {
            "score":  calculate_humidity_score(humidity),
            "impact": get_humidity_impact(humidity),
            "value":  humidity,
            "ideal":  "40-60%",
        },
        "wind": {
            "score":  calculate_wind_score(wind_speed),
            "impact": get_wind_impact(wind_speed),
            "value":  wind_speed,
            "ideal":  "<15 km/h",
        },
        "uv": {
            "score":  calculate_uv_score(uv_index),
            "impact": get_uv_impact(uv_index),
            "value":  uv_index,
            "ideal":  "<5",
        },
        "precipitation": {
            "score":  calculate_precipitation_score(precipitation),
            "impact": get_precipitation_impact(precipitation),
            "value":  precipitation,
            "ideal":  "0 mm",
        },
        "feels_like": {
            "score":  calculate_feels_like_score(temp, feels_like),
            "impact": get_feels_like_impact(temp, feels_like),
            "value":  feels_like,
            "ideal":  "within 2°C of actual",
            "actual": temp,
        },
    }


# ─────────────────────────────────────────────────────────────
# Optimal windows
# ─────────────────────────────────────────────────────────────

def get_recommended_activity(score: float, hour: int) -> str:
    """Suggest an activity from a window's average score and start hour."""
    if score >= 90:
        if 6 <= hour <= 9:
            return "Morning run or walk"
        if 10 <= hour <= 16:
            return "Outdoor sports or picnic"
        if 17 <= hour <= 20:
            return "Evening outdoor dining"
        return "Outdoor activities"
    if score >= 80:
        if 6 <= hour <= 9:
            return "Morning exercise"
        if 10 <= hour <= 16:
            return "Outdoor activities with breaks"
        if 17 <= hour <= 20:
            return "Evening walk"
        return "Light outdoor activities"
    if score >= 70:
        return "Short outdoor activities"
    return "Indoor activities recommended"


def find_optimal_windows(hourly_comfort: list[dict]) -> list[dict]:
    """Group consecutive comfortable hours into windows.

    A window is a maximal run of hours scoring >= 70 that lasts at least two
    hours. Windows are ranked by average score (highest first), ties going
    to the earlier start, and at most three are returned.
    """
    runs: list[list[dict]] = []
    current: list[dict] = []
    for hour in hourly_comfort:
        if hour["score"] >= WINDOW_THRESHOLD:
            current.append(hour)
        else:
            if len(current) >= MIN_WINDOW_HOURS:
                runs.append(current)
            current = []
    if len(current) >= MIN_WINDOW_HOURS:
        runs.append(current)

    windows = []
    for run in runs:
        avg = sum(h["score"] for h in run) / len(run)
        windows.append({
            "start":      run[0]["time"],
            "end":        run[-1]["time"],
            "start_hour": run[0]["hour"],
            "score":      round_half_up(avg),
            "duration":   len(run),
            "activity":   get_recommended_activity(avg, run[0]["hour"]),
            "_avg":       avg,
        })

    # sorted() is stable, so equal averages keep their chronological order
    ranked = sorted(windows, key=lambda w: -w["_avg"])[:MAX_WINDOWS]
    for w in ranked:
        del w["_avg"]
    return ranked


def get_comfort_level(score: float) -> dict:
    """Map a comfort score to a named level with a short description."""
    if score >= 90:
        return {"level": "Excellent", "description": "Perfect conditions for any outdoor activity"}
    if score >= 80:
        return {"level": "Very Good", "description": "Great conditions for most outdoor activities"}
    if score >= 70:
        return {"level": "Good", "description": "Comfortable for outdoor activities"}
    if score >= 60:
        return {"level": "Fair", "description": "Acceptable but not ideal conditions"}
    if score >= 50:
        return {"level": "Moderate", "description": "Some discomfort expected"}
    if score >= 40:
        return {"level": "Poor", "description": "Uncomfortable conditions"}
    return {"level": "Very Poor", "description": "Very uncomfortable - avoid prolonged outdoor exposure"}


# ─────────────────────────────────────────────────────────────
# Full comfort index
# ─────────────────────────────────────────────────────────────

def _neutral() -> dict:
    return {
        "current_comfort": 50,
        "hourly_comfort":  [],
        "optimal_windows": [],
        "factors":         {},
    }


def _at(series: tuple, i: int, default: float = 0.0) -> float:
    return series[i] if i < len(series) else default


def calculate_comfort_index(snapshot: WeatherSnapshot | None) -> dict:
    """Comfort score now, hour by hour for the next 24 hours, and best windows.

    Returns dict with keys:
        current_comfort (int 0-100), hourly_comfort (list of dicts with
        hour, time, score, temperature, feels_like), optimal_windows (list),
        factors (dict, see calculate_factor_breakdown)

    A snapshot without current or hourly data gives a neutral 50 and empty
    lists.
    """
    if snapshot is None or snapshot.current is None or snapshot.hourly is None:
        return _neutral()

    current, hourly, daily = snapshot.current, snapshot.hourly, snapshot.daily

    uv_today = daily.uv_index_max[0] if daily is not None and daily.uv_index_max else 0.0
    current_feels = current.feels_like if current.feels_like is not None else current.temperature
    current_args = (
        current.temperature,
        current.humidity,
        current.wind_speed,
        uv_today,
        current.precipitation,
        current_feels,
    )

    hourly_comfort = []
    for i in range(min(COMFORT_HOURS, len(hourly.time))):
        temp = _at(hourly.temperature, i)
        feels = _at(hourly.feels_like, i, default=temp)
        score = calculate_comfort_score(
            temp,
            _at(hourly.humidity, i),
            _at(hourly.wind_speed, i),
            _at(hourly.uv_index, i),
            _at(hourly.precipitation, i),
            feels,
        )
        parsed = parse_time(hourly.time[i])
        hourly_comfort.append({
            "hour":        parsed.hour if parsed is not None else i % 24,
            "time":        fmt_hour(hourly.time[i]),
            "score":       score,
            "temperature": temp,
            "feels_like":  feels,
        })

    return {
        "current_comfort": calculate_comfort_score(*current_args),
        "hourly_comfort":  hourly_comfort,
        "optimal_windows": find_optimal_windows(hourly_comfort),
        "factors":         calculate_factor_breakdown(*current_args),
    }
