# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
events.py — Discrete weather events over the next seven days.

Each forecast day is checked on its own for heatwave, cold snap, heavy
rain, thunderstorm, strong wind and frontal passage. A day can produce
several events. Probabilities come from small fixed lookup ladders keyed by
how far the day passes the trigger threshold.

generate_event_based_forecast() adds optional free-text commentary from
the AI text service on top of the detected events.
"""

from __future__ import annotations

from weather_insights.ai import Generate, generate_text
from weather_insights.snapshot import DailySeries, WeatherSnapshot
from weather_insights.utils import DEFAULT_LOG_PATH, day_label, log_error, parse_time

EVENT_DAYS = 7
HIGH_PROBABILITY = 70
THUNDER_CODES = range(95, 100)

NO_EVENTS_SUMMARY = "No significant weather events detected."
AI_UNAVAILABLE = "AI analysis temporarily unavailable"
AI_EMPTY = "Analysis unavailable"


def _at(series: tuple, i: int, default: float = 0.0) -> float:
    return series[i] if 0 <= i < len(series) else default


def calculate_heatwave_probability(max_temp: float) -> int:
    if max_temp > 38:
        return 95
    if max_temp > 35:
        return 85
    if max_temp > 32:
        return 75
    return 60


def calculate_cold_snap_probability(min_temp: float) -> int:
    if min_temp < 0:
        return 95
    if min_temp < 3:
        return 85
    if min_temp < 5:
        return 75
    return 60


def calculate_wind_probability(wind: float, gusts: float) -> int:
    if gusts > 80:
        return 90
    if gusts > 60:
        return 80
    if wind > 50:
        return 75
    if wind > 40:
        return 70
    return 60


def count_consecutive_days(values: tuple, start: int, condition) -> int:
    """Number of consecutive values from `start` that satisfy `condition`."""
    count = 0
    for value in values[start:]:
        if not condition(value):
            break
        count += 1
    return count


def detect_weather_events(snapshot: WeatherSnapshot | None) -> list[dict]:
    """All events for the first seven forecast days, most probable first.

    Returns list of dicts with keys: type, day, date, probability, severity,
    details, description. Events of equal probability keep their day order.
    Empty when the daily group is missing.
    """
    if snapshot is None or snapshot.daily is None:
        return []

    daily: DailySeries = snapshot.daily
    hourly = snapshot.hourly
    events: list[dict] = []

    for day in range(min(EVENT_DAYS, len(daily.time))):
        date = daily.time[day]
        base = {"day": day_label(date, day), "date": date}
        t_max = _at(daily.temperature_max, day)
        t_min = _at(daily.temperature_min, day)
        codes = hourly.weather_code[day * 24:(day + 1) * 24] if hourly is not None else ()

        # Heatwave: today and tomorrow both above 32°C
        if t_max > 32 and day + 1 < len(daily.temperature_max) and daily.temperature_max[day + 1] > 32:
            duration = count_consecutive_days(daily.temperature_max, day, lambda t: t > 32)
            events.append({
                **base,
                "type":        "heatwave",
                "probability": calculate_heatwave_probability(t_max),
                "severity":    "extreme" if t_max > 38 else "high",
                "details":     {
                    "max_temp": t_max,
                    "duration": duration,
                    "uv_index": _at(daily.uv_index_max, day),
                },
                "description": (
                    f"Heatwave conditions with temperatures reaching {t_max:.0f}°C "
                    f"for {duration} day(s)"
                ),
            })

        has_temps = bool(daily.temperature_min) and bool(daily.temperature_max)
        if has_temps and t_min < 5 and t_max < 12:
            events.append({
                **base,
                "type":        "cold_snap",
                "probability": calculate_cold_snap_probability(t_min),
                "severity":    "extreme" if t_min < 0 else "moderate",
                "details":     {"min_temp": t_min, "max_temp": t_max},
                "description": f"Cold conditions with temperatures {t_min:.0f}°C to {t_max:.0f}°C",
            })

        total = _at(daily.precipitation_sum, day)
        prob_max = _at(daily.precipitation_probability_max, day)
        if total > 15 or prob_max > 70:
            events.append({
                **base,
                "type":        "heavy_rain",
                "probability": prob_max,
                "severity":    "high" if total > 30 else "moderate",
                "details":     {"total_precipitation": total, "max_probability": prob_max},
                "description": (
                    f"Heavy rainfall expected ({total:.1f}mm) with {prob_max:.0f}% probability"
                ),
            })

        thunder_hours = sum(1 for c in codes if c in THUNDER_CODES)
        if thunder_hours > 0 or (prob_max > 60 and t_max > 25):
            hours_text = f" for {thunder_hours} hour(s)" if thunder_hours > 0 else ""
            events.append({
                **base,
                "type":        "thunderstorm",
                "probability": 85 if thunder_hours > 0 else 60,
                "severity":    "high" if thunder_hours > 3 else "moderate",
                "details":     {"expected_hours": thunder_hours, "temperature": t_max},
                "description": f"Thunderstorm activity likely{hours_text}",
            })

        wind = _at(daily.wind_speed_max, day)
        gusts = _at(daily.wind_gusts_max, day)
        if wind > 40 or gusts > 60:
            if gusts > 80:
                severity = "extreme"
            elif gusts > 60:
                severity = "high"
            else:
                severity = "moderate"
            events.append({
                **base,
                "type":        "strong_wind",
                "probability": calculate_wind_probability(wind, gusts),
                "severity":    severity,
                "details":     {"max_wind": wind, "max_gusts": gusts},
                "description": (
                    f"Strong winds up to {wind:.0f} km/h with gusts to {gusts:.0f} km/h"
                ),
            })

        if day > 0 and len(daily.temperature_max) > day:
            previous = daily.temperature_max[day - 1]
            change = t_max - previous
            if abs(change) > 10:
                events.append({
                    **base,
                    "type":        "warm_front" if change > 0 else "cold_front",
                    "probability": 80,
                    "severity":    "high" if abs(change) > 15 else "moderate",
                    "details":     {
                        "temperature_change": change,
                        "previous_temp":      previous,
                        "new_temp":           t_max,
                    },
                    "description": (
                        f"{'Warming' if change > 0 else 'Cooling'} trend: {abs(change):.0f}°C "
                        f"{'increase' if change > 0 else 'decrease'}"
                    ),
                })

    # sorted() is stable: equal probabilities stay in day order
    return sorted(events, key=lambda e: -e["probability"])


def generate_event_summary(events: list[dict]) -> str:
    """One-line summary counting high-probability (> 70%) events."""
    if not events:
        return NO_EVENTS_SUMMARY
    high = [e for e in events if e["probability"] > HIGH_PROBABILITY]
    if not high:
        return f"{len(events)} potential weather events detected with moderate probability"
    return f"{len(high)} high-probability weather events detected in the next 7 days"


def build_event_prompt(snapshot: WeatherSnapshot, location: str, events: list[dict]) -> str:
    """Prompt with the 7-day table and the top five detected events."""
    daily = snapshot.daily
    rows = []
    if daily is not None:
        for i, date in enumerate(daily.time[:EVENT_DAYS]):
            parsed = parse_time(date)
            label = parsed.strftime("%a, %b %d") if parsed is not None else date
            rows.append(
                f"{label}: {_at(daily.temperature_min, i):.0f}-{_at(daily.temperature_max, i):.0f}°C, "
                f"{_at(daily.precipitation_probability_max, i):.0f}% rain "
                f"({_at(daily.precipitation_sum, i):.1f}mm), "
                f"wind {_at(daily.wind_speed_max, i):.0f} km/h"
            )
    detected = [
        f"- {e['type']}: {e['day']}, {e['probability']:.0f}% probability, {e['description']}"
        for e in events[:5]
    ]
    table = "\n".join(rows)
    listed = "\n".join(detected)

    return f"""Analyze the following 7-day weather forecast for {location} and identify HIGH-PROBABILITY weather events with specific timing and impact:

{table}

Detected Events:
{listed}

Provide:
1. Top 3 most significant weather events with probability percentages
2. Specific timing (day and time period)
3. Practical impact on daily activities
4. Preparation recommendations

Format as concise bullet points."""


def generate_event_based_forecast(
    snapshot: WeatherSnapshot,
    location: str,
    generate: Generate = generate_text,
    max_length: int = 300,
    log_path=DEFAULT_LOG_PATH,
) -> dict:
    """Detected events plus AI commentary on them.

    Returns dict with keys: events, ai_analysis, summary. ai_analysis falls
    back to a fixed message when the service is unreachable or answers
    without text; the events and summary are always present.
    """
    events = detect_weather_events(snapshot)
    prompt = build_event_prompt(snapshot, location, events)

    try:
        result = generate(prompt, max_length)
    except Exception as e:
        print(f"[ai] Event forecast failed: {e}")
        log_error(f"AI event forecast failed: {e}", log_path=log_path)
        result = None

    if result is None:
        analysis = AI_UNAVAILABLE
    elif isinstance(result, dict) and result.get("response"):
        analysis = result["response"]
    else:
        analysis = AI_EMPTY

    return {
        "events":      events,
        "ai_analysis": analysis,
        "summary":     generate_event_summary(events),
    }
