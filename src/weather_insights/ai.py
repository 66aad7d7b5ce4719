# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
ai.py — Optional free-text commentary from an external text-completion service.

The service takes POST {url}/generate with {"message", "max_length"} and
answers {"response": "<text>"}. It is never required: any transport, HTTP
or JSON failure is printed, appended to the log file and turned into None.
There is no retry here, unlike the Open-Meteo fetches in weather.py.

Every analysis helper accepts a `generate` callable with the same signature
as generate_text(), so callers can bind a configured URL with
functools.partial and tests can pass a fake.
"""

import json
import re
from collections.abc import Callable
from pathlib import Path

import requests

from weather_insights.series import mean, safe_max, safe_min
from weather_insights.snapshot import WeatherSnapshot
from weather_insights.utils import DEFAULT_LOG_PATH, log_error
from weather_insights.weather import degrees_to_compass

DEFAULT_AI_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 30

Generate = Callable[..., "dict | None"]


def generate_text(
    message: str,
    max_length: int = 200,
    url: str = DEFAULT_AI_URL,
    timeout: float = DEFAULT_TIMEOUT,
    log_path: Path = DEFAULT_LOG_PATH,
) -> dict | None:
    """Ask the text-completion service for a reply to one prompt.

    Args:
        message: Prompt text.
        max_length: Maximum number of tokens to generate.
        url: Base URL of the service (without the /generate suffix).
        timeout: Request timeout in seconds.
        log_path: Where to append the error line on failure.

    Returns:
        The decoded JSON reply (normally {"response": str}), or None if the
        request failed for any reason.
    """
    payload = {"message": message, "max_length": max_length}
    try:
        r = requests.post(f"{url.rstrip('/')}/generate", json=payload, timeout=timeout)
        r.raise_for_status()
        return r.json()
    except (requests.RequestException, ValueError) as e:
        print(f"[ai] Text generation failed: {e}")
        log_error(f"AI generate endpoint failed: {e}", log_path=log_path)
        return None


def health_check(url: str = DEFAULT_AI_URL, timeout: float = 10) -> dict:
    """Return the service's /health reply, or an error status if unreachable."""
    try:
        r = requests.get(f"{url.rstrip('/')}/health", timeout=timeout)
        r.raise_for_status()
        return r.json()
    except (requests.RequestException, ValueError) as e:
        print(f"[ai] Health check failed: {e}")
        return {"status": "error", "model_loaded": False}


def extract_json_array(text: str | None) -> list:
    """Pull the first [...] block out of free text and decode it.

    Returns [] when there is no array or it does not decode.
    """
    if not text:
        return []
    match = re.search(r"\[.*\]", text, re.S)
    if match is None:
        return []
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        return []
    return parsed if isinstance(parsed, list) else []


def _ask(prompt: str, max_length: int, label: str, generate: Generate) -> str | None:
    result = generate(prompt, max_length)
    if not isinstance(result, dict) or not result.get("response"):
        print(f"[ai] No response for {label}")
        return None
    return result["response"]


# ─────────────────────────────────────────────────────────────
# Analysis prompts
# ─────────────────────────────────────────────────────────────

def _fmt(value, format_spec: str = "") -> str:
    return "n/a" if value is None else format(value, format_spec)


def generate_pressure_analysis(
    snapshot: WeatherSnapshot,
    generate: Generate = generate_text,
) -> str | None:
    """Meteorologist-style read of the current pressure system."""
    current = snapshot.current
    if current is None or current.pressure_msl is None:
        return None

    trend = "Steady"
    upcoming = snapshot.hourly.pressure_msl[:24] if snapshot.hourly is not None else ()
    if upcoming:
        change = upcoming[-1] - current.pressure_msl
        if change > 1:
            trend = "Rising"
        elif change < -1:
            trend = "Falling"

    prompt = f"""As a professional meteorologist, analyze this atmospheric pressure data and provide expert insights:

Current Pressure: {current.pressure_msl:.1f} hPa
Trend: {trend}
Temperature: {current.temperature}°C
Wind Speed: {current.wind_speed} km/h
Humidity: {current.humidity}%

Provide a detailed analysis covering:
1. What type of pressure system is present (High/Low/Ridge/Trough)
2. Expected weather behavior based on this pressure pattern
3. How the pressure system is interacting with temperature and wind
4. Short-term forecast implications (next 12-24 hours)
5. Any notable atmospheric phenomena to watch for

Keep the response concise but technically accurate (3-4 sentences)."""
    return _ask(prompt, 300, "pressure analysis", generate)


def generate_wind_analysis(
    snapshot: WeatherSnapshot,
    generate: Generate = generate_text,
) -> str | None:
    """Wind pattern commentary from current wind plus the 24h average."""
    current = snapshot.current
    if current is None:
        return None
    speeds = snapshot.hourly.wind_speed[:24] if snapshot.hourly is not None else ()
    avg = mean(speeds) if speeds else current.wind_speed

    prompt = f"""As a meteorologist, analyze this wind pattern data:

Current Wind Speed: {current.wind_speed:.1f} km/h
Wind Direction: {current.wind_direction:.0f}° ({degrees_to_compass(current.wind_direction)})
Wind Gusts: {current.wind_gusts:.1f} km/h
Average Wind: {avg:.1f} km/h
Pressure: {_fmt(current.pressure_msl)} hPa

Analyze:
1. Wind pattern characteristics and what's driving this air movement
2. Relationship between wind direction and local pressure gradients
3. Significance of gust patterns and turbulence indicators
4. Impact on local weather conditions
5. Expected wind behavior in next 6-12 hours

Provide expert meteorological insights in 3-4 sentences."""
    return _ask(prompt, 300, "wind analysis", generate)


def generate_temperature_analysis(
    snapshot: WeatherSnapshot,
    generate: Generate = generate_text,
) -> str | None:
    """Thermal dynamics commentary over the next 24 hours."""
    current = snapshot.current
    if current is None or snapshot.hourly is None or not snapshot.hourly.temperature:
        return None
    temps = snapshot.hourly.temperature[:24]
    steps = [abs(b - a) for a, b in zip(temps, temps[1:])]
    volatility = mean(steps)
    trend = temps[-1] - temps[0]

    prompt = f"""Analyze this temperature data as a meteorologist:

Current: {current.temperature:.1f}°C
Range: {min(temps):.1f}°C to {max(temps):.1f}°C
Average: {mean(temps):.1f}°C
Volatility: {volatility:.2f}°C/hour
Trend: {"Rising" if trend > 0 else "Falling"} ({abs(trend):.1f}°C)
Cloud Cover: {current.cloud_cover}%
Humidity: {current.humidity}%

Provide analysis on:
1. Thermal dynamics and what's causing current temperature behavior
2. Diurnal temperature variation patterns
3. Role of cloud cover and humidity in temperature regulation
4. Heat transfer mechanisms at play (radiation, convection, advection)
5. Expected temperature evolution

Expert insights in 3-4 sentences."""
    return _ask(prompt, 300, "temperature analysis", generate)


def generate_humidity_analysis(
    snapshot: WeatherSnapshot,
    generate: Generate = generate_text,
) -> str | None:
    """Moisture and dew point commentary over the next 24 hours."""
    current = snapshot.current
    if current is None or snapshot.hourly is None or not snapshot.hourly.humidity:
        return None
    humidity = snapshot.hourly.humidity[:24]
    dew_point = snapshot.hourly.dew_point[0] if snapshot.hourly.dew_point else None

    prompt = f"""Analyze atmospheric moisture conditions:

Current Humidity: {current.humidity}%
Average: {mean(humidity):.1f}%
Range: {safe_min(humidity)}% to {safe_max(humidity)}%
Temperature: {current.temperature}°C
Dew Point: {_fmt(dew_point)}°C
Cloud Cover: {current.cloud_cover}%

Analyze:
1. Atmospheric moisture saturation level and stability
2. Dew point relationship and condensation potential
3. Impact on human comfort and weather perception
4. Fog, mist, or precipitation likelihood
5. Moisture source and air mass characteristics

Meteorological insights in 3-4 sentences."""
    return _ask(prompt, 300, "humidity analysis", generate)


def generate_precipitation_analysis(
    snapshot: WeatherSnapshot,
    generate: Generate = generate_text,
) -> str | None:
    """Rainfall mechanism commentary from the next 24 hourly values."""
    current = snapshot.current
    if current is None or snapshot.hourly is None:
        return None
    amounts = snapshot.hourly.precipitation[:24]
    probability = safe_max(snapshot.hourly.precipitation_probability[:24], default=0.0)

    prompt = f"""Analyze precipitation patterns and potential:

Total Precipitation: {sum(amounts):.1f} mm
Probability: {probability:.0f}%
Max Rate: {safe_max(amounts, default=0.0):.1f} mm/h
Cloud Cover: {current.cloud_cover}%
Humidity: {current.humidity}%
Pressure: {_fmt(current.pressure_msl)} hPa

Provide analysis on:
1. Precipitation formation mechanisms (convective/stratiform/orographic)
2. Atmospheric conditions supporting or inhibiting rainfall
3. Precipitation type and intensity expectations
4. Spatial and temporal distribution patterns
5. Hydrological implications and runoff potential

Expert meteorological analysis in 3-4 sentences."""
    return _ask(prompt, 300, "precipitation analysis", generate)


def generate_synoptic_analysis(
    snapshot: WeatherSnapshot,
    duration: str = "24-hour",
    generate: Generate = generate_text,
    max_length: int = 400,
) -> str | None:
    """Weather-briefing style summary of the dominant weather system."""
    current = snapshot.current
    if current is None:
        return None

    prompt = f"""Provide a synoptic-scale meteorological analysis for the {duration} period:

Location: Current weather observation
Pressure: {_fmt(current.pressure_msl)} hPa
Temperature: {current.temperature}°C
Wind: {current.wind_speed} km/h from {current.wind_direction:.0f}°
Humidity: {current.humidity}%
Cloud Cover: {current.cloud_cover}%
Precipitation: {current.precipitation} mm

As a synoptic meteorologist, analyze:
1. Dominant weather system type (anticyclone, cyclone, front, ridge, trough)
2. Air mass characteristics and origin
3. Synoptic forcing mechanisms
4. Weather system evolution and movement
5. Expected weather sequence over the analysis period

Provide professional synoptic analysis in 4-5 sentences suitable for a weather briefing."""
    return _ask(prompt, max_length, "synoptic analysis", generate)


def generate_chart_annotations(
    chart_type: str,
    data: dict,
    generate: Generate = generate_text,
) -> list:
    """Ask for 2-3 annotations for a chart; [] if the reply has no usable array."""
    prompt = f"""As a meteorologist, identify 2-3 key features to annotate on a {chart_type} weather chart:

Weather Data: {json.dumps(data, indent=2)}

For this {chart_type} chart, identify:
1. Most significant meteorological feature
2. Notable pattern or anomaly
3. Critical threshold or transition point

Return ONLY a JSON array of annotations with this exact structure:
[
  {{
    "label": "Brief label text",
    "description": "One sentence explanation",
    "significance": "high|medium|low"
  }}
]

Maximum 3 annotations. Be specific and technical."""
    return extract_json_array(_ask(prompt, 400, "chart annotations", generate))


def detect_weather_phenomena(
    snapshot: WeatherSnapshot,
    generate: Generate = generate_text,
) -> list:
    """Ask which notable phenomena (inversions, wind shear, ...) are present."""
    current = snapshot.current
    if current is None:
        return []

    prompt = f"""Analyze this weather data to detect and explain any notable meteorological phenomena:

Temperature: {current.temperature}°C
Pressure: {_fmt(current.pressure_msl)} hPa
Wind: {current.wind_speed} km/h, gusts {current.wind_gusts} km/h
Humidity: {current.humidity}%
Cloud Cover: {current.cloud_cover}%
Precipitation: {current.precipitation} mm
Weather Code: {current.weather_code}

Identify any of these phenomena if present:
- Temperature inversions
- Wind shear
- Atmospheric instability
- Frontal boundaries
- Convergence/divergence zones
- Jet stream influence
- Orographic effects
- Sea breeze circulation
- Thermal advection
- Pressure tendency patterns

Return a JSON array of detected phenomena:
[
  {{
    "phenomenon": "Name of phenomenon",
    "explanation": "Brief scientific explanation",
    "impact": "Weather impact description"
  }}
]

If no notable phenomena, return empty array []."""
    return extract_json_array(_ask(prompt, 500, "phenomena detection", generate))
