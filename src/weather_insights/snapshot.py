# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
snapshot.py — Typed, validated view of one Open-Meteo forecast payload.

The raw API response is a dict of three groups (current / hourly / daily),
each holding parallel arrays. parse_snapshot() is the single ingestion
boundary: it maps the API field names to short names, checks that every
series in a group lines up with that group's `time` array, and turns nulls
into 0.0. Calculators downstream can then index the series without checks
beyond "is it long enough".

API docs: https://open-meteo.com/en/docs
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any


class SnapshotError(ValueError):
    """Raised when a forecast payload has the wrong shape."""


@dataclass(frozen=True)
class CurrentConditions:
    """Single-instant observation (the API's `current` group)."""

    temperature: float = 0.0
    feels_like: float | None = None
    humidity: float = 0.0
    precipitation: float = 0.0
    wind_speed: float = 0.0
    wind_gusts: float = 0.0
    wind_direction: float = 0.0
    pressure_msl: float | None = None
    cloud_cover: float = 0.0
    weather_code: int = 0
    uv_index: float | None = None


@dataclass(frozen=True)
class HourlySeries:
    """Parallel hourly arrays, index 0 = the current hour."""

    time: tuple[str, ...] = ()
    temperature: tuple[float, ...] = ()
    feels_like: tuple[float, ...] = ()
    humidity: tuple[float, ...] = ()
    dew_point: tuple[float, ...] = ()
    precipitation: tuple[float, ...] = ()
    precipitation_probability: tuple[float, ...] = ()
    weather_code: tuple[int, ...] = ()
    cloud_cover: tuple[float, ...] = ()
    visibility: tuple[float, ...] = ()
    wind_speed: tuple[float, ...] = ()
    wind_gusts: tuple[float, ...] = ()
    uv_index: tuple[float, ...] = ()
    pressure_msl: tuple[float, ...] = ()


@dataclass(frozen=True)
class DailySeries:
    """Parallel daily arrays, index 0 = today (7 or 14 days)."""

    time: tuple[str, ...] = ()
    temperature_max: tuple[float, ...] = ()
    temperature_min: tuple[float, ...] = ()
    uv_index_max: tuple[float, ...] = ()
    precipitation_sum: tuple[float, ...] = ()
    precipitation_probability_max: tuple[float, ...] = ()
    wind_speed_max: tuple[float, ...] = ()
    wind_gusts_max: tuple[float, ...] = ()
    humidity_max: tuple[float, ...] = ()
    cloud_cover_mean: tuple[float, ...] = ()
    weather_code: tuple[int, ...] = ()


@dataclass(frozen=True)
class WeatherSnapshot:
    """One fetched forecast. Any group may be absent."""

    current: CurrentConditions | None = None
    hourly: HourlySeries | None = None
    daily: DailySeries | None = None


# Short name -> accepted API keys. The second spelling is the older
# Open-Meteo naming (windspeed_10m, relativehumidity_2m, weathercode).
CURRENT_FIELDS: dict[str, tuple[str, ...]] = {
    "temperature":    ("temperature_2m",),
    "feels_like":     ("apparent_temperature",),
    "humidity":       ("relative_humidity_2m", "relativehumidity_2m"),
    "precipitation":  ("precipitation",),
    "wind_speed":     ("wind_speed_10m", "windspeed_10m"),
    "wind_gusts":     ("wind_gusts_10m", "windgusts_10m"),
    "wind_direction": ("wind_direction_10m", "winddirection_10m"),
    "pressure_msl":   ("pressure_msl",),
    "cloud_cover":    ("cloud_cover", "cloudcover"),
    "weather_code":   ("weather_code", "weathercode"),
    "uv_index":       ("uv_index",),
}

HOURLY_FIELDS: dict[str, tuple[str, ...]] = {
    "temperature":               ("temperature_2m",),
    "feels_like":                ("apparent_temperature",),
    "humidity":                  ("relative_humidity_2m", "relativehumidity_2m"),
    "dew_point":                 ("dew_point_2m", "dewpoint_2m"),
    "precipitation":             ("precipitation",),
    "precipitation_probability": ("precipitation_probability",),
    "weather_code":              ("weather_code", "weathercode"),
    "cloud_cover":               ("cloud_cover", "cloudcover"),
    "visibility":                ("visibility",),
    "wind_speed":                ("wind_speed_10m", "windspeed_10m"),
    "wind_gusts":                ("wind_gusts_10m", "windgusts_10m"),
    "uv_index":                  ("uv_index",),
    "pressure_msl":              ("pressure_msl",),
}

DAILY_FIELDS: dict[str, tuple[str, ...]] = {
    "temperature_max":               ("temperature_2m_max",),
    "temperature_min":               ("temperature_2m_min",),
    "uv_index_max":                  ("uv_index_max",),
    "precipitation_sum":             ("precipitation_sum",),
    "precipitation_probability_max": ("precipitation_probability_max",),
    "wind_speed_max":                ("wind_speed_10m_max", "windspeed_10m_max"),
    "wind_gusts_max":                ("wind_gusts_10m_max", "windgusts_10m_max"),
    "humidity_max":                  ("relative_humidity_2m_max",),
    "cloud_cover_mean":              ("cloud_cover_mean",),
    "weather_code":                  ("weather_code", "weathercode"),
}

_INT_FIELDS = {"weather_code"}


def parse_snapshot(data: Any) -> WeatherSnapshot:
    """Validate a raw Open-Meteo response and build a WeatherSnapshot.

    Args:
        data: Decoded JSON response with any of the keys current, hourly,
            daily.

    Returns:
        WeatherSnapshot with absent groups set to None.

    Raises:
        SnapshotError: If the payload is not a mapping, a group is not a
            mapping, a group lacks its `time` array, a series length differs
            from `time`, or a value is not numeric.
    """
    if not isinstance(data, Mapping):
        raise SnapshotError(f"Expected a mapping payload, got {type(data).__name__}")

    return WeatherSnapshot(
        current=_parse_current(data.get("current")),
        hourly=_parse_series(data.get("hourly"), "hourly", HOURLY_FIELDS, HourlySeries),
        daily=_parse_series(data.get("daily"), "daily", DAILY_FIELDS, DailySeries),
    )


def _parse_current(raw: Any) -> CurrentConditions | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise SnapshotError("Group 'current' must be a mapping")

    defaults = {f.name: f.default for f in fields(CurrentConditions)}
    values: dict[str, Any] = {}
    for name, keys in CURRENT_FIELDS.items():
        value = _lookup(raw, keys)
        if value is None:
            values[name] = defaults[name]
        else:
            values[name] = _number(value, f"current.{keys[0]}", as_int=name in _INT_FIELDS)
    return CurrentConditions(**values)


def _parse_series(raw: Any, group: str, field_map: dict[str, tuple[str, ...]], cls: type):
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise SnapshotError(f"Group '{group}' must be a mapping")

    times = raw.get("time")
    if not isinstance(times, (list, tuple)):
        raise SnapshotError(f"Group '{group}' is missing its 'time' array")
    n = len(times)

    values: dict[str, Any] = {"time": tuple(str(t) for t in times)}
    for name, keys in field_map.items():
        series = _lookup(raw, keys)
        if series is None:
            values[name] = ()
            continue
        label = f"{group}.{keys[0]}"
        if not isinstance(series, (list, tuple)):
            raise SnapshotError(f"Series {label} must be an array")
        if len(series) != n:
            raise SnapshotError(
                f"Series {label} has {len(series)} entries but {group}.time has {n}"
            )
        as_int = name in _INT_FIELDS
        values[name] = tuple(
            (0 if as_int else 0.0) if v is None else _number(v, label, as_int=as_int)
            for v in series
        )
    return cls(**values)


def _lookup(raw: Mapping, keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def _number(value: Any, label: str, as_int: bool = False) -> float | int:
    # bool is an int subclass; a true/false here is a malformed payload
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SnapshotError(f"Non-numeric value {value!r} in {label}")
    return int(value) if as_int else float(value)
