# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
utils.py — Shared utilities: time labels, retry logic and error logging.
"""

import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any


def parse_time(time_str: str) -> datetime | None:
    """Parse an Open-Meteo time string.

    Hourly entries look like 'YYYY-MM-DDTHH:MM', daily ones like 'YYYY-MM-DD'.

    Returns:
        A naive datetime, or None if the string is not in either format.
    """
    for fmt in ("%Y-%m-%dT%H:%M", "%Y-%m-%d"):
        try:
            return datetime.strptime(time_str, fmt)
        except (TypeError, ValueError):
            continue
    return None


def _reformat(time_str: str, out_fmt: str) -> str:
    dt = parse_time(time_str)
    return str(time_str) if dt is None else dt.strftime(out_fmt)


def fmt_day(date_str: str) -> str:
    """'2024-06-01' -> 'Sat 01 Jun'; unparseable input is returned as-is."""
    return _reformat(date_str, "%a %d %b")


def fmt_hour(time_str: str) -> str:
    """'2024-06-01T07:00' -> '07:00'; unparseable input is returned as-is."""
    return _reformat(time_str, "%H:%M")


def day_label(date_str: str, index: int) -> str:
    """'Today', 'Tomorrow', or the weekday name for later forecast days."""
    if index == 0:
        return "Today"
    if index == 1:
        return "Tomorrow"
    dt = parse_time(date_str)
    if dt is None:
        return f"Day {index + 1}"
    return dt.strftime("%A")


DEFAULT_LOG_PATH = Path("logs/weather_insights.log")
MAX_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 5


def with_retry(
    fn: Callable[..., Any],
    *args: Any,
    label: str = "API call",
    log_path: Path = DEFAULT_LOG_PATH,
    attempts: int = MAX_ATTEMPTS,
    delay: float = RETRY_DELAY_SECONDS,
    **kwargs: Any,
) -> Any:
    """Call fn, retrying on any exception, and give up after `attempts` tries.

    Only the Open-Meteo fetches go through here. The AI text client makes a
    single attempt and degrades to None instead.

    Args:
        fn: Callable to invoke with *args / **kwargs.
        label: Name of the call for console messages and the log line.
        log_path: Log file that receives the final failure.
        attempts: Total number of tries.
        delay: Seconds to sleep between tries (not after the last one).

    Returns:
        Whatever fn returns on the first successful try.

    Raises:
        RuntimeError: Once every try has failed, chained to the last error.
    """
    last_error: Exception | None = None
    for attempt in range(1, attempts + 1):
        if attempt > 1:
            time.sleep(delay)
        try:
            return fn(*args, **kwargs)
        except Exception as e:
            last_error = e
            if attempt < attempts:
                print(f"[weather] {label} failed (attempt {attempt}/{attempts}): {e}. Retrying in {delay}s...")

    msg = f"All {attempts} attempts failed for {label}. Check your internet connection."
    print(f"[weather] {msg}")
    log_error(f"{label} failed after {attempts} attempts: {last_error}", log_path=log_path)
    raise RuntimeError(msg) from last_error


def log_error(message: str, log_path: Path = DEFAULT_LOG_PATH) -> None:
    """Append a '<timestamp> [ERROR] <message>' line, creating the log directory.

    Failures to write are ignored so logging never masks the original error.
    """
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(log_path, "a") as f:
            f.write(f"{stamp} [ERROR] {message}\n")
    except OSError:
        pass
