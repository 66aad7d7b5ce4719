# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
alerts.py — Remember which weather alerts the user has already acknowledged.

An alert is identified by location, alert type, the current date and hour,
and the current temperature and humidity, so the same alert comes back
once conditions or the hour change.

Persistence goes through a small KeyValueStore interface that the caller
injects. MemoryStore keeps values for the life of the process;
JsonFileStore keeps them in a JSON file between CLI runs. The calculators
never see either.
"""

import json
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol

from weather_insights.rules import determine_alert_type
from weather_insights.snapshot import WeatherSnapshot
from weather_insights.utils import DEFAULT_LOG_PATH, log_error

ACK_KEY = "acknowledged_alerts"
MAX_ACKNOWLEDGED = 100


class KeyValueStore(Protocol):
    """String key -> string value storage."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """In-process store; values are lost when the process exits."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Store backed by one JSON object on disk.

    A missing file reads as empty. A file that is not a JSON object is
    reported and read as empty; the next set() overwrites it.
    """

    def __init__(self, path: Path, log_path: Path = DEFAULT_LOG_PATH):
        self.path = Path(path)
        self.log_path = log_path

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"[alerts] Could not read {self.path}: {e}")
            log_error(f"Alert store {self.path} unreadable: {e}", log_path=self.log_path)
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # The target is only ever replaced whole, never rewritten in place
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp_path, "w") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise


def normalize_location(location: str) -> str:
    """Lower-case a location and replace anything but a-z/0-9 with '-'."""
    return re.sub(r"[^a-z0-9]", "-", location.lower())


def generate_alert_id(
    location: str,
    alert_type: str,
    snapshot: Optional[WeatherSnapshot],
    now: Optional[datetime] = None,
) -> str:
    """Build an alert ID like 'new-york--ny-cold-2024-01-15-07-3-80'.

    Args:
        location: Display name of the location.
        alert_type: Result of determine_alert_type().
        snapshot: Forecast supplying current temperature and humidity
            (both 0 when the current group is missing).
        now: Timestamp to stamp the ID with. Defaults to datetime.now().
    """
    if now is None:
        now = datetime.now()
    current = snapshot.current if snapshot is not None else None
    temp = current.temperature if current is not None else 0.0
    humidity = current.humidity if current is not None else 0.0
    return (
        f"{normalize_location(location)}-{alert_type}-"
        f"{now:%Y-%m-%d}-{now:%H}-{temp:.0f}-{humidity:g}"
    )


class AlertAcknowledgments:
    """Acknowledged alert IDs, newest last, capped at `limit` entries."""

    def __init__(
        self,
        store: KeyValueStore,
        limit: int = MAX_ACKNOWLEDGED,
        log_path: Path = DEFAULT_LOG_PATH,
    ):
        self.store = store
        self.limit = limit
        self.log_path = log_path

    def _ids(self) -> list[str]:
        raw = self.store.get(ACK_KEY)
        if not raw:
            return []
        try:
            ids = json.loads(raw)
        except json.JSONDecodeError as e:
            print(f"[alerts] Ignoring corrupt acknowledgment list: {e}")
            log_error(f"Corrupt acknowledgment list: {e}", log_path=self.log_path)
            return []
        if not isinstance(ids, list):
            return []
        return [str(i) for i in ids]

    def is_acknowledged(self, alert_id: str) -> bool:
        return alert_id in self._ids()

    def acknowledge(self, alert_id: str) -> None:
        """Record an ID; repeats are ignored and only the newest `limit` are kept."""
        ids = self._ids()
        if alert_id in ids:
            return
        ids.append(alert_id)
        self.store.set(ACK_KEY, json.dumps(ids[-self.limit:]))

    def acknowledged(self) -> list[str]:
        return self._ids()


def should_show_alert(
    acks: AlertAcknowledgments,
    location: str,
    snapshot: Optional[WeatherSnapshot],
    now: Optional[datetime] = None,
) -> bool:
    """True unless the alert for the current conditions was already acknowledged."""
    alert_id = generate_alert_id(location, determine_alert_type(snapshot), snapshot, now)
    return not acks.is_acknowledged(alert_id)


def acknowledge_current_alert(
    acks: AlertAcknowledgments,
    location: str,
    snapshot: Optional[WeatherSnapshot],
    now: Optional[datetime] = None,
) -> str:
    """Acknowledge the alert for the current conditions and return its ID."""
    alert_id = generate_alert_id(location, determine_alert_type(snapshot), snapshot, now)
    acks.acknowledge(alert_id)
    print(f"[alerts] Acknowledged {alert_id}")
    return alert_id
