# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
geocode.py — Look up coordinates for a place name using Open-Meteo Geocoding API.

Free, no API key required.
API docs: https://open-meteo.com/en/docs/geocoding-api
"""

import requests

from weather_insights.utils import with_retry

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"


class LocationNotFoundError(ValueError):
    """Raised when the geocoding API has no match for a place name."""


def geocode(place: str) -> dict:
    """Resolve a place name to coordinates, using the first match only.

    Args:
        place: Human-readable place name, e.g. 'Tokyo' or 'London, UK'.

    Returns:
        Dict with keys: latitude (float), longitude (float), name (str).
        The name is a canonical 'City, Region, Country' string; the region
        is left out when the API has none.

    Raises:
        LocationNotFoundError: If no results are found for the place name.
        RuntimeError: If all API retry attempts fail.
    """
    params = {
        "name": place,
        "count": 1,
        "language": "en",
        "format": "json",
    }

    def _call():
        r = requests.get(GEOCODING_URL, params=params, timeout=10)
        r.raise_for_status()
        return r.json()

    data = with_retry(_call, label=f"Geocoding API for '{place}'")

    results = data.get("results")
    if not results:
        raise LocationNotFoundError(f'Location "{place}" not found. Try a more specific name.')

    match = results[0]
    name_parts = [match.get("name", place)]
    for key in ("admin1", "country"):
        if match.get(key):
            name_parts.append(match[key])

    return {
        "latitude": match["latitude"],
        "longitude": match["longitude"],
        "name": ", ".join(name_parts),
    }
