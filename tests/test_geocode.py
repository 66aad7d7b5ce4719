# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
test_geocode.py — Unit tests for geocode.py.

All tests mock with_retry — no real network calls.
"""

from unittest.mock import MagicMock, patch

import pytest

from weather_insights.geocode import GEOCODING_URL, LocationNotFoundError, geocode


def _match(name="Tokyo", admin1="Tokyo", country="Japan", lat=35.6895, lon=139.6917) -> dict:
    return {
        "name": name,
        "admin1": admin1,
        "country": country,
        "latitude": lat,
        "longitude": lon,
    }


def _use_response(monkeypatch, payload: dict) -> None:
    monkeypatch.setattr("weather_insights.geocode.with_retry", lambda fn, **kw: payload)


# ---------------------------------------------------------------------------
# Matches
# ---------------------------------------------------------------------------

def test_coordinates_from_first_match(monkeypatch):
    _use_response(monkeypatch, {"results": [_match()]})
    result = geocode("Tokyo")
    assert result["latitude"] == pytest.approx(35.6895)
    assert result["longitude"] == pytest.approx(139.6917)


def test_canonical_name(monkeypatch):
    _use_response(monkeypatch, {"results": [_match("London", "England", "United Kingdom")]})
    assert geocode("london")["name"] == "London, England, United Kingdom"


def test_region_left_out_when_null(monkeypatch):
    _use_response(monkeypatch, {"results": [_match("Singapore", None, "Singapore")]})
    assert geocode("Singapore")["name"] == "Singapore, Singapore"


def test_later_matches_ignored(monkeypatch):
    _use_response(monkeypatch, {"results": [
        _match("Paris", "Île-de-France", "France", 48.8566, 2.3522),
        _match("Paris", "Texas", "United States", 33.6609, -95.5555),
    ]})
    assert geocode("Paris")["latitude"] == pytest.approx(48.8566)


def test_request_asks_for_one_result():
    response = MagicMock()
    response.json.return_value = {"results": [_match()]}
    with patch("weather_insights.geocode.requests.get", return_value=response) as get:
        geocode("Tokyo")
    args, kwargs = get.call_args
    assert args[0] == GEOCODING_URL
    assert kwargs["params"]["name"] == "Tokyo"
    assert kwargs["params"]["count"] == 1


# ---------------------------------------------------------------------------
# No match
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("payload", [{"results": []}, {}])
def test_no_match_raises(monkeypatch, payload):
    _use_response(monkeypatch, payload)
    with pytest.raises(LocationNotFoundError, match='"Atlantis" not found'):
        geocode("Atlantis")


def test_location_not_found_is_value_error():
    assert issubclass(LocationNotFoundError, ValueError)


def test_retry_failure_propagates(monkeypatch):
    def failing(fn, **kw):
        raise RuntimeError("All 3 attempts failed")

    monkeypatch.setattr("weather_insights.geocode.with_retry", failing)
    with pytest.raises(RuntimeError):
        geocode("Tokyo")
