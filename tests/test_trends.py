# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
test_trends.py — Unit tests for weekly comparison, trend insights and slopes.

Daily series are built directly as DailySeries; no API calls.
"""

import pytest

from weather_insights.snapshot import DailySeries, HourlySeries, WeatherSnapshot
from weather_insights.trends import (
    analyze_weather_trends,
    calculate_trends,
    calculate_weekly_comparison,
    generate_trend_insights,
    get_historical_comparison,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_daily(
    highs=(22, 22, 22, 22, 22, 22, 22),
    lows=None,
    precip=None,
    wind=None,
    uv=None,
    precip_prob=None,
    cloud=None,
) -> DailySeries:
    n = len(highs)
    return DailySeries(
        time=tuple(f"2024-06-{d + 1:02d}" for d in range(n)),
        temperature_max=tuple(float(h) for h in highs),
        temperature_min=tuple(lows) if lows is not None else tuple(h - 8.0 for h in highs),
        precipitation_sum=tuple(precip) if precip is not None else (0.0,) * n,
        wind_speed_max=tuple(wind) if wind is not None else (10.0,) * n,
        uv_index_max=tuple(uv) if uv is not None else (3.0,) * n,
        precipitation_probability_max=tuple(precip_prob) if precip_prob is not None else (0.0,) * n,
        cloud_cover_mean=tuple(cloud) if cloud is not None else (),
    )


def make_snapshot(daily: DailySeries) -> WeatherSnapshot:
    return WeatherSnapshot(hourly=HourlySeries(time=("2024-06-01T00:00",)), daily=daily)


WARMING_HIGHS = (20, 21, 19, 20, 26, 27, 28)


# ---------------------------------------------------------------------------
# calculate_weekly_comparison
# ---------------------------------------------------------------------------

class TestWeeklyComparison:

    def setup_method(self):
        self.comparison = calculate_weekly_comparison(make_daily(highs=WARMING_HIGHS))

    def test_day_three_is_excluded(self):
        """mean(20, 21, 19) = 20 vs mean(26, 27, 28) = 27; day 3 (20) is in neither half."""
        assert self.comparison["temperature"]["change"] == pytest.approx(7.0)

    def test_direction_and_percentage(self):
        temp = self.comparison["temperature"]
        assert temp["direction"] == "warmer"
        assert temp["percentage"] == pytest.approx(35.0)
        assert temp["summary"] == "7.0°C warmer"

    def test_zero_first_half_gives_zero_percentage(self):
        precip = self.comparison["precipitation"]
        assert precip["percentage"] == 0.0
        assert precip["direction"] == "drier"

    def test_wind_summary_unit(self):
        assert self.comparison["wind"]["summary"] == "0.0 km/h calmer"


def test_weekly_comparison_needs_five_days():
    assert calculate_weekly_comparison(make_daily(highs=(20, 21, 22, 23))) == {}


def test_weekly_comparison_with_five_days():
    """Second half is days 4..6 clipped to what exists, i.e. day 4 only."""
    comparison = calculate_weekly_comparison(make_daily(highs=(10, 10, 10, 50, 16)))
    assert comparison["temperature"]["change"] == pytest.approx(6.0)


# ---------------------------------------------------------------------------
# generate_trend_insights
# ---------------------------------------------------------------------------

def _insight(insights, title):
    return next(i for i in insights if i["title"] == title)


def test_warming_insight_is_high_severity():
    daily = make_daily(highs=WARMING_HIGHS)
    insights = generate_trend_insights(daily, calculate_weekly_comparison(daily))
    warming = _insight(insights, "Significant Warming Trend")
    assert warming["severity"] == "high"
    assert warming["value"] == pytest.approx(7.0)
    assert warming["icon"] == "📈"


def test_dry_week_insight():
    daily = make_daily()
    insights = generate_trend_insights(daily, calculate_weekly_comparison(daily))
    dry = _insight(insights, "Dry Week Expected")
    assert dry["severity"] == "low"


def test_wet_week_insight():
    daily = make_daily(precip=(0, 0, 0, 5, 10, 10, 10))
    insights = generate_trend_insights(daily, calculate_weekly_comparison(daily))
    wet = _insight(insights, "Wet Week Ahead")
    assert wet["severity"] == "high"
    assert "Conditions becoming wetter" in wet["description"]


def test_stable_pattern_for_constant_highs():
    daily = make_daily()
    insights = generate_trend_insights(daily, calculate_weekly_comparison(daily))
    assert _insight(insights, "Stable Weather Pattern")["severity"] == "low"


def test_high_uv_and_wind_insights():
    daily = make_daily(uv=(9,) * 7, wind=(30, 30, 30, 30, 65, 30, 30))
    insights = generate_trend_insights(daily, calculate_weekly_comparison(daily))
    assert _insight(insights, "High UV Levels This Week")["severity"] == "high"
    assert _insight(insights, "Strong Winds Expected")["severity"] == "high"


def test_large_temperature_range():
    daily = make_daily(highs=(30,) * 7, lows=(5,) * 7)
    insights = generate_trend_insights(daily, calculate_weekly_comparison(daily))
    assert _insight(insights, "Large Temperature Variations")["value"] == pytest.approx(25.0)


def test_no_comparison_skips_temperature_trend():
    daily = make_daily(highs=(20, 30, 20, 30))
    insights = generate_trend_insights(daily, {})
    assert not any("Trend" in i["title"] for i in insights)


# ---------------------------------------------------------------------------
# calculate_trends
# ---------------------------------------------------------------------------

class TestCalculateTrends:

    def setup_method(self):
        daily = make_daily(
            highs=(10, 12, 14, 16, 18, 20, 22),
            precip_prob=(0, 10, 20, 30, 40, 50, 60),
        )
        self.trends = calculate_trends(daily)

    def test_always_three_records(self):
        assert [t["name"] for t in self.trends] == [
            "Temperature Trend", "Precipitation Probability", "Cloud Cover",
        ]

    def test_temperature_slope(self):
        temp = self.trends[0]
        assert temp["slope"] == pytest.approx(2.0)
        assert temp["direction"] == "increasing"
        assert temp["strength"] == "strong"
        assert temp["description"] == "2.00°C per day increase"

    def test_precipitation_slope(self):
        assert self.trends[1]["slope"] == pytest.approx(10.0)
        assert self.trends[1]["strength"] == "strong"

    def test_cloud_falls_back_to_precipitation_probability(self):
        assert self.trends[2]["slope"] == pytest.approx(10.0)
        assert self.trends[2]["description"] == "Becoming cloudier"


def test_two_week_forecast_regressed_in_full():
    """A flat first week followed by a hot second week still trends upward."""
    trends = calculate_trends(make_daily(highs=(20,) * 7 + (34,) * 7))
    assert trends[0]["slope"] > 1
    assert trends[0]["direction"] == "increasing"
    assert trends[0]["strength"] == "strong"


def test_flat_trend_is_weak_and_decreasing():
    trends = calculate_trends(make_daily(cloud=(50,) * 7))
    assert trends[0]["direction"] == "decreasing"
    assert trends[0]["strength"] == "weak"
    assert trends[2]["description"] == "Clearing up"


# ---------------------------------------------------------------------------
# analyze_weather_trends / get_historical_comparison
# ---------------------------------------------------------------------------

def test_analyze_trends_neutral_without_hourly():
    result = analyze_weather_trends(WeatherSnapshot(daily=make_daily()))
    assert result == {"weekly_comparison": {}, "insights": [], "trends": []}


def test_analyze_trends_neutral_with_one_day():
    result = analyze_weather_trends(make_snapshot(make_daily(highs=(20,))))
    assert result["trends"] == []


def test_analyze_trends_full():
    result = analyze_weather_trends(make_snapshot(make_daily(highs=WARMING_HIGHS)))
    assert result["weekly_comparison"]["temperature"]["direction"] == "warmer"
    assert len(result["trends"]) == 3


def test_historical_comparison_above_average():
    """June seasonal average is 19°C; a 30°C week is 11°C above -> extreme anomaly."""
    result = get_historical_comparison(make_snapshot(make_daily(highs=(30,) * 7)), month=6)
    assert result["vs_seasonal_average"]["difference"] == pytest.approx(11.0)
    assert result["vs_seasonal_average"]["description"] == "11.0°C above seasonal average"
    assert result["anomaly"]["severity"] == "extreme"


def test_historical_comparison_normal_week():
    result = get_historical_comparison(make_snapshot(make_daily(highs=(20,) * 7)), month=6)
    assert result["anomaly"] is None


def test_historical_comparison_without_daily():
    assert get_historical_comparison(WeatherSnapshot()) == {}
