# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""Tests for series.py — mean, std_dev, linear_regression, round_half_up."""

import pytest

from weather_insights.series import (
    linear_regression,
    mean,
    round_half_up,
    safe_max,
    safe_min,
    std_dev,
)


# ---------------------------------------------------------------------------
# mean / std_dev
# ---------------------------------------------------------------------------

def test_mean_of_values():
    assert mean([1, 2, 3, 4]) == pytest.approx(2.5)


def test_mean_of_empty_is_zero():
    """Empty input must not raise; calculators rely on the 0.0 fallback."""
    assert mean([]) == 0.0


def test_std_dev_is_population():
    """[1, 3] has population std 1.0 (sample std would be 1.414)."""
    assert std_dev([1, 3]) == pytest.approx(1.0)


def test_std_dev_of_constant_series_is_zero():
    assert std_dev([5, 5, 5, 5]) == 0.0


def test_std_dev_of_empty_is_zero():
    assert std_dev([]) == 0.0


# ---------------------------------------------------------------------------
# linear_regression
# ---------------------------------------------------------------------------

class TestLinearRegression:

    def test_perfect_line(self):
        """y = 2x + 1 sampled at x = 0..4."""
        result = linear_regression([1, 3, 5, 7, 9])
        assert result["slope"] == pytest.approx(2.0)
        assert result["intercept"] == pytest.approx(1.0)

    def test_flat_series_has_zero_slope(self):
        result = linear_regression([4, 4, 4])
        assert result["slope"] == pytest.approx(0.0)
        assert result["intercept"] == pytest.approx(4.0)

    def test_decreasing_series(self):
        result = linear_regression([10, 8, 6])
        assert result["slope"] == pytest.approx(-2.0)
        assert result["intercept"] == pytest.approx(10.0)

    def test_noisy_series(self):
        """[1, 2, 2, 4]: sum_xy=18, n=4, sum_x=6, sum_y=9, sum_x2=14 -> slope 0.9."""
        result = linear_regression([1, 2, 2, 4])
        assert result["slope"] == pytest.approx(0.9)
        assert result["intercept"] == pytest.approx(0.9)

    def test_single_point(self):
        result = linear_regression([7])
        assert result == {"slope": 0.0, "intercept": 7.0}

    def test_empty(self):
        assert linear_regression([]) == {"slope": 0.0, "intercept": 0.0}


# ---------------------------------------------------------------------------
# round_half_up / safe_max / safe_min
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value, expected", [
    (56.5, 57),
    (57.5, 58),
    (2.4, 2),
    (-0.5, 0),
    (0.0, 0),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_safe_max_and_min_defaults():
    assert safe_max([]) is None
    assert safe_min([], default=3.0) == 3.0
    assert safe_max([1, 5, 2]) == 5
    assert safe_min([1, 5, 2]) == 1
