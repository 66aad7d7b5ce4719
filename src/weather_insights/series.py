# Project: weather-insights
# Owner: GreenUnicorn
# Built with: Claude (Anthropic)
"""
series.py — Statistical primitives shared by every calculator.

All calculations use the Python standard library only (no numpy/scipy).
Empty input never raises: mean and std_dev return 0.0 so that callers can
fall through to their neutral results.
"""

from __future__ import annotations

import math
from collections.abc import Sequence


def mean(xs: Sequence[float]) -> float:
    """Arithmetic mean, or 0.0 for an empty sequence."""
    if not xs:
        return 0.0
    return sum(xs) / len(xs)


def std_dev(xs: Sequence[float]) -> float:
    """Population standard deviation (divides by N, not N-1).

    This is the spread of the values themselves, not an estimate of a
    wider population, so [1, 3] gives 1.0 rather than 1.414.
    """
    if not xs:
        return 0.0
    m = mean(xs)
    return math.sqrt(sum((x - m) ** 2 for x in xs) / len(xs))


def linear_regression(xs: Sequence[float]) -> dict:
    """Least-squares line through (i, xs[i]) for i = 0..N-1.

    OLS formula: slope = (n*sum(xy) - sum(x)*sum(y)) / (n*sum(x^2) - sum(x)^2)

    Returns dict with keys:
        slope (float, units per step), intercept (float, value at i = 0)

    Fewer than two points, or a zero denominator, gives slope 0.0.
    """
    n = len(xs)
    if n == 0:
        return {"slope": 0.0, "intercept": 0.0}
    if n < 2:
        return {"slope": 0.0, "intercept": float(xs[0])}

    sum_x  = sum(range(n))
    sum_y  = sum(xs)
    sum_xy = sum(i * y for i, y in enumerate(xs))
    sum_x2 = sum(i * i for i in range(n))

    denom = n * sum_x2 - sum_x ** 2
    if denom == 0:
        return {"slope": 0.0, "intercept": sum_y / n}

    slope     = (n * sum_xy - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n
    return {"slope": slope, "intercept": intercept}


def round_half_up(x: float) -> int:
    """Round to the nearest integer with .5 going up (Python's round() is banker's)."""
    return math.floor(x + 0.5)


def safe_max(xs: Sequence[float], default: float | None = None) -> float | None:
    """max() that returns `default` for an empty sequence."""
    return max(xs) if xs else default


def safe_min(xs: Sequence[float], default: float | None = None) -> float | None:
    """min() that returns `default` for an empty sequence."""
    return min(xs) if xs else default
