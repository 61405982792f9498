"""
Small, stateless statistics helpers shared by the analytics modules.
"""

import math
from collections.abc import Sequence

import numpy as np

__all__ = ["mean", "std", "z_score", "linear_regression", "round_half_up"]


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean. Raises ValueError on empty input."""
    if len(values) == 0:
        raise ValueError("mean() of an empty sequence")
    return float(np.mean(np.asarray(values, dtype=float)))


def std(values: Sequence[float]) -> float:
    """Population standard deviation (ddof=0)."""
    if len(values) == 0:
        raise ValueError("std() of an empty sequence")
    return float(np.std(np.asarray(values, dtype=float)))


def z_score(value: float, mu: float, sigma: float) -> float:
    """Standardized deviation of ``value``; 0 when ``sigma`` is 0."""
    if sigma == 0:
        return 0.0
    return (value - mu) / sigma


def linear_regression(x: Sequence[float], y: Sequence[float]) -> tuple[float, float]:
    """
    Ordinary least squares fit of ``y = slope * x + intercept``.

    Uses the closed-form sums:
        slope = (n*Sxy - Sx*Sy) / (n*Sxx - Sx^2)
        intercept = (Sy - slope*Sx) / n

    Returns ``(nan, nan)`` when every x is identical.
    """
    if len(x) != len(y):
        raise ValueError(f"x and y must have equal length ({len(x)} != {len(y)})")
    if len(x) == 0:
        raise ValueError("linear_regression() needs at least one point")

    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)
    n = len(xs)
    sum_x = xs.sum()
    sum_y = ys.sum()
    sum_xy = float(np.dot(xs, ys))
    sum_x2 = float(np.dot(xs, xs))

    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return float("nan"), float("nan")
    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return float(slope), float(intercept)


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with ties toward +infinity (``floor(x + 0.5)``), unlike banker's ``round``."""
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor
