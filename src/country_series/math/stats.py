"""Descriptive statistics over the valid points of a series."""

from dataclasses import dataclass

import numpy as np

from .utils import NumericInput, paired_arrays, to_numpy


@dataclass(frozen=True)
class LinearFit:
    """Least squares line ``y = slope * x + intercept``."""

    slope: float
    intercept: float
    points: int


def mean(values: NumericInput) -> float | None:
    """Return the arithmetic mean, or None for an empty input."""
    vals = to_numpy(values)
    if vals.size == 0:
        return None
    return float(vals.sum() / vals.size)


def least_squares(years: NumericInput, values: NumericInput) -> LinearFit | None:
    """Fit a line with the closed-form summation formulas.

    Returns None when there are no points or when every x is identical, in
    which case the slope is undefined.
    """
    xs, ys = paired_arrays(years, values)
    n = xs.size
    if n == 0:
        return None
    sum_x = float(xs.sum())
    sum_y = float(ys.sum())
    sum_xy = float(np.dot(xs, ys))
    sum_x2 = float(np.dot(xs, xs))
    denominator = n * sum_x2 - sum_x * sum_x
    if denominator == 0:
        return None
    slope = (n * sum_xy - sum_x * sum_y) / denominator
    intercept = (sum_y - slope * sum_x) / n
    return LinearFit(slope=slope, intercept=intercept, points=n)


def is_monotonic(values: NumericInput) -> bool | None:
    """Check whether the sequence is non-decreasing or non-increasing.

    The direction is taken from the first two values; ties satisfy either
    direction. Returns None for an empty input and True for a single value.
    """
    vals = to_numpy(values)
    if vals.size == 0:
        return None
    if vals.size == 1:
        return True
    steps = np.diff(vals[1:])
    if vals[1] >= vals[0]:
        return bool(np.all(steps >= 0))
    return bool(np.all(steps <= 0))


__all__ = ["LinearFit", "is_monotonic", "least_squares", "mean"]
