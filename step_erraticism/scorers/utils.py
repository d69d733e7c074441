"""
Shared numeric helpers for the erraticism scorers.
"""

import math

import numpy as np


def positions_array(steps):
    """Stack step positions into an (n, 2) float array."""
    if not steps:
        return np.empty((0, 2))
    return np.array([(s.x, s.y) for s in steps], dtype=float)


def inverted_min_max(values, degenerate=1.0):
    """
    Min-max normalize values and flip them so the smallest maps to 1.0.

    When every value is equal (or the range is not finite) the normal
    formula divides by zero; every output is `degenerate` instead.

    Args:
        values (Sequence[float]): Raw values
        degenerate (float): Constant returned when the range collapses

    Returns:
        list[float]: 1 - (v - min) / (max - min) for each value
    """
    if len(values) == 0:
        return []

    lo = min(values)
    hi = max(values)
    span = hi - lo

    if span == 0 or not math.isfinite(span):
        return [degenerate] * len(values)

    return [1.0 - (v - lo) / span for v in values]
