"""
Order statistics and IQR fencing for the box-plot category.

Quantiles use linear interpolation between order statistics at
fractional rank ``p * (n - 1)`` (Hyndman–Fan type 7, the numpy
default).  Fences follow the 1.5 IQR rule; values on a fence count as
core.

Empty input is not an error: scalar statistics return ``nan`` and
array results are empty.
"""

import math
from typing import Tuple

import numpy as np

from .constants import FENCE_FACTOR
from .data_model import BoxPayload, frozen_array


def quantile(sorted_values, p: float) -> float:
    """Type-7 quantile of already-sorted data.

    Parameters
    ----------
    sorted_values : sequence of float
        Data in non-decreasing order.
    p : float
        Probability in [0, 1]; values outside are clamped.

    Returns
    -------
    float
        ``sorted[lower] * (1 - w) + sorted[lower + 1] * w`` with
        ``index = p * (n - 1)``, ``lower = floor(index)``,
        ``w = index - lower``.  ``nan`` for empty input.
    """
    n = len(sorted_values)
    if n == 0:
        return math.nan
    p = min(max(float(p), 0.0), 1.0)
    index = p * (n - 1)
    lower = int(math.floor(index))
    weight = index - lower
    if lower + 1 >= n:
        return float(sorted_values[n - 1])
    return float(sorted_values[lower] * (1.0 - weight)
                 + sorted_values[lower + 1] * weight)


def quartiles(values) -> Tuple[float, float, float]:
    """Return ``(Q1, median, Q3)`` of *values* (any order)."""
    s = np.sort(np.asarray(values, dtype=float))
    return quantile(s, 0.25), quantile(s, 0.5), quantile(s, 0.75)


def fences(values, k: float = FENCE_FACTOR) -> Tuple[float, float]:
    """Return ``(Q1 - k*IQR, Q3 + k*IQR)``; ``(nan, nan)`` if empty."""
    q1, _, q3 = quartiles(values)
    iqr = q3 - q1
    return q1 - k * iqr, q3 + k * iqr


def partition(values, k: float = FENCE_FACTOR) -> Tuple[np.ndarray, np.ndarray]:
    """Split *values* into ``(core, outliers)`` by fence membership.

    Order of appearance is preserved in both parts, and together they
    hold every input value exactly once.
    """
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return np.empty(0, dtype=float), np.empty(0, dtype=float)
    low, high = fences(arr, k)
    inside = (arr >= low) & (arr <= high)
    return arr[inside], arr[~inside]


def five_number_summary(values) -> Tuple[float, float, float, float, float]:
    """Return ``(min, Q1, median, Q3, max)``; all ``nan`` if empty."""
    s = np.sort(np.asarray(values, dtype=float))
    if s.size == 0:
        return (math.nan,) * 5
    return (float(s[0]), quantile(s, 0.25), quantile(s, 0.5),
            quantile(s, 0.75), float(s[-1]))


def box_summary(values, k: float = FENCE_FACTOR) -> BoxPayload:
    """Build the box-plot payload for *values*."""
    arr = np.asarray(values, dtype=float)
    q1, median, q3 = quartiles(arr)
    low, high = fences(arr, k)
    core, outs = partition(arr, k)
    if core.size:
        whisker_low, whisker_high = float(core.min()), float(core.max())
    else:
        whisker_low = whisker_high = math.nan
    return BoxPayload(
        q1=q1, median=median, q3=q3,
        lower_fence=low, upper_fence=high,
        whisker_low=whisker_low, whisker_high=whisker_high,
        core=frozen_array(core), outliers=frozen_array(outs),
    )
