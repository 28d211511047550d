"""
Normal quantiles and Q-Q coordinates.

``normal_quantile`` is the Abramowitz & Stegun 26.2.23 rational
approximation (absolute error below 4.5e-4), evaluated in closed form
so QQ payloads do not depend on a special-function library.

Edge policy: ``p <= 0`` and ``p >= 1`` return 0.0 instead of raising
or returning an infinity.  Plotting positions ``(i - 0.5) / n`` never
reach either bound, so the saturated value only shows up for direct
calls with out-of-range probabilities.
"""

import math
from typing import Tuple, Union

import numpy as np

from .constants import DEFAULT_QQ_REFERENCE, QQ_REFERENCE_QUARTILE
from .data_model import QQPayload, frozen_array
from .descriptive_stats import quantile

C0, C1, C2 = 2.515517, 0.802853, 0.010328
D1, D2, D3 = 1.432788, 0.189269, 0.001308


def _upper_tail(t):
    """Rational correction ``t - (c0 + c1 t + c2 t^2) / (1 + d1 t + d2 t^2 + d3 t^3)``."""
    num = C0 + C1 * t + C2 * t * t
    den = 1.0 + D1 * t + D2 * t * t + D3 * t * t * t
    return t - num / den


def normal_quantile(p: float) -> float:
    """Approximate standard-normal quantile ``Phi^-1(p)``.

    Uses ``Phi^-1(p) = -Phi^-1(1 - p)`` for ``p < 0.5``; for
    ``p >= 0.5`` evaluates the rational correction at
    ``t = sqrt(-2 ln(1 - p))``.  Returns 0.0 for ``p <= 0`` or ``p >= 1``.
    """
    if not 0.0 < p < 1.0:
        return 0.0
    if p < 0.5:
        return -normal_quantile(1.0 - p)
    t = math.sqrt(-2.0 * math.log(1.0 - p))
    return _upper_tail(t)


def normal_quantiles(p) -> np.ndarray:
    """Vectorised :func:`normal_quantile` (same edge policy)."""
    p = np.asarray(p, dtype=float)
    valid = (p > 0.0) & (p < 1.0)
    lower = p < 0.5
    upper = np.where(lower, 1.0 - p, p)
    with np.errstate(divide='ignore', invalid='ignore'):
        t = np.sqrt(-2.0 * np.log(1.0 - upper))
        z = _upper_tail(t)
    z = np.where(lower, -z, z)
    return np.where(valid, z, 0.0)


def theoretical_quantiles(n: int) -> np.ndarray:
    """Normal quantiles at plotting positions ``(i - 0.5) / n``, i = 1..n."""
    if n <= 0:
        return np.empty(0, dtype=float)
    p = (np.arange(1, n + 1) - 0.5) / n
    return normal_quantiles(p)


def quartile_reference_line(
    theoretical, empirical,
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Line through the (theoretical, empirical) first and third quartiles.

    Endpoints are placed at the extreme theoretical quantiles.  Falls
    back to the identity segment when the fit is undefined.
    """
    theoretical = np.asarray(theoretical, dtype=float)
    sorted_vals = np.sort(np.asarray(empirical, dtype=float))
    if sorted_vals.size < 2:
        return DEFAULT_QQ_REFERENCE
    q25, q75 = quantile(sorted_vals, 0.25), quantile(sorted_vals, 0.75)
    t25, t75 = normal_quantile(0.25), normal_quantile(0.75)
    slope = (q75 - q25) / (t75 - t25)
    intercept = q25 - slope * t25
    x0, x1 = float(theoretical[0]), float(theoretical[-1])
    return (x0, slope * x0 + intercept), (x1, slope * x1 + intercept)


def qq_payload(
    values,
    reference_line: Union[str, Tuple] = DEFAULT_QQ_REFERENCE,
) -> QQPayload:
    """Pair theoretical quantiles with the sorted sample, rank for rank.

    Parameters
    ----------
    values : sequence of float
        Sample in any order.
    reference_line : ((x0, y0), (x1, y1)) or ``"quartile"``
        Fixed endpoints of the comparison line, or ``"quartile"`` to fit
        it through the sample quartiles.
    """
    empirical = np.sort(np.asarray(values, dtype=float).ravel())
    theoretical = theoretical_quantiles(empirical.size)
    if reference_line == QQ_REFERENCE_QUARTILE:
        line = quartile_reference_line(theoretical, empirical)
    else:
        (x0, y0), (x1, y1) = reference_line
        line = ((float(x0), float(y0)), (float(x1), float(y1)))
    return QQPayload(
        theoretical=frozen_array(theoretical),
        empirical=frozen_array(empirical),
        reference_line=line,
    )
