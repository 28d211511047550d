"""
Random sampling primitives for the Distribution Matcher.

Normal deviates are produced with the Box–Muller transform from an
explicit entropy source rather than a module-level generator, so a
round can be reproduced exactly from a seed (or from a scripted
sequence in tests).

An entropy source is any object with a numpy-style ``random(size)``
method returning uniforms on [0, 1), normally a
``numpy.random.Generator``.
"""

from typing import Iterable, Optional, Tuple

import numpy as np

from .constants import OUTLIER_BAND


def _uniform_open(rng, count: int) -> np.ndarray:
    """Take the next *count* non-zero uniforms from *rng*, in stream order.

    Exact zeros are skipped and the shortfall is drawn again, so the
    entropy source is consumed exactly as a one-at-a-time
    ``while u == 0: u = random()`` loop would consume it.  Box–Muller
    takes ``log(u)``, which is undefined at 0.
    """
    u = np.array(rng.random(count), dtype=float).reshape(count)
    u = u[u != 0.0]
    while u.size < count:
        extra = np.asarray(rng.random(count - u.size), dtype=float).ravel()
        u = np.concatenate([u, extra[extra != 0.0]])
    return u


def normal(mean: float, stddev: float, count: int, rng) -> np.ndarray:
    """Draw *count* normal deviates with the given mean and std dev.

    Parameters
    ----------
    mean, stddev : float
        Location and scale of the normal distribution.
    count : int
        Number of values.  ``count <= 0`` returns an empty array.
    rng : entropy source
        Object with a ``random(size)`` method.

    Returns
    -------
    numpy.ndarray
        ``mean + stddev * z`` with ``z = sqrt(-2 ln u) * cos(2 pi v)``.
        Deviate *i* uses the *i*-th ``(u, v)`` pair of the non-zero
        uniform stream: ``u0, v0, u1, v1, ...``.
    """
    if count <= 0:
        return np.empty(0, dtype=float)
    pairs = _uniform_open(rng, 2 * count)
    u, v = pairs[0::2], pairs[1::2]
    z = np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v)
    return mean + stddev * z


def mixture(components: Iterable[Tuple[float, float, int]], rng) -> np.ndarray:
    """Concatenate ``normal()`` draws for ``(mean, stddev, count)`` components."""
    parts = [normal(mean, std, count, rng) for mean, std, count in components]
    if not parts:
        return np.empty(0, dtype=float)
    return np.concatenate(parts)


def clamp_data(values, low: float, high: float) -> np.ndarray:
    """Bound *values* to ``[low, high]`` by truncation.

    Values outside the range are moved onto the bound, not rejected, so
    the sample size is preserved and mass piles up at the edges.
    """
    if low > high:
        raise ValueError(f"clamp range is empty: [{low}, {high}]")
    return np.clip(np.asarray(values, dtype=float), low, high)


# ── Outlier injection ────────────────────────────────────────────────────

def outliers(
    low: float,
    high: float,
    count: int,
    rng,
    band: Tuple[float, float] = OUTLIER_BAND,
) -> np.ndarray:
    """Draw *count* values just beyond ``low`` or ``high``.

    Each value independently goes below ``low`` or above ``high`` with
    probability 1/2, offset by a uniform draw from *band*.
    """
    if count <= 0:
        return np.empty(0, dtype=float)
    near, far = band
    side = np.asarray(rng.random(count), dtype=float) < 0.5
    offset = near + (far - near) * np.asarray(rng.random(count), dtype=float)
    return np.where(side, low - offset, high + offset)


def inject_outliers(
    values,
    count: int,
    rng,
    *,
    clamp: Optional[Tuple[float, float]] = None,
    band: Tuple[float, float] = OUTLIER_BAND,
) -> np.ndarray:
    """Append *count* outliers beyond the range of *values*.

    When *clamp* is given the combined sample is re-clamped, so outliers
    past the clamp bound end up on it.
    """
    base = np.asarray(values, dtype=float)
    if count <= 0 or base.size == 0:
        combined = base
    else:
        extra = outliers(float(base.min()), float(base.max()), count, rng,
                         band=band)
        combined = np.concatenate([base, extra])
    if clamp is not None:
        combined = clamp_data(combined, *clamp)
    return combined
