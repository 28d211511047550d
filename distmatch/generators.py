"""
Generator catalog for the Distribution Matcher.

Each family is a recipe: one or more normal components, an optional
nonlinear transform to induce skew, optional injected outliers, and an
optional clamp range.  The catalog is fixed: a round draws N distinct
families from it.

The first six families reproduce the classic game set (bimodal,
normal, log-normal, narrow, narrow-with-outliers, wide); the last
three live on a 0–100 "score" scale and exercise outlier injection
and truncation at the bounds.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .sampler import mixture, inject_outliers, clamp_data


TRANSFORMS = {
    'lognormal': lambda x: np.exp(0.7 * x),
    'exp_skew': lambda x: np.exp(0.6 * x) - 1.0,
    'affine': lambda x: 1.5 * x + 20.0,
}


@dataclass(frozen=True)
class GeneratorFamily:
    """Recipe for one sample family.

    Parameters
    ----------
    name : str
        Display name, unique within the catalog.
    components : tuple of (mean, stddev, count)
        Normal components, concatenated in order.
    transform : str or None
        Key into ``TRANSFORMS`` applied after generation.
    n_outliers : int
        Outliers appended beyond the sample range.
    clamp : (low, high) or None
        Truncation range applied to the base sample and again after
        outlier injection.
    """
    name: str
    components: Tuple[Tuple[float, float, int], ...]
    transform: Optional[str] = None
    n_outliers: int = 0
    clamp: Optional[Tuple[float, float]] = None

    @property
    def size(self) -> int:
        return sum(c[2] for c in self.components) + max(0, self.n_outliers)

    def generate(self, rng) -> np.ndarray:
        """Generate one sample from this family using *rng*."""
        values = mixture(self.components, rng)
        if self.transform is not None:
            values = TRANSFORMS[self.transform](values)
        if self.clamp is not None:
            values = clamp_data(values, *self.clamp)
        if self.n_outliers > 0:
            # Outliers sit beyond the clamped range, then get re-clamped
            values = inject_outliers(values, self.n_outliers, rng,
                                     clamp=self.clamp)
        return values


# ── Family definitions ──────────────────────────────────────────────────
_FAMILIES = [
    GeneratorFamily(
        name='Bimodal',
        components=((-2.0, 0.8, 200), (2.0, 0.8, 200)),
    ),
    GeneratorFamily(
        name='Normal',
        components=((0.0, 1.0, 400),),
    ),
    GeneratorFamily(
        name='Log-normal skew',
        components=((0.0, 1.0, 400),),
        transform='lognormal',
    ),
    GeneratorFamily(
        name='Narrow normal',
        components=((0.0, 0.3, 400),),
    ),
    GeneratorFamily(
        name='Narrow with outliers',
        # Two tight clusters far out in the tails
        components=((0.0, 0.4, 380), (5.0, 0.1, 10), (-5.0, 0.1, 10)),
    ),
    GeneratorFamily(
        name='Wide normal',
        components=((0.0, 2.0, 400),),
    ),
    GeneratorFamily(
        name='Right-skewed',
        components=((0.0, 1.0, 350),),
        transform='exp_skew',
    ),
    GeneratorFamily(
        name='Clamped scores',
        components=((30.0, 8.0, 340),),
        transform='affine',
        n_outliers=12,
        clamp=(0.0, 100.0),
    ),
    GeneratorFamily(
        name='Bimodal scores',
        components=((35.0, 8.0, 180), (70.0, 8.0, 180)),
        clamp=(0.0, 100.0),
    ),
]

CATALOG = OrderedDict((f.name, f) for f in _FAMILIES)


def family_names() -> list:
    """Names of all built-in families, in catalog order."""
    return list(CATALOG.keys())


def get_family(name: str) -> GeneratorFamily:
    """Look up a family by name; raises ``ValueError`` if unknown."""
    try:
        return CATALOG[name]
    except KeyError:
        raise ValueError(f"Unknown generator family: {name!r}") from None
