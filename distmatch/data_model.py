"""
Data model for the Distribution Matcher.

Immutable dataclasses describing one game round: the generated samples,
the plot-ready payloads derived from them, and the results reported by
the match evaluator.  Everything here is constructed once per round by
``distribution_set`` and never mutated.  Chart renderers and the GUI
receive it read-only.

Numeric payloads are ``float64`` numpy arrays with the writeable flag
cleared, so accidental in-place edits raise instead of leaking into
other views of the same sample.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from .constants import (
    DEFAULT_N_SAMPLES, DEFAULT_BANDWIDTH, KDE_POINTS,
    DEFAULT_KDE_METHOD, DEFAULT_QQ_REFERENCE, QQ_REFERENCE_QUARTILE,
    STATUS_CONFIRMED,
)


def frozen_array(values) -> np.ndarray:
    """Return a read-only ``float64`` copy of *values*."""
    arr = np.array(values, dtype=float).ravel()
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Sample:
    """One generated distribution.

    Parameters
    ----------
    identity : str
        Opaque id, unique within the round.
    values : numpy.ndarray
        Observations in generation order (read-only).
    family : str
        Name of the generator family.  Informational only; the matching
        logic never looks at it.
    """
    identity: str
    values: np.ndarray
    family: str

    @property
    def size(self) -> int:
        return len(self.values)


@dataclass(frozen=True, eq=False)
class DensityPayload:
    """KDE curve and histogram binning for the density category."""
    xs: np.ndarray
    ys: np.ndarray
    values: np.ndarray
    bin_edges: np.ndarray
    bin_counts: np.ndarray
    bandwidth: float


@dataclass(frozen=True, eq=False)
class BoxPayload:
    """Five-number summary with IQR fences.

    ``whisker_low`` / ``whisker_high`` are the extreme values inside the
    fences (Tukey whiskers).  ``core`` and ``outliers`` partition the
    sample by fence membership.
    """
    q1: float
    median: float
    q3: float
    lower_fence: float
    upper_fence: float
    whisker_low: float
    whisker_high: float
    core: np.ndarray
    outliers: np.ndarray

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1


@dataclass(frozen=True, eq=False)
class QQPayload:
    """Theoretical-normal vs. empirical quantiles, paired rank-for-rank."""
    theoretical: np.ndarray
    empirical: np.ndarray
    reference_line: Tuple[Tuple[float, float], Tuple[float, float]]


Payload = Union[DensityPayload, BoxPayload, QQPayload]


@dataclass(frozen=True, eq=False)
class DerivedArtifact:
    """A plot-ready payload with its display label.

    Parameters
    ----------
    category : str
        One of ``"density"``, ``"box"``, ``"qq"``.
    label : str
        Category-scoped display label, e.g. ``"b"``, ``"2"``, ``"III"``.
    identity : str
        Identity of the Sample this artifact was computed from.
    payload : DensityPayload, BoxPayload or QQPayload
    """
    category: str
    label: str
    identity: str
    payload: Payload


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of ``MatchEvaluator.evaluate``.

    ``triple`` is the evaluated ``(density, box, qq)`` labels; ``None``
    when the selection was incomplete.  ``identity`` is set only for a
    confirmed match.
    """
    status: str
    triple: Optional[Tuple[str, str, str]] = None
    identity: Optional[str] = None

    @property
    def confirmed(self) -> bool:
        return self.status == STATUS_CONFIRMED


@dataclass(frozen=True)
class Progress:
    """Confirmed matches out of the round total."""
    confirmed_count: int
    total: int

    @property
    def complete(self) -> bool:
        return self.total > 0 and self.confirmed_count >= self.total


@dataclass(frozen=True)
class RoundConfig:
    """Generation parameters for one round.

    Parameters
    ----------
    n_samples : int
        Number of distributions in the round (N).
    catalog : tuple of str or None
        Generator family names to draw from.  ``None`` means the full
        built-in catalog.
    seed : int or None
        Seed for ``numpy.random.default_rng`` when no entropy source is
        passed explicitly.
    bandwidth : float
        Gaussian KDE bandwidth.
    kde_points : int
        Number of KDE evaluation points.
    kde_method : str
        ``"exact"`` or ``"binned"``.
    qq_reference : tuple or str
        Fixed reference-line endpoints ``((x0, y0), (x1, y1))`` or
        ``"quartile"`` to fit the line through the sample quartiles.
    """
    n_samples: int = DEFAULT_N_SAMPLES
    catalog: Optional[Tuple[str, ...]] = None
    seed: Optional[int] = None
    bandwidth: float = DEFAULT_BANDWIDTH
    kde_points: int = KDE_POINTS
    kde_method: str = DEFAULT_KDE_METHOD
    qq_reference: Union[str, Tuple[Tuple[float, float], Tuple[float, float]]] = \
        DEFAULT_QQ_REFERENCE

    @classmethod
    def from_dict(cls, config: dict) -> "RoundConfig":
        """Build a config from a GUI-style dict, ignoring unknown keys."""
        known = {
            'n_samples', 'catalog', 'seed', 'bandwidth',
            'kde_points', 'kde_method', 'qq_reference',
        }
        kwargs = {k: v for k, v in config.items() if k in known}
        if kwargs.get('catalog') is not None:
            kwargs['catalog'] = tuple(kwargs['catalog'])
        return cls(**kwargs)

    def validate(self, available_families) -> None:
        """Raise ``ValueError`` if the config cannot produce a round.

        Parameters
        ----------
        available_families : iterable of str
            Names of the built-in generator families.
        """
        available = set(available_families)
        if self.n_samples < 1:
            raise ValueError(
                f"n_samples must be at least 1, got {self.n_samples}"
            )
        names = self.catalog if self.catalog is not None else tuple(available)
        unknown = [n for n in names if n not in available]
        if unknown:
            raise ValueError(
                f"Unknown generator families: {', '.join(map(repr, unknown))}"
            )
        if len(set(names)) != len(names):
            raise ValueError("Generator catalog contains duplicate families")
        if len(names) < self.n_samples:
            raise ValueError(
                f"Catalog has {len(names)} families but the round needs "
                f"{self.n_samples} distinct ones"
            )
        if not self.bandwidth > 0:
            raise ValueError(
                f"bandwidth must be positive, got {self.bandwidth}"
            )
        if self.kde_points < 2:
            raise ValueError(
                f"kde_points must be at least 2, got {self.kde_points}"
            )
        if self.kde_method not in ("exact", "binned"):
            raise ValueError(f"Unknown kde_method: {self.kde_method!r}")
        if self.qq_reference != QQ_REFERENCE_QUARTILE:
            try:
                (x0, y0), (x1, y1) = self.qq_reference
                float(x0), float(y0), float(x1), float(y1)
            except (TypeError, ValueError):
                raise ValueError(
                    "qq_reference must be 'quartile' or "
                    "((x0, y0), (x1, y1)), got "
                    f"{self.qq_reference!r}"
                ) from None


IdentityTriple = Tuple[str, str, str]
