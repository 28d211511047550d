"""
Round orchestration for the Distribution Matcher.

``generate_round`` draws N distinct generator families, generates one
sample per family, derives a density, box and Q-Q artifact from each
sample, and assigns display labels to every category through an
independent Fisher–Yates shuffle.  The resulting identity map (sample
identity → one label per category) is the only ground truth the match
evaluator consults.

A round is self-contained: starting a new one means calling
``generate_round`` again, and nothing is carried over.
"""

from typing import Dict, List, Optional, Sequence

import numpy as np

from .constants import (
    CATEGORIES, CATEGORY_DENSITY, CATEGORY_BOX, CATEGORY_QQ,
    IDENTITY_LENGTH, base36, category_labels,
)
from .data_model import (
    DerivedArtifact, EvaluationResult, Progress, RoundConfig, Sample,
    frozen_array,
)
from .density import density_payload
from .descriptive_stats import box_summary
from .generators import CATALOG, family_names, get_family
from .match_evaluator import MatchEvaluator
from .quantile_mapper import qq_payload


def shuffle(items: Sequence, rng) -> list:
    """Return a uniformly shuffled copy of *items* (Fisher–Yates).

    Only ``rng.random()`` is used, so any entropy source works.
    """
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = min(int(float(rng.random()) * (i + 1)), i)
        out[i], out[j] = out[j], out[i]
    return out


def _new_identity(rng, taken) -> str:
    """Draw a fresh base-36 identity not already in *taken*."""
    space = 36 ** IDENTITY_LENGTH
    while True:
        ident = base36(min(int(float(rng.random()) * space), space - 1))
        if ident not in taken:
            return ident


class DistributionSet:
    """One generated round: samples, labelled artifacts and match state.

    Build with :func:`generate_round` rather than directly.

    Parameters
    ----------
    samples : list of Sample
        Generated samples, in generation order.
    artifacts : dict
        ``{category: [DerivedArtifact, ...]}`` in display (label) order.
    config : RoundConfig
        Parameters the round was generated with.
    """

    def __init__(self, samples: List[Sample],
                 artifacts: Dict[str, List[DerivedArtifact]],
                 config: RoundConfig):
        self._samples = list(samples)
        self._artifacts = {cat: list(artifacts[cat]) for cat in CATEGORIES}
        self._config = config

        labels_by_identity = {s.identity: {} for s in self._samples}
        for cat in CATEGORIES:
            for art in self._artifacts[cat]:
                labels_by_identity[art.identity][cat] = art.label
        self._identity_map = {
            ident: tuple(labels[cat] for cat in CATEGORIES)
            for ident, labels in labels_by_identity.items()
        }
        self._evaluator = MatchEvaluator(self._identity_map)

    # ── Read-only round data ─────────────────────────────────────────

    @property
    def config(self) -> RoundConfig:
        return self._config

    @property
    def samples(self) -> List[Sample]:
        return list(self._samples)

    @property
    def identity_map(self) -> Dict[str, tuple]:
        """Sample identity → ``(density, box, qq)`` labels."""
        return dict(self._identity_map)

    @property
    def size(self) -> int:
        return len(self._samples)

    def sample(self, identity: str) -> Sample:
        for s in self._samples:
            if s.identity == identity:
                return s
        raise ValueError(f"No sample with identity {identity!r}")

    def artifacts(self, category: str) -> List[DerivedArtifact]:
        """Artifacts of *category* in display order."""
        if category not in self._artifacts:
            raise ValueError(f"Unknown plot category: {category!r}")
        return list(self._artifacts[category])

    def labels(self, category: str) -> List[str]:
        return [a.label for a in self.artifacts(category)]

    def artifact(self, category: str, label: str) -> DerivedArtifact:
        for art in self.artifacts(category):
            if art.label == label:
                return art
        raise ValueError(
            f"Label {label!r} does not exist in category {category!r}"
        )

    # ── Match state (delegated) ──────────────────────────────────────

    @property
    def evaluator(self) -> MatchEvaluator:
        return self._evaluator

    def select(self, category: str, label: str) -> None:
        self._evaluator.select(category, label)

    def deselect(self, category: str) -> None:
        self._evaluator.deselect(category)

    def clear_selection(self) -> None:
        self._evaluator.clear_selection()

    @property
    def selection(self) -> Dict[str, str]:
        return self._evaluator.selection

    @property
    def state(self) -> str:
        return self._evaluator.state

    def evaluate(self) -> EvaluationResult:
        return self._evaluator.evaluate()

    @property
    def found_matches(self) -> set:
        return self._evaluator.found_matches

    def progress(self) -> Progress:
        return self._evaluator.progress()

    @property
    def is_complete(self) -> bool:
        return self._evaluator.is_complete


def _build_artifacts(sample: Sample, config: RoundConfig) -> Dict[str, object]:
    """Compute the three payloads for one sample."""
    return {
        CATEGORY_DENSITY: density_payload(
            sample.values, config.bandwidth,
            points=config.kde_points, method=config.kde_method,
        ),
        CATEGORY_BOX: box_summary(sample.values),
        CATEGORY_QQ: qq_payload(sample.values, config.qq_reference),
    }


def generate_round(config: Optional[RoundConfig] = None,
                   rng=None) -> DistributionSet:
    """Generate a fresh round.

    Parameters
    ----------
    config : RoundConfig or None
        Generation parameters; defaults to ``RoundConfig()``.
    rng : entropy source or None
        Object with a numpy-style ``random(size)`` method.  When
        ``None``, ``numpy.random.default_rng(config.seed)`` is used.

    Returns
    -------
    DistributionSet

    Raises
    ------
    ValueError
        If *config* cannot produce a round (see ``RoundConfig.validate``).
    """
    if config is None:
        config = RoundConfig()
    config.validate(CATALOG.keys())
    if rng is None:
        rng = np.random.default_rng(config.seed)

    names = list(config.catalog) if config.catalog is not None else family_names()
    chosen = shuffle(names, rng)[:config.n_samples]

    samples: List[Sample] = []
    taken = set()
    for name in chosen:
        family = get_family(name)
        values = family.generate(rng)
        identity = _new_identity(rng, taken)
        taken.add(identity)
        samples.append(Sample(identity=identity,
                              values=frozen_array(values),
                              family=family.name))

    payloads = [_build_artifacts(s, config) for s in samples]

    artifacts: Dict[str, List[DerivedArtifact]] = {}
    for cat in CATEGORIES:
        order = shuffle(range(len(samples)), rng)
        labels = category_labels(cat, len(samples))
        artifacts[cat] = [
            DerivedArtifact(
                category=cat,
                label=label,
                identity=samples[idx].identity,
                payload=payloads[idx][cat],
            )
            for label, idx in zip(labels, order)
        ]

    return DistributionSet(samples, artifacts, config)
