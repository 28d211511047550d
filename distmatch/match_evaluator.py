"""
Match evaluation for one round.

The evaluator owns the only mutable state of a round: the current
selection (at most one label per category) and the set of confirmed
label triples.  The identity map it checks against is fixed at
construction.

Selection states::

    empty  --select-->  partial  --select-->  ready
      ^                                         |
      +------------- evaluate() ----------------+
                (confirmed or rejected)

Both outcomes clear the selection.  A confirmed triple's labels are
locked for the rest of the round; ``select`` silently ignores them.
"""

from typing import Dict, Mapping, Optional, Set, Tuple

from .constants import (
    CATEGORIES, STATUS_CONFIRMED, STATUS_REJECTED, STATUS_INCOMPLETE,
    STATE_EMPTY, STATE_PARTIAL, STATE_READY,
)
from .data_model import EvaluationResult, Progress, IdentityTriple


class MatchEvaluator:
    """Tracks selections and confirmed matches against an identity map.

    Parameters
    ----------
    identity_map : mapping of str to (str, str, str)
        Sample identity → ``(density, box, qq)`` labels.
    """

    def __init__(self, identity_map: Mapping[str, IdentityTriple]):
        self._identity_map: Dict[str, IdentityTriple] = {
            ident: tuple(triple) for ident, triple in identity_map.items()
        }
        self._by_triple: Dict[IdentityTriple, str] = {
            triple: ident for ident, triple in self._identity_map.items()
        }
        self._labels = {
            cat: {triple[i] for triple in self._identity_map.values()}
            for i, cat in enumerate(CATEGORIES)
        }
        self._selection: Dict[str, str] = {}
        self._found: Set[IdentityTriple] = set()
        self._locked = {cat: set() for cat in CATEGORIES}

    # ── Selection ────────────────────────────────────────────────────

    def _check_category(self, category: str) -> None:
        if category not in self._labels:
            raise ValueError(f"Unknown plot category: {category!r}")

    def select(self, category: str, label: str) -> None:
        """Choose *label* for *category*, replacing any previous choice.

        Labels that are already part of a confirmed match are ignored.
        Raises ``ValueError`` for an unknown category or label.
        """
        self._check_category(category)
        if label not in self._labels[category]:
            raise ValueError(
                f"Label {label!r} does not exist in category {category!r}"
            )
        if label in self._locked[category]:
            return
        self._selection[category] = label

    def deselect(self, category: str) -> None:
        """Clear the choice for *category* (no-op if nothing is chosen)."""
        self._check_category(category)
        self._selection.pop(category, None)

    def clear_selection(self) -> None:
        self._selection.clear()

    @property
    def selection(self) -> Dict[str, str]:
        """Copy of the current selection, ``{category: label}``."""
        return dict(self._selection)

    def selected(self, category: str) -> Optional[str]:
        return self._selection.get(category)

    @property
    def state(self) -> str:
        """``"empty"``, ``"partial"`` or ``"ready"``."""
        if not self._selection:
            return STATE_EMPTY
        if len(self._selection) < len(CATEGORIES):
            return STATE_PARTIAL
        return STATE_READY

    # ── Evaluation ───────────────────────────────────────────────────

    def evaluate(self) -> EvaluationResult:
        """Check the current selection against the identity map.

        Returns ``"incomplete"`` (selection untouched) if any category
        is unselected.  Otherwise the selection is cleared and the
        result is ``"confirmed"`` when the triple equals some sample's
        labels, ``"rejected"`` if not.
        """
        if self.state != STATE_READY:
            return EvaluationResult(status=STATUS_INCOMPLETE)

        triple = tuple(self._selection[cat] for cat in CATEGORIES)
        self._selection.clear()
        identity = self._by_triple.get(triple)
        if identity is None:
            return EvaluationResult(status=STATUS_REJECTED, triple=triple)

        self._found.add(triple)
        for cat, label in zip(CATEGORIES, triple):
            self._locked[cat].add(label)
        return EvaluationResult(
            status=STATUS_CONFIRMED, triple=triple, identity=identity,
        )

    # ── Progress ─────────────────────────────────────────────────────

    @property
    def found_matches(self) -> Set[Tuple[str, str, str]]:
        """Copy of the confirmed triples."""
        return set(self._found)

    def is_locked(self, category: str, label: str) -> bool:
        """``True`` if *label* belongs to a confirmed match."""
        self._check_category(category)
        return label in self._locked[category]

    def matched_identities(self) -> Set[str]:
        return {self._by_triple[t] for t in self._found}

    def progress(self) -> Progress:
        return Progress(confirmed_count=len(self._found),
                        total=len(self._identity_map))

    @property
    def is_complete(self) -> bool:
        """``True`` once every sample has been matched."""
        return self.progress().complete
