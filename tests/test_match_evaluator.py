"""Tests for distmatch/match_evaluator.py"""

import itertools

import pytest

from distmatch.constants import (
    CATEGORY_DENSITY, CATEGORY_BOX, CATEGORY_QQ,
    STATUS_CONFIRMED, STATUS_REJECTED, STATUS_INCOMPLETE,
    STATE_EMPTY, STATE_PARTIAL, STATE_READY,
)
from distmatch.match_evaluator import MatchEvaluator

IDENTITY_MAP = {
    's1': ('a', '2', 'III'),
    's2': ('b', '3', 'I'),
    's3': ('c', '1', 'II'),
}


def _select_triple(evaluator, triple) -> None:
    for cat, label in zip((CATEGORY_DENSITY, CATEGORY_BOX, CATEGORY_QQ), triple):
        evaluator.select(cat, label)


@pytest.fixture
def evaluator():
    return MatchEvaluator(IDENTITY_MAP)


class TestSelectionStates:
    """empty -> partial -> ready."""

    def test_starts_empty(self, evaluator) -> None:
        assert evaluator.state == STATE_EMPTY
        assert evaluator.selection == {}

    def test_partial_then_ready(self, evaluator) -> None:
        evaluator.select(CATEGORY_DENSITY, 'a')
        assert evaluator.state == STATE_PARTIAL
        evaluator.select(CATEGORY_QQ, 'I')
        assert evaluator.state == STATE_PARTIAL
        evaluator.select(CATEGORY_BOX, '1')
        assert evaluator.state == STATE_READY

    def test_select_replaces_previous_choice(self, evaluator) -> None:
        evaluator.select(CATEGORY_BOX, '1')
        evaluator.select(CATEGORY_BOX, '3')
        assert evaluator.selection == {CATEGORY_BOX: '3'}
        assert evaluator.selected(CATEGORY_BOX) == '3'

    def test_deselect_and_clear(self, evaluator) -> None:
        _select_triple(evaluator, ('a', '2', 'III'))
        evaluator.deselect(CATEGORY_BOX)
        assert evaluator.state == STATE_PARTIAL
        evaluator.deselect(CATEGORY_BOX)
        evaluator.clear_selection()
        assert evaluator.state == STATE_EMPTY

    def test_selection_is_a_copy(self, evaluator) -> None:
        evaluator.select(CATEGORY_DENSITY, 'a')
        evaluator.selection[CATEGORY_BOX] = '1'
        assert CATEGORY_BOX not in evaluator.selection

    def test_unknown_category_raises(self, evaluator) -> None:
        with pytest.raises(ValueError, match="Unknown plot category"):
            evaluator.select('violin', 'a')

    def test_unknown_label_raises(self, evaluator) -> None:
        with pytest.raises(ValueError, match="does not exist"):
            evaluator.select(CATEGORY_DENSITY, 'z')
        with pytest.raises(ValueError):
            evaluator.select(CATEGORY_BOX, 'a')


class TestEvaluate:
    """Confirmed / rejected / incomplete."""

    def test_incomplete_keeps_selection(self, evaluator) -> None:
        evaluator.select(CATEGORY_DENSITY, 'a')
        result = evaluator.evaluate()
        assert result.status == STATUS_INCOMPLETE
        assert result.triple is None
        assert evaluator.selection == {CATEGORY_DENSITY: 'a'}

    def test_confirmed(self, evaluator) -> None:
        _select_triple(evaluator, ('a', '2', 'III'))
        result = evaluator.evaluate()
        assert result.status == STATUS_CONFIRMED
        assert result.confirmed
        assert result.identity == 's1'
        assert result.triple == ('a', '2', 'III')
        assert evaluator.state == STATE_EMPTY
        assert evaluator.found_matches == {('a', '2', 'III')}
        assert evaluator.matched_identities() == {'s1'}
        assert evaluator.progress().confirmed_count == 1

    def test_rejected_clears_selection(self, evaluator) -> None:
        _select_triple(evaluator, ('a', '3', 'II'))
        result = evaluator.evaluate()
        assert result.status == STATUS_REJECTED
        assert not result.confirmed
        assert result.triple == ('a', '3', 'II')
        assert result.identity is None
        assert evaluator.state == STATE_EMPTY
        assert evaluator.found_matches == set()

    def test_rejection_is_recoverable(self, evaluator) -> None:
        _select_triple(evaluator, ('b', '2', 'III'))
        assert evaluator.evaluate().status == STATUS_REJECTED
        _select_triple(evaluator, ('b', '3', 'I'))
        assert evaluator.evaluate().status == STATUS_CONFIRMED

    def test_every_wrong_triple_is_rejected(self) -> None:
        correct = set(IDENTITY_MAP.values())
        for triple in itertools.product('abc', '123', ('I', 'II', 'III')):
            ev = MatchEvaluator(IDENTITY_MAP)
            _select_triple(ev, triple)
            expected = STATUS_CONFIRMED if triple in correct else STATUS_REJECTED
            assert ev.evaluate().status == expected


class TestLockedLabels:
    """Matched labels can no longer be selected."""

    def test_matched_label_is_ignored(self, evaluator) -> None:
        _select_triple(evaluator, ('a', '2', 'III'))
        evaluator.evaluate()
        evaluator.select(CATEGORY_DENSITY, 'a')
        assert evaluator.selection == {}
        assert evaluator.is_locked(CATEGORY_DENSITY, 'a')
        assert not evaluator.is_locked(CATEGORY_DENSITY, 'b')

    def test_locked_label_does_not_replace_selection(self, evaluator) -> None:
        _select_triple(evaluator, ('a', '2', 'III'))
        evaluator.evaluate()
        evaluator.select(CATEGORY_BOX, '3')
        evaluator.select(CATEGORY_BOX, '2')
        assert evaluator.selection == {CATEGORY_BOX: '3'}


class TestRoundCompletion:
    """Terminal state after N confirmations."""

    def test_progress_and_terminal_state(self, evaluator) -> None:
        assert evaluator.progress().total == 3
        assert not evaluator.is_complete
        for triple in IDENTITY_MAP.values():
            _select_triple(evaluator, triple)
            assert evaluator.evaluate().status == STATUS_CONFIRMED
        progress = evaluator.progress()
        assert progress.confirmed_count == 3
        assert progress.complete
        assert evaluator.is_complete

    def test_no_rejection_after_completion(self, evaluator) -> None:
        for triple in IDENTITY_MAP.values():
            _select_triple(evaluator, triple)
            evaluator.evaluate()
        for triple in itertools.product('abc', '123', ('I', 'II', 'III')):
            _select_triple(evaluator, triple)
            assert evaluator.selection == {}
            assert evaluator.evaluate().status == STATUS_INCOMPLETE

    def test_found_matches_is_a_copy(self, evaluator) -> None:
        _select_triple(evaluator, ('c', '1', 'II'))
        evaluator.evaluate()
        evaluator.found_matches.clear()
        assert len(evaluator.found_matches) == 1
