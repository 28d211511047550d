"""Tests for the label alphabets and identity encoding in distmatch/constants.py"""

import pytest

from distmatch.constants import (
    CATEGORY_DENSITY, CATEGORY_BOX, CATEGORY_QQ,
    letter_label, number_label, roman_label, category_labels, base36,
)


@pytest.mark.parametrize("index, expected", [
    (0, 'a'), (2, 'c'), (25, 'z'), (26, 'aa'), (27, 'ab'), (701, 'zz'), (702, 'aaa'),
])
def test_letter_label(index, expected) -> None:
    assert letter_label(index) == expected


@pytest.mark.parametrize("index, expected", [
    (0, 'I'), (1, 'II'), (2, 'III'), (3, 'IV'), (8, 'IX'), (13, 'XIV'), (48, 'XLIX'),
])
def test_roman_label(index, expected) -> None:
    assert roman_label(index) == expected


def test_number_label() -> None:
    assert [number_label(i) for i in range(3)] == ['1', '2', '3']


@pytest.mark.parametrize("fn", [letter_label, number_label, roman_label])
def test_negative_index_raises(fn) -> None:
    with pytest.raises(ValueError):
        fn(-1)


def test_category_labels() -> None:
    assert category_labels(CATEGORY_DENSITY, 3) == ['a', 'b', 'c']
    assert category_labels(CATEGORY_BOX, 3) == ['1', '2', '3']
    assert category_labels(CATEGORY_QQ, 3) == ['I', 'II', 'III']
    assert category_labels(CATEGORY_QQ, 0) == []


def test_category_labels_unknown_category() -> None:
    with pytest.raises(ValueError, match="Unknown plot category"):
        category_labels('violin', 3)


class TestBase36:

    def test_padding(self) -> None:
        assert base36(0) == '000000000'
        assert base36(35) == '00000000z'
        assert base36(36) == '000000010'

    def test_full_width(self) -> None:
        assert base36(36 ** 9 - 1) == 'z' * 9

    def test_custom_width(self) -> None:
        assert base36(71, width=3) == '01z'

    def test_negative_raises(self) -> None:
        with pytest.raises(ValueError):
            base36(-5)
