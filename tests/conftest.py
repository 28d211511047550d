"""Shared fixtures for the distmatch test suite."""

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest


class ScriptedEntropy:
    """Entropy source that replays a fixed list of uniforms."""

    def __init__(self, values):
        self._values = list(values)
        self._pos = 0

    def _next(self) -> float:
        if self._pos >= len(self._values):
            raise RuntimeError("scripted entropy exhausted")
        value = self._values[self._pos]
        self._pos += 1
        return value

    def random(self, size=None):
        if size is None:
            return self._next()
        return np.array([self._next() for _ in range(size)], dtype=float)

    @property
    def consumed(self) -> int:
        return self._pos


@pytest.fixture
def scripted():
    """Factory: ``scripted([0.1, 0.5, ...])`` builds a ScriptedEntropy."""
    return ScriptedEntropy


@pytest.fixture
def rng():
    return np.random.default_rng(12345)
