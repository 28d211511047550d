"""Tests for distmatch/sampler.py"""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from distmatch.sampler import (
    normal, mixture, clamp_data, outliers, inject_outliers,
)


class TestNormal:
    """Box–Muller normal deviates."""

    def test_exact_value_from_scripted_uniforms(self, scripted) -> None:
        """u = v = 0.5 gives z = -sqrt(2 ln 2)."""
        rng = scripted([0.5, 0.5])
        result = normal(10.0, 2.0, 1, rng)
        expected = 10.0 + 2.0 * (-math.sqrt(2.0 * math.log(2.0)))
        assert_allclose(result, [expected], rtol=0, atol=1e-12)

    def test_zero_uniform_is_redrawn(self, scripted) -> None:
        """An exact 0 for u is replaced by the next draw."""
        rng = scripted([0.0, 0.5, 0.5])
        result = normal(0.0, 1.0, 1, rng)
        assert_allclose(result, [-math.sqrt(2.0 * math.log(2.0))], atol=1e-12)
        assert rng.consumed == 3
        assert np.all(np.isfinite(result))

    @staticmethod
    def _box_muller(u, v) -> float:
        return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)

    def test_uniforms_are_consumed_in_pairs(self, scripted) -> None:
        """Deviate i uses (u_i, v_i) taken consecutively from the stream."""
        rng = scripted([0.5, 0.9, 0.25, 0.1])
        result = normal(0.0, 1.0, 2, rng)
        expected = [self._box_muller(0.5, 0.9), self._box_muller(0.25, 0.1)]
        assert_allclose(result, expected, atol=1e-12)
        assert_allclose(result, [0.9525, 1.3471], atol=1e-4)
        assert rng.consumed == 4

    def test_zero_inside_stream_shifts_following_pairs(self, scripted) -> None:
        """A zero for v_0 is skipped; the next uniform becomes v_0."""
        rng = scripted([0.5, 0.0, 0.9, 0.25, 0.1])
        result = normal(1.0, 2.0, 2, rng)
        expected = [1.0 + 2.0 * self._box_muller(0.5, 0.9),
                    1.0 + 2.0 * self._box_muller(0.25, 0.1)]
        assert_allclose(result, expected, atol=1e-12)
        assert rng.consumed == 5

    def test_zero_count_returns_empty(self, rng) -> None:
        assert normal(0.0, 1.0, 0, rng).size == 0
        assert normal(0.0, 1.0, -3, rng).size == 0

    def test_moments_of_large_sample(self, rng) -> None:
        values = normal(5.0, 3.0, 20000, rng)
        assert values.shape == (20000,)
        assert abs(values.mean() - 5.0) < 0.1
        assert abs(values.std() - 3.0) < 0.1

    def test_same_seed_same_values(self) -> None:
        a = normal(0.0, 1.0, 50, np.random.default_rng(7))
        b = normal(0.0, 1.0, 50, np.random.default_rng(7))
        assert_array_equal(a, b)


class TestMixture:
    """Concatenated normal components."""

    def test_length_is_sum_of_counts(self, rng) -> None:
        values = mixture([(-2.0, 0.8, 200), (2.0, 0.8, 150)], rng)
        assert values.size == 350

    def test_components_stay_in_order(self, rng) -> None:
        values = mixture([(-100.0, 0.1, 20), (100.0, 0.1, 20)], rng)
        assert np.all(values[:20] < 0)
        assert np.all(values[20:] > 0)

    def test_no_components(self, rng) -> None:
        assert mixture([], rng).size == 0


class TestClampData:
    """Truncation to a fixed range."""

    def test_truncates_without_dropping(self) -> None:
        result = clamp_data([-5.0, 10.0, 120.0], 0.0, 100.0)
        assert_array_equal(result, [0.0, 10.0, 100.0])

    def test_empty_range_raises(self) -> None:
        with pytest.raises(ValueError):
            clamp_data([1.0], 5.0, 1.0)


class TestOutliers:
    """Out-of-band values beyond a range."""

    def test_values_land_in_band(self, rng) -> None:
        values = outliers(0.0, 10.0, 500, rng, band=(2.0, 12.0))
        below = values[values < 0.0]
        above = values[values > 10.0]
        assert below.size + above.size == 500
        assert np.all((below <= -2.0) & (below >= -12.0))
        assert np.all((above >= 12.0) & (above <= 22.0))

    def test_both_sides_are_used(self, rng) -> None:
        values = outliers(0.0, 10.0, 500, rng)
        assert 150 < np.sum(values < 0.0) < 350

    def test_scripted_sides(self, scripted) -> None:
        """First uniforms pick the side, the next ones the offset."""
        rng = scripted([0.1, 0.9, 0.0, 1.0])
        values = outliers(0.0, 10.0, 2, rng, band=(2.0, 12.0))
        assert_allclose(values, [-2.0, 22.0])

    def test_zero_count(self, rng) -> None:
        assert outliers(0.0, 1.0, 0, rng).size == 0


class TestInjectOutliers:
    """Appending outliers to a base sample."""

    def test_appends_after_base(self, rng) -> None:
        base = np.linspace(40.0, 60.0, 30)
        result = inject_outliers(base, 5, rng)
        assert result.size == 35
        assert_array_equal(result[:30], base)
        assert np.all((result[30:] < 40.0) | (result[30:] > 60.0))

    def test_reclamps_combined_sample(self, rng) -> None:
        base = np.linspace(0.0, 100.0, 30)
        result = inject_outliers(base, 40, rng, clamp=(0.0, 100.0))
        assert result.size == 70
        assert result.min() >= 0.0
        assert result.max() <= 100.0

    def test_empty_base_gets_no_outliers(self, rng) -> None:
        assert inject_outliers([], 5, rng).size == 0
