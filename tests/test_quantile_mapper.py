"""Tests for distmatch/quantile_mapper.py"""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal
from scipy.stats import norm

from distmatch.constants import DEFAULT_QQ_REFERENCE
from distmatch.quantile_mapper import (
    normal_quantile, normal_quantiles, theoretical_quantiles,
    quartile_reference_line, qq_payload,
)

PROBS = np.linspace(0.001, 0.999, 499)


class TestNormalQuantile:
    """Rational approximation of the inverse normal CDF."""

    @pytest.mark.parametrize("p", [0.01, 0.1, 0.2, 0.3, 0.4, 0.45, 0.49])
    def test_symmetry(self, p) -> None:
        assert normal_quantile(p) == pytest.approx(-normal_quantile(1 - p),
                                                   abs=1e-12)

    def test_median_is_zero(self) -> None:
        assert abs(normal_quantile(0.5)) < 1e-3

    def test_accuracy_against_scipy(self) -> None:
        approx = np.array([normal_quantile(p) for p in PROBS])
        assert np.max(np.abs(approx - norm.ppf(PROBS))) < 4.5e-4

    @pytest.mark.parametrize("p", [0.0, 1.0, -0.5, 1.5])
    def test_out_of_range_saturates_to_zero(self, p) -> None:
        assert normal_quantile(p) == 0.0

    def test_sign(self) -> None:
        assert normal_quantile(0.975) == pytest.approx(1.96, abs=1e-3)
        assert normal_quantile(0.025) == pytest.approx(-1.96, abs=1e-3)


class TestNormalQuantiles:
    """Vectorised form."""

    def test_matches_scalar(self) -> None:
        scalar = np.array([normal_quantile(p) for p in PROBS])
        assert_allclose(normal_quantiles(PROBS), scalar, atol=1e-12)

    def test_edge_policy(self) -> None:
        assert_array_equal(normal_quantiles([0.0, 1.0, 2.0]), [0.0, 0.0, 0.0])


class TestTheoreticalQuantiles:
    """Plotting-position quantiles."""

    @pytest.mark.parametrize("n", [1, 2, 10, 401])
    def test_length_and_order(self, n) -> None:
        q = theoretical_quantiles(n)
        assert q.size == n
        assert np.all(np.diff(q) >= 0)

    def test_symmetric_about_zero(self) -> None:
        q = theoretical_quantiles(50)
        assert_allclose(q, -q[::-1], atol=1e-12)

    def test_plotting_positions(self) -> None:
        q = theoretical_quantiles(4)
        expected = [normal_quantile((i - 0.5) / 4) for i in range(1, 5)]
        assert_allclose(q, expected, atol=1e-12)

    @pytest.mark.parametrize("n", [0, -2])
    def test_non_positive_n(self, n) -> None:
        assert theoretical_quantiles(n).size == 0


class TestQQPayload:
    """QQ pairs and reference lines."""

    def test_pairs_rank_for_rank(self, rng) -> None:
        values = rng.normal(size=120)
        payload = qq_payload(values)
        assert_array_equal(payload.empirical, np.sort(values))
        assert_allclose(payload.theoretical, theoretical_quantiles(120))
        assert payload.reference_line == DEFAULT_QQ_REFERENCE

    def test_custom_reference_line(self, rng) -> None:
        payload = qq_payload(rng.normal(size=10), ((-2, 0), (2, 100)))
        assert payload.reference_line == ((-2.0, 0.0), (2.0, 100.0))

    def test_quartile_reference_line(self, rng) -> None:
        values = rng.normal(50.0, 10.0, 4000)
        payload = qq_payload(values, "quartile")
        (x0, y0), (x1, y1) = payload.reference_line
        slope = (y1 - y0) / (x1 - x0)
        assert slope == pytest.approx(10.0, rel=0.1)
        assert x0 == payload.theoretical[0]
        assert x1 == payload.theoretical[-1]

    def test_quartile_line_falls_back_for_tiny_sample(self) -> None:
        assert quartile_reference_line([0.0], [1.0]) == DEFAULT_QQ_REFERENCE

    def test_empty(self) -> None:
        payload = qq_payload([])
        assert payload.empirical.size == 0
        assert payload.theoretical.size == 0
