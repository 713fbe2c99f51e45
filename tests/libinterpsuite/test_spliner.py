"""
Tests for spliner — spline-based derivative estimators.

Covers splini, splder, SplineDerivative and cubic_spline_derivative.

Tolerances:
    splder on degree <= 2          : atol=1e-10 (exact up to rounding)
    cubic spline on degree <= 3    : atol=1e-9
    smooth functions               : atol=1e-6  (fourth-order interior)
"""
import numpy as np
import pytest

from interpsuite.libinterpsuite.nrutils import InvalidConfiguration
from interpsuite.libinterpsuite.spliner import (
    MIN_SPLDER_POINTS,
    SplineDerivative,
    cubic_spline_derivative,
    splder,
    splini,
)

ATOL = 1e-10


# ===================================================================
# splini (workspace)
# ===================================================================

class TestSplini:
    def test_recurrence(self):
        g = splini(6)
        assert g[0] == 0.0
        for i in range(1, 6):
            assert np.isclose(g[i], 1.0 / (4.0 - g[i - 1]), rtol=1e-15)

    def test_converges_to_fixed_point(self):
        # g = 1/(4 - g)  =>  g = 2 - sqrt(3)
        g = splini(40)
        assert np.isclose(g[-1], 2.0 - np.sqrt(3.0), rtol=1e-14)

    def test_length(self):
        assert splini(MIN_SPLDER_POINTS).shape == (MIN_SPLDER_POINTS,)

    def test_too_few_points_raises(self):
        with pytest.raises(InvalidConfiguration, match="at least 4"):
            splini(3)


# ===================================================================
# splder
# ===================================================================

class TestSplder:
    def test_constant_has_zero_derivative(self):
        y = np.full(8, 3.5)
        np.testing.assert_allclose(splder(y, splini(8)), 0.0, atol=ATOL)

    def test_linear_exact(self):
        i = np.arange(10, dtype=np.float64)
        dy = splder(2.0 - 0.75 * i, splini(10))
        np.testing.assert_allclose(dy, -0.75, atol=ATOL)

    def test_quadratic_exact(self):
        i = np.arange(9, dtype=np.float64)
        dy = splder(i**2, splini(9))
        np.testing.assert_allclose(dy, 2.0 * i, atol=ATOL)

    def test_cubic_exact_in_interior_system(self):
        # Exact cubic derivatives satisfy the interior Pade relation.
        i = np.arange(12, dtype=np.float64)
        y = i**3
        dy = 3.0 * i**2
        lhs = dy[:-2] + 4.0 * dy[1:-1] + dy[2:]
        rhs = 3.0 * (y[2:] - y[:-2])
        np.testing.assert_allclose(lhs, rhs, rtol=1e-14)

    def test_smooth_function(self):
        n = 101
        h = 2.0 * np.pi / (n - 1)
        x = np.arange(n) * h
        dy = splder(np.sin(x), splini(n)) / h
        np.testing.assert_allclose(dy[6:-6], np.cos(x[6:-6]), atol=1e-6)

    def test_minimum_points(self):
        i = np.arange(4, dtype=np.float64)
        np.testing.assert_allclose(splder(i**2, splini(4)), 2.0 * i, atol=ATOL)

    def test_accepts_lists(self):
        dy = splder([0.0, 1.0, 2.0, 3.0, 4.0], splini(5))
        np.testing.assert_allclose(dy, 1.0, atol=ATOL)

    def test_does_not_modify_input(self):
        y = np.arange(6, dtype=np.float64) ** 2
        y0 = y.copy()
        splder(y, splini(6))
        np.testing.assert_array_equal(y, y0)

    def test_linearity(self):
        rng = np.random.default_rng(0)
        a = rng.standard_normal(16)
        b = rng.standard_normal(16)
        g = splini(16)
        np.testing.assert_allclose(splder(2.0 * a - b, g), 2.0 * splder(a, g) - splder(b, g),
                                   rtol=1e-12, atol=1e-12)

    def test_size_mismatch_raises(self):
        with pytest.raises(InvalidConfiguration, match="workspace"):
            splder(np.zeros(6), splini(5))

    def test_two_dimensional_raises(self):
        with pytest.raises(InvalidConfiguration, match="1D"):
            splder(np.zeros((4, 4)), splini(4))


# ===================================================================
# Estimator strategies
# ===================================================================

class TestSplineDerivative:
    def test_callable(self):
        d = SplineDerivative(5)
        np.testing.assert_allclose(d([0.0, 1.0, 4.0, 9.0, 16.0]), [0.0, 2.0, 4.0, 6.0, 8.0],
                                   atol=ATOL)

    def test_workspace_reused(self):
        d = SplineDerivative(7)
        np.testing.assert_array_equal(d.workspace, splini(7))
        first = d(np.arange(7.0))
        second = d(np.arange(7.0))
        np.testing.assert_array_equal(first, second)

    def test_wrong_length_raises(self):
        d = SplineDerivative(7)
        with pytest.raises(InvalidConfiguration):
            d(np.zeros(6))

    def test_too_few_points_raises(self):
        with pytest.raises(InvalidConfiguration):
            SplineDerivative(2)

    def test_repr(self):
        assert repr(SplineDerivative(9)) == "SplineDerivative(n=9)"


class TestCubicSplineDerivative:
    def test_cubic_exact(self):
        i = np.arange(8, dtype=np.float64)
        np.testing.assert_allclose(cubic_spline_derivative(i**3 - 2.0 * i), 3.0 * i**2 - 2.0,
                                   atol=1e-9)

    def test_two_points_linear(self):
        np.testing.assert_allclose(cubic_spline_derivative([1.0, 4.0]), [3.0, 3.0], atol=ATOL)

    def test_agrees_with_splder_on_quadratic(self):
        i = np.arange(10, dtype=np.float64)
        y = 0.5 * i**2 - i
        np.testing.assert_allclose(cubic_spline_derivative(y), splder(y, splini(10)), atol=1e-9)

    def test_single_point_raises(self):
        with pytest.raises(InvalidConfiguration, match="at least 2"):
            cubic_spline_derivative([1.0])
