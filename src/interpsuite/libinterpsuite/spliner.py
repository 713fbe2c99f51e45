"""
Spline-based derivative estimators for unit-spaced samples.

The interpolants in :mod:`interpsuite.core` store derivative tables next to
the function samples. When only the function is known, those tables are
filled by differentiating the samples with one of the estimators below.
Every estimator maps an array of length n to its first derivative with
respect to the array index (unit spacing); callers rescale by the grid width.

Estimators
----------
SplineDerivative
    Cubic-spline derivative from ``splini``/``splder``.  Equivalent to a
    fourth-order Padé difference scheme in the interior and exact for
    polynomials up to degree two.  Needs at least four samples.
cubic_spline_derivative
    Derivative of SciPy's not-a-knot ``CubicSpline``.  Exact for cubics and
    usable down to two samples.
"""

import numpy as np
from numba import jit
from scipy.interpolate import CubicSpline

from .nrutils import assertTrue, dp

# splder fits a quartic through the first and last four points.
MIN_SPLDER_POINTS = 4


@jit(nopython=True)
def _splini_core(g):
    g[0] = 0.0
    for i in range(1, g.shape[0]):
        g[i] = 1.0 / (4.0 - g[i - 1])


@jit(nopython=True)
def _splder_core(y, dy, g):
    n = y.shape[0]
    f = np.empty(n)

    # Quartic fit to dy/di at the ends, assuming d3y/di3 = 0 there.
    f[0] = (-10.0 * y[0] + 15.0 * y[1] - 6.0 * y[2] + y[3]) / 6.0
    f[n - 1] = (10.0 * y[n - 1] - 15.0 * y[n - 2] + 6.0 * y[n - 3] - y[n - 4]) / 6.0

    # dy[i-1] + 4*dy[i] + dy[i+1] = 3*(y[i+1] - y[i-1]),  i = 1 .. n-2
    for i in range(1, n - 1):
        f[i] = g[i] * (3.0 * (y[i + 1] - y[i - 1]) - f[i - 1])

    dy[n - 1] = f[n - 1]
    for i in range(n - 2, -1, -1):
        dy[i] = f[i] - g[i] * dy[i + 1]


def splini(n):
    """
    Build the elimination workspace used by ``splder``.

    The workspace only depends on the number of points, so it can be
    computed once and shared by every derivative taken on the same grid.

    Parameters
    ----------
    n : int
        Number of samples.

    Returns
    -------
    ndarray
        Workspace ``g`` of length n with ``g[0] = 0`` and
        ``g[i] = 1 / (4 - g[i-1])``.
    """
    assertTrue(n >= MIN_SPLDER_POINTS,
               f"spline derivative needs at least {MIN_SPLDER_POINTS} points, got {n}")
    g = np.empty(n, dtype=dp)
    _splini_core(g)
    return g


def splder(y, g):
    """
    First derivative of unit-spaced samples through a cubic spline fit.

    Parameters
    ----------
    y : array_like
        Samples, 1D, length n >= 4.
    g : ndarray
        Workspace from ``splini(n)``.

    Returns
    -------
    ndarray
        dy/di at every sample.

    Raises
    ------
    InvalidConfiguration
        If ``y`` and ``g`` differ in length or hold fewer than four points.
    """
    y = np.ascontiguousarray(y, dtype=dp)
    assertTrue(y.ndim == 1, "splder expects a 1D array")
    assertTrue(y.shape[0] == g.shape[0],
               f"splder workspace has {g.shape[0]} points, samples have {y.shape[0]}")
    assertTrue(y.shape[0] >= MIN_SPLDER_POINTS,
               f"spline derivative needs at least {MIN_SPLDER_POINTS} points, got {y.shape[0]}")
    dy = np.empty_like(y)
    _splder_core(y, dy, g)
    return dy


class SplineDerivative:
    """
    Cubic-spline derivative estimator bound to a fixed number of points.

    Parameters
    ----------
    n : int
        Number of samples every call will receive.

    Examples
    --------
    >>> d = SplineDerivative(5)
    >>> d([0.0, 1.0, 4.0, 9.0, 16.0])
    array([0., 2., 4., 6., 8.])
    """

    def __init__(self, n):
        self.n = n
        self.workspace = splini(n)

    def __call__(self, values):
        return splder(values, self.workspace)

    def __repr__(self):
        return f"SplineDerivative(n={self.n})"


def cubic_spline_derivative(values):
    """
    First derivative of unit-spaced samples from SciPy's cubic spline.

    Parameters
    ----------
    values : array_like
        Samples, 1D, length n >= 2.

    Returns
    -------
    ndarray
        dy/di at every sample.
    """
    values = np.asarray(values, dtype=dp)
    assertTrue(values.ndim == 1, "cubic_spline_derivative expects a 1D array")
    assertTrue(values.shape[0] >= 2,
               f"cubic spline derivative needs at least 2 points, got {values.shape[0]}")
    nodes = np.arange(values.shape[0], dtype=dp)
    return CubicSpline(nodes, values)(nodes, 1)
