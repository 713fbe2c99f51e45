"""
Linear interpolation of a tabulated function on an equispaced grid.

The interpolant stores a function sampled on a fixed grid together with
tables of its first three derivatives and an auxiliary integral table, and
evaluates any of them at arbitrary points by linear interpolation between
the two bracketing nodes.

Grid and brackets:
    x[i] = x_initial + i*grid_width,  grid_width = (x_final - x_initial)/(N - 1)

    Because the spacing is uniform the bracket of a point is found in O(1):
        index = floor((x - x_initial)/grid_width) + 1          (1-based)
        coeff = (x - x[index]) / (x[index+1] - x[index])
    and a table T is evaluated as
        T(x) = T[index]*(1 - coeff) + T[index+1]*coeff

    Index numbering is 1-based (node 1 is x_initial), matching the tables
    this code is usually fed from; the array offset is ``index - 1``.

Out-of-range queries (x <= x_initial or x >= x_final):
    * with a null value configured, every table returns the null value;
    * otherwise the first/last sample of the table is returned (flat clamp).

NaN queries evaluate to NaN in every table, scalar or array, and
``precompute(nan)`` returns the out-of-range pair.

Typical use, reusing one bracket for the value and its derivatives::

    f = EquispacedLinearInterpolant(201, 0.0, 1.0)
    f.y[:] = np.sin(f.x)
    f.initialize_derivatives()
    ind, mu = f.precompute(0.3)
    f.value(0.3, ind, mu), f.first_derivative(0.3, ind, mu)
"""

import math
from typing import Callable, Optional, Tuple

import numpy as np

from ..libinterpsuite.logger import get_logger
from ..libinterpsuite.nrutils import arth, assertEq, assertTrue, dp
from ..libinterpsuite.spliner import SplineDerivative

log = get_logger(__name__)

# Sample tables in derivative order, integral last.
TABLES = ("y", "yp", "ypp", "yppp", "yint")


class EquispacedLinearInterpolant:
    """
    Piecewise-linear interpolant of a function sampled on an equispaced grid.

    Parameters
    ----------
    num_points : int
        Number of grid nodes (>= 2).
    x_initial, x_final : float
        First and last node, ``x_final > x_initial``.
    null_value : float, optional
        Value returned for every query outside the open interval
        ``(x_initial, x_final)``.  When omitted, tables are clamped to
        their boundary samples instead.

    Attributes
    ----------
    x : ndarray
        Grid nodes.
    y, yp, ypp, yppp : ndarray
        Function samples and first three derivatives at the nodes.
    yint : ndarray
        Auxiliary integral table, filled by the caller.
    grid_width : float
        Node spacing.
    has_null_value : bool
    null_value : float
        0.0 when no null value was given.
    """

    def __init__(self, num_points, x_initial, x_final, null_value=None):
        self.initialize(num_points, x_initial, x_final, null_value)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def initialize(self, num_points, x_initial, x_final, null_value=None):
        """
        Build the grid and allocate zeroed sample tables.

        Any previous grid and tables are discarded.  Arguments are checked
        before anything is assigned, so a failed call leaves the instance
        as it was.

        Raises
        ------
        InvalidConfiguration
            If ``num_points`` is not an integer >= 2, or the bounds are not
            finite with ``x_final > x_initial``.
        """
        assertTrue(isinstance(num_points, (int, np.integer)) and not isinstance(num_points, bool),
                   f"num_points must be an integer, got {num_points!r}")
        assertTrue(num_points >= 2, f"num_points must be >= 2, got {num_points}")
        x_initial = float(x_initial)
        x_final = float(x_final)
        assertTrue(math.isfinite(x_initial) and math.isfinite(x_final),
                   f"grid bounds must be finite, got [{x_initial}, {x_final}]")
        assertTrue(x_final > x_initial,
                   f"x_final must be greater than x_initial, got [{x_initial}, {x_final}]")

        self.num_points = int(num_points)
        self.x_initial = x_initial
        self.x_final = x_final
        self.grid_width = (x_final - x_initial) / (self.num_points - 1)
        self.has_null_value = null_value is not None
        self.null_value = 0.0 if null_value is None else float(null_value)
        self.x = arth(x_initial, self.grid_width, self.num_points)

        self.y = np.zeros(self.num_points, dtype=dp)
        self.yp = np.zeros(self.num_points, dtype=dp)
        self.ypp = np.zeros(self.num_points, dtype=dp)
        self.yppp = np.zeros(self.num_points, dtype=dp)
        self.yint = np.zeros(self.num_points, dtype=dp)

        log.debug("equispaced grid: %d points on [%g, %g], width %g",
                  self.num_points, x_initial, x_final, self.grid_width)

    def set_samples(self, y=None, yp=None, ypp=None, yppp=None, yint=None):
        """
        Copy sample tables into the interpolant.

        Only the tables passed are replaced.  Each must have exactly
        ``num_points`` entries.
        """
        given = {"y": y, "yp": yp, "ypp": ypp, "yppp": yppp, "yint": yint}
        arrays = {}
        for name, values in given.items():
            if values is None:
                continue
            values = np.array(values, dtype=dp)
            assertTrue(values.shape == (self.num_points,),
                       f"{name} must have shape ({self.num_points},), got {values.shape}")
            arrays[name] = values

        for name, values in arrays.items():
            setattr(self, name, values)

    # ------------------------------------------------------------------
    # Bracket lookup
    # ------------------------------------------------------------------
    def _index(self, x):
        # Rounding can land floor(...) on the last node just below x_final.
        return min(int((x - self.x_initial) / self.grid_width) + 1, self.num_points - 1)

    def _coeff(self, x, index):
        x1 = self.x[index - 1]
        x2 = self.x[index]
        return (x - x1) / (x2 - x1)

    def _bracket(self, x):
        index = self._index(x)
        return index, self._coeff(x, index)

    def precompute(self, x) -> Tuple[int, float]:
        """
        Bracket index and interpolation coefficient of ``x``.

        Parameters
        ----------
        x : float

        Returns
        -------
        index : int
            1-based number of the node at or below ``x``.
        coeff : float
            Fractional position of ``x`` inside its cell.

        Notes
        -----
        Points outside the open interval ``(x_initial, x_final)`` return
        ``(num_points, 0.0)``.  That pair only signals "out of range"; the
        evaluators apply their own boundary policy and never rely on it.
        """
        if not self.x_initial < x < self.x_final:
            return self.num_points, 0.0
        return self._bracket(x)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    def _evaluate(self, table, x, index=None, coeff=None):
        if self.has_null_value:
            if x <= self.x_initial or x >= self.x_final:
                return self.null_value
        else:
            if x <= self.x_initial:
                return table[0]
            if x >= self.x_final:
                return table[self.num_points - 1]
        if math.isnan(x):
            return math.nan

        ind = self._index(x) if index is None else index
        mu = self._coeff(x, ind) if coeff is None else coeff
        return table[ind - 1] * (1.0 - mu) + table[ind] * mu

    def value(self, x, index=None, coeff=None):
        """Interpolated function value at ``x``.

        ``index`` and ``coeff`` may be passed from :meth:`precompute` for
        the same ``x`` to skip the bracket search.  Values that do not
        belong to ``x`` give meaningless results; they are not checked.
        """
        return self._evaluate(self.y, x, index, coeff)

    def first_derivative(self, x, index=None, coeff=None):
        """Interpolated first derivative at ``x``."""
        return self._evaluate(self.yp, x, index, coeff)

    def second_derivative(self, x, index=None, coeff=None):
        """Interpolated second derivative at ``x``."""
        return self._evaluate(self.ypp, x, index, coeff)

    def third_derivative(self, x, index=None, coeff=None):
        """Interpolated third derivative at ``x``."""
        return self._evaluate(self.yppp, x, index, coeff)

    def integral(self, x, index=None, coeff=None):
        """Interpolated auxiliary integral table at ``x``."""
        return self._evaluate(self.yint, x, index, coeff)

    def evaluate_all(self, x):
        """
        Value and first three derivatives at ``x`` from a single bracket.

        Returns
        -------
        tuple of float
            ``(value, first, second, third)``.
        """
        if self.x_initial < x < self.x_final:
            index, coeff = self._bracket(x)
        else:
            index, coeff = None, None
        return tuple(self._evaluate(getattr(self, name), x, index, coeff)
                     for name in TABLES[:4])

    def evaluate_array(self, x, table="y"):
        """
        Evaluate one table at many points.

        Parameters
        ----------
        x : array_like
            Query points, any shape.
        table : str
            One of ``"y"``, ``"yp"``, ``"ypp"``, ``"yppp"``, ``"yint"``.

        Returns
        -------
        ndarray
            Same shape as ``x``, same boundary policy as the scalar
            evaluators.
        """
        assertTrue(table in TABLES, f"unknown table {table!r}, expected one of {TABLES}")
        samples = getattr(self, table)
        x = np.asarray(x, dtype=dp)

        below = x <= self.x_initial
        above = x >= self.x_final
        inside = ~(below | above)

        # 0-based cell start, clamped into the grid; NaN gets cell 0 and stays NaN through mu
        cell = np.floor((np.where(np.isnan(x), self.x_initial, x) - self.x_initial) / self.grid_width)
        ind = np.clip(cell, 0, self.num_points - 2).astype(np.int64)
        x1 = self.x[ind]
        x2 = self.x[ind + 1]
        mu = (x - x1) / (x2 - x1)
        out = samples[ind] * (1.0 - mu) + samples[ind + 1] * mu

        if self.has_null_value:
            out = np.where(inside, out, self.null_value)
        else:
            out = np.where(below, samples[0], out)
            out = np.where(above, samples[self.num_points - 1], out)
        return out

    # ------------------------------------------------------------------
    # Derivative tables
    # ------------------------------------------------------------------
    def initialize_derivatives(self, jacobian=None,
                               estimator: Optional[Callable[[np.ndarray], np.ndarray]] = None):
        """
        Fill ``yp``, ``ypp`` and ``yppp`` by differentiating ``y``.

        Each order is the estimator applied to the previous order, divided
        by the grid width and, if ``jacobian`` is given, multiplied by it
        node by node.  ``yint`` is left alone.

        Parameters
        ----------
        jacobian : array_like, optional
            ``dx/du`` at every node, to obtain derivatives with respect to
            another variable ``u``.  Applied at every order, so higher
            orders are derivatives of the already converted lower order.
        estimator : callable, optional
            Maps an array of n samples to its derivative at unit spacing.
            Defaults to :class:`~interpsuite.libinterpsuite.spliner.SplineDerivative`.

        Raises
        ------
        InvalidConfiguration
            If a table, ``jacobian`` or an estimator result does not have
            ``num_points`` entries.
        """
        n = self.num_points
        for name in TABLES:
            assertEq(np.shape(getattr(self, name)), (n,),
                     msg=f"{name} is not allocated to {n} points, re-run initialize()")
        if jacobian is not None:
            jacobian = np.asarray(jacobian, dtype=dp)
            assertEq(jacobian.shape, (n,), msg=f"jacobian must have shape ({n},), got {jacobian.shape}")
        if estimator is None:
            estimator = SplineDerivative(n)

        current = np.asarray(self.y, dtype=dp)
        derived = []
        for order in (1, 2, 3):
            d = np.asarray(estimator(current), dtype=dp)
            assertEq(d.shape, (n,), msg=f"derivative estimator returned shape {d.shape}, expected ({n},)")
            d = d / self.grid_width
            if jacobian is not None:
                d = jacobian * d
            log.debug2("derivative order %d: range [%g, %g]", order, d.min(), d.max())
            derived.append(d)
            current = d

        self.yp, self.ypp, self.yppp = derived
        log.debug("derivative tables initialized on %d points (jacobian=%s)",
                  n, jacobian is not None)

    def __repr__(self):
        null = f", null_value={self.null_value!r}" if self.has_null_value else ""
        return (f"{type(self).__name__}(num_points={self.num_points}, "
                f"x_initial={self.x_initial!r}, x_final={self.x_final!r}{null})")
