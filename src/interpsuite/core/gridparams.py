"""
Grid parameter files for equispaced interpolants.

A grid is described by a small text file, one value per line with optional
trailing ``!`` comments::

    201            ! num_points
    0.0            ! x_initial
    1.0            ! x_final
    -1.0           ! null_value (optional)

When the file ends after ``x_final`` the interpolant clamps out-of-range
queries instead of returning a null value.
"""

from dataclasses import dataclass
from typing import Optional

from ..libinterpsuite.logger import get_logger
from .equispaced import EquispacedLinearInterpolant

log = get_logger(__name__)


def _value_token(line):
    """First token of *line* with any ``!`` comment removed, or None."""
    fields = line.split("!", 1)[0].split()
    return fields[0] if fields else None


def _read_value(fh, name):
    """Parse the next line of *fh* as the float parameter *name*."""
    line = fh.readline()
    token = _value_token(line)
    if token is None:
        where = "end of file" if not line else "a line with no value"
        raise ValueError(f"grid parameter {name}: found {where}")
    try:
        return float(token)
    except ValueError:
        raise ValueError(f"grid parameter {name}: {token!r} is not a number") from None


@dataclass
class GridParams:
    """
    Parameters of an equispaced grid.

    Attributes
    ----------
    num_points : int
        Number of grid nodes.
    x_initial : float
        First node.
    x_final : float
        Last node.
    null_value : float or None
        Value returned outside the grid, ``None`` to clamp instead.
    """
    num_points: int
    x_initial: float
    x_final: float
    null_value: Optional[float] = None

    def build(self):
        """Return a fresh interpolant on this grid with zeroed tables."""
        return EquispacedLinearInterpolant(
            self.num_points, self.x_initial, self.x_final, self.null_value
        )


def read_grid_params_sub(fh):
    """Read grid parameters from an open file handle.

    Raises
    ------
    ValueError
        If a required value is missing or not a number, or ``num_points``
        is not a whole number.
    """
    num_points = _read_value(fh, "num_points")
    if not num_points.is_integer():
        raise ValueError(f"grid parameter num_points: {num_points} is not a whole number")
    x_initial = _read_value(fh, "x_initial")
    x_final = _read_value(fh, "x_final")

    token = _value_token(fh.readline())
    null_value = None if token is None else float(token)

    return GridParams(int(num_points), x_initial, x_final, null_value)


def ReadGridParams(filename):
    """Read grid parameters from a named file."""
    with open(filename, "r") as fh:
        params = read_grid_params_sub(fh)
    log.debug("read grid parameters from %s: %s", filename, params)
    return params


def write_grid_params_sub(fh, params):
    """Write *params* to an open file handle, one commented value per line.

    The null value line is left out when ``params.null_value`` is None.
    """
    lines = [
        (f"{params.num_points:d}", "num_points"),
        (f"{params.x_initial:.17g}", "x_initial"),
        (f"{params.x_final:.17g}", "x_final"),
    ]
    if params.null_value is not None:
        lines.append((f"{params.null_value:.17g}", "null_value"))
    for value, name in lines:
        fh.write(f"{value:<24} ! {name}\n")


def WriteGridParams(filename, params):
    """Write grid parameters to a named file."""
    with open(filename, "w") as fh:
        write_grid_params_sub(fh, params)
