"""
interpsuite: interpolation of tabulated functions on equispaced grids.

Stores a function sampled on a fixed grid together with its first three
derivatives and evaluates them anywhere by linear interpolation, deriving
the derivative tables from the samples when they are not supplied.
"""

# Import main sub-packages
from . import core
from . import libinterpsuite
from .core.equispaced import EquispacedLinearInterpolant
from .libinterpsuite.nrutils import InvalidConfiguration

__all__ = [
    "core",
    "libinterpsuite",
    "EquispacedLinearInterpolant",
    "InvalidConfiguration",
]
