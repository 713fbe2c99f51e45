"""Interpolants and their grid configuration."""

# Import modules themselves (allows: from interpsuite.core import equispaced)
from . import equispaced
from . import gridparams

__all__ = [
    "equispaced",
    "gridparams",
]
