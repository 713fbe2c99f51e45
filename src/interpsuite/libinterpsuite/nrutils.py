"""
Small numerical utilities shared by the interpolation core.

Holds the package error type, the fail-fast assertion helpers used to check
construction arguments, and the arithmetic progression that lays out
equispaced grids.
"""

from typing import Any, Optional

import numpy as np

# ---------------------------------------------------------------------------
# Float kind alias used for every grid and sample array
# ---------------------------------------------------------------------------
dp = np.float64


class InvalidConfiguration(ValueError):
    """Raised when an interpolant is built or fed with unusable arguments."""


# ===================================================================
#  Assertion / error utilities
# ===================================================================

def nrerror(msg: str) -> None:
    """
    Report a fatal configuration error.

    Parameters
    ----------
    msg : str
        Error message.

    Raises
    ------
    InvalidConfiguration
    """
    raise InvalidConfiguration(msg)


def assertTrue(
    test: bool,
    msg: str = "Assertion failed",
    file: Optional[str] = None,
    line: Optional[int] = None,
) -> None:
    """
    Assert *test* is ``True``; call ``nrerror`` on failure.

    Parameters
    ----------
    test : bool
    msg : str
    file, line : optional
        Source location for diagnostics.
    """
    if not test:
        loc = f"{file}:{line} : " if file is not None and line is not None else ""
        nrerror(f"{loc}{msg}")


def assertEq(*args: Any, msg: str = "Equality assertion failed") -> Any:
    """
    Assert all positional arguments are equal; return the common value.

    Parameters
    ----------
    *args
        Values that must be equal.
    msg : str
        Message on failure.

    Returns
    -------
    value
        The common value.
    """
    first = args[0]
    if all(a == first for a in args[1:]):
        return first
    nrerror(msg)


# ===================================================================
#  Progressions
# ===================================================================

def arth(first: float, increment: float, n: int) -> np.ndarray:
    """
    Arithmetic progression of length *n*.

    $a_k = \\text{first} + k \\cdot \\text{increment},\\quad k = 0, \\dots, n-1$

    Parameters
    ----------
    first : float
        Starting value.
    increment : float
        Common difference.
    n : int
        Length.

    Returns
    -------
    ndarray of float64
    """
    return first + np.arange(n, dtype=dp) * increment
