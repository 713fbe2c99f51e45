"""
Package logging.

Every interpsuite module logs through a child of the ``interpsuite`` logger.
Construction and derivative initialization report at DEBUG; per-order
derivative ranges go to the quieter DEBUG2 level so they only show up when
asked for.

>>> from interpsuite.libinterpsuite.logger import get_logger, setup
>>> setup(DEBUG2)
>>> get_logger(__name__).debug2("order 1: range [0, 8]")
"""

import logging
import sys

ROOT_NAME = "interpsuite"

# One step below DEBUG.
DEBUG2 = logging.DEBUG - 1
logging.addLevelName(DEBUG2, "DEBUG2")


class _InterpLogger(logging.Logger):
    """Logger with a ``debug2`` method for the DEBUG2 level."""

    def debug2(self, msg, *args, **kwargs):
        if self.isEnabledFor(DEBUG2):
            self._log(DEBUG2, msg, args, **kwargs)


logging.setLoggerClass(_InterpLogger)


def get_logger(name: str | None = None) -> _InterpLogger:
    """Logger for *name*, defaulting to the ``interpsuite`` root.

    Module names such as ``interpsuite.core.equispaced`` sit below the
    root, so its level and handler apply to them.
    """
    return logging.getLogger(name or ROOT_NAME)


def set_level(level: int | str = logging.INFO) -> None:
    """Set the level of the ``interpsuite`` root logger."""
    get_logger().setLevel(level)


def setup(level: int | str = logging.INFO, stream=None) -> None:
    """Send interpsuite records to *stream* (stderr by default).

    Only the first call attaches a handler.
    """
    root = get_logger()
    if root.handlers:
        return
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)-7s: %(name)s: %(message)s"))
    root.addHandler(handler)
    set_level(level)
