"""libinterpsuite sub-package for logging, error helpers and derivative estimators."""

# Import modules themselves (allows: from interpsuite.libinterpsuite import spliner)
from . import logger
from . import nrutils
from . import spliner

__all__ = [
    "logger",
    "nrutils",
    "spliner",
]
