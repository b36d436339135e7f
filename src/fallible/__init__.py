"""
Fallible - functional-style success/failure results for Python.

Everything public lives in :mod:`fallible.core` and is re-exported here, so
``from fallible import succeeded, failed, then, error`` is all most code needs.
"""

__version__ = "0.1.0"

from fallible.core import *  # noqa: F401,F403
from fallible.core import __all__ as __all__  # noqa: F401
