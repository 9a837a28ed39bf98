"""
pylinsolve: dense linear systems with explicit singularity detection.

Solves square systems A x = b by Gaussian elimination with partial
pivoting and reports a condition estimate alongside every factorization,
so that numerically unreliable solutions are flagged instead of returned
silently.

Submodules:
    lu: LU factorization, condition estimation and solves
    core: Exceptions, validation, result envelope, compute utilities
"""

__version__ = "0.1.0"

from pylinsolve import lu
from pylinsolve.lu import (
    Factorizer,
    Solver,
    LUSolution,
    factor,
    solve,
)
from pylinsolve.core.status import Status

__all__ = [
    "__version__",
    "lu",
    "Factorizer",
    "Solver",
    "LUSolution",
    "Status",
    "factor",
    "solve",
]
