"""
Linear system solver against an existing LU factorization.

The Solver copies the right-hand side into a working vector it owns for
the duration of the call, replays the row interchanges and multipliers
of the factorization on it, back-substitutes, and writes the solution
back into the caller's vector when that vector can hold it.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinsolve.core.compute.workspace import Workspace
from pylinsolve.core.validation import check_1d, check_array, check_finite, check_length
from pylinsolve.lu._substitution import lu_solve_inplace
from pylinsolve.lu.factorizer import Factorizer
from pylinsolve.lu.solution import LUSolution


class Solver:
    """
    Solves A x = b for a factored A.

    Bound to either an LUSolution or a Factorizer. When bound to a
    Factorizer, every solve uses whatever factorization the Factorizer
    currently holds.

    Solving against a SINGULAR factorization raises SingularMatrixError.
    Instances are not thread-safe; use one Solver per thread.
    """

    def __init__(self, factorization: LUSolution | Factorizer):
        if not isinstance(factorization, (LUSolution, Factorizer)):
            raise TypeError(
                f"Solver needs an LUSolution or Factorizer, "
                f"got {type(factorization).__name__}"
            )
        self._factorization = factorization

    @property
    def solution(self) -> LUSolution:
        """The factorization solves run against."""
        if isinstance(self._factorization, Factorizer):
            return self._factorization.solution
        return self._factorization

    def solve(
        self,
        rhs: ArrayLike,
        *,
        overwrite_b: bool = True,
    ) -> NDArray[np.float64]:
        """
        Solve A x = rhs.

        Args:
            rhs: Right-hand side of length n
            overwrite_b: If True, the solution is also written into rhs when
                rhs is a writeable 1D float64 ndarray or a list. Other inputs
                (tuples, integer arrays) are left as they are.

        Returns:
            Solution vector x (a new array)

        Raises:
            ConfigurationError: If rhs is malformed, its length differs from
                the order of the factorization, or a bound Factorizer holds
                no factorization
            SingularMatrixError: If the factorization is singular
        """
        lu = self.solution

        b = check_array(rhs, 'rhs')
        check_1d(b, 'rhs')
        check_length(b, lu.n, 'rhs')
        check_finite(b, 'rhs')
        lu.require_nonsingular()

        with Workspace(lu.n) as work:
            work[:] = b
            lu_solve_inplace(lu.factors, lu.pivot, work)
            x = work.copy()

        if overwrite_b:
            _write_back(rhs, x)
        return x


def _write_back(rhs: ArrayLike, x: NDArray[np.float64]) -> None:
    """Copy x into the caller's vector if it is mutable and can hold floats."""
    if isinstance(rhs, np.ndarray):
        if rhs.dtype == np.float64 and rhs.ndim == 1 and rhs.flags.writeable:
            rhs[...] = x
    elif isinstance(rhs, list):
        rhs[:] = x.tolist()
