"""
Stateful factorization owner.

A Factorizer holds at most one factorization at a time: the factor buffer
and permutation record of the last matrix it was given. Supplying a new
matrix validates it first, then releases the previous factorization, then
builds the new one (reset-before-rebind). A matrix that fails validation
leaves the previous factorization in place.

Instances are not thread-safe; use one Factorizer per thread.
"""

from __future__ import annotations

from types import TracebackType
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinsolve.core.exceptions import ConfigurationError
from pylinsolve.core.status import Status
from pylinsolve.lu.design import LUDesign
from pylinsolve.lu.solution import LUSolution
from pylinsolve.lu.solvers import BackendChoice, _get_backend, factor


class Factorizer:
    """
    Owner of one LU factorization at a time.

    Usage:
        with Factorizer() as f:
            f.factor(A)
            if f.status is Status.OK:
                x = Solver(f).solve(b)
        # buffers released here
    """

    def __init__(self, *, backend: BackendChoice = 'auto'):
        _get_backend(backend)
        self._backend = backend
        self._solution: LUSolution | None = None

    def factor(
        self,
        matrix: ArrayLike,
        *,
        ndim: int | None = None,
    ) -> LUSolution:
        """
        Factor a new matrix, replacing any previous factorization.

        The matrix is copied into a buffer owned by this Factorizer, so the
        caller's matrix is not modified.

        Args:
            matrix: n x n array-like
            ndim: Row stride of the owned buffer (default n)

        Returns:
            The new LUSolution (also available as ``self.solution``)

        Raises:
            ConfigurationError: If the matrix is malformed. The previous
                factorization, if any, is kept.
            WorkspaceAllocationError: If memory cannot be acquired
        """
        design = LUDesign.from_array(matrix, ndim=ndim)
        self.reset()
        self._solution = factor(design, backend=self._backend)
        return self._solution

    def reset(self) -> None:
        """Release the current factor buffer and permutation record."""
        self._solution = None

    # === Properties ===

    @property
    def backend(self) -> str:
        return self._backend

    @property
    def is_factored(self) -> bool:
        return self._solution is not None

    @property
    def solution(self) -> LUSolution:
        """
        The current factorization.

        Raises:
            ConfigurationError: If no matrix has been factored since
                construction or the last reset()
        """
        if self._solution is None:
            raise ConfigurationError(
                "Factorizer holds no factorization; call factor() first"
            )
        return self._solution

    @property
    def status(self) -> Status | None:
        """Status of the current factorization, or None if there is none."""
        return self._solution.status if self._solution is not None else None

    @property
    def condition(self) -> float:
        return self.solution.condition

    @property
    def n(self) -> int:
        return self.solution.n

    @property
    def factors(self) -> NDArray[np.float64]:
        return self.solution.factors

    @property
    def pivot(self) -> NDArray[np.intp]:
        return self.solution.pivot

    @property
    def determinant(self) -> float:
        return self.solution.determinant

    # === Context manager ===

    def __enter__(self) -> Factorizer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.reset()

    def __repr__(self) -> str:
        if self._solution is None:
            return f"Factorizer(backend={self._backend!r}, empty)"
        return (
            f"Factorizer(backend={self._backend!r}, n={self._solution.n}, "
            f"status={self._solution.status.value})"
        )
