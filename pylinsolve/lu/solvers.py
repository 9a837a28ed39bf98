"""
Solver dispatch for LU factorization.

This module provides the factor() and solve() functions (public API) and
backend selection.
"""

from __future__ import annotations

import warnings
from typing import Literal, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinsolve.core.exceptions import ConfigurationError
from pylinsolve.lu.design import LUDesign
from pylinsolve.lu.solution import LUSolution
from pylinsolve.lu.backends.cpu import CPUGaussBackend
from pylinsolve.lu.backends.lapack import CPULapackBackend

if TYPE_CHECKING:
    from pylinsolve.lu.factorizer import Factorizer


# Type alias for backend selection
BackendChoice = Literal['auto', 'cpu', 'cpu_gauss', 'cpu_lapack']


def factor(
    matrix: ArrayLike | LUDesign,
    *,
    ndim: int | None = None,
    overwrite_a: bool = False,
    backend: BackendChoice = 'auto',
) -> LUSolution:
    """
    Factor a square matrix by Gaussian elimination with partial pivoting.

    Computes P A = L U together with a 1-norm condition estimate. A matrix
    that is singular to working precision is NOT an error: the returned
    solution has status SINGULAR, condition 1e32 (when a pivot vanished),
    and a RuntimeWarning is emitted. Check ``solution.status`` before
    trusting the factors.

    Args:
        matrix: n x n array-like, or a prepared LUDesign
        ndim: Row stride of the owned buffer (default n). Ignored for an
            LUDesign.
        overwrite_a: Factor the caller's C-contiguous float64 array in place
            instead of a copy. Ignored for an LUDesign.
        backend: Computational backend to use:
            - 'auto' / 'cpu' / 'cpu_gauss': reference Gaussian elimination
            - 'cpu_lapack': LAPACK getrf + gecon via SciPy

    Returns:
        LUSolution with factors, permutation record and condition estimate

    Raises:
        ConfigurationError: If the matrix is empty, non-square, non-finite
            or the backend is unknown. Nothing has been mutated.
        WorkspaceAllocationError: If scratch memory cannot be acquired

    Example:
        >>> from pylinsolve.lu import factor
        >>> lu = factor([[2.0, 1.0], [1.0, 3.0]])
        >>> lu.status, lu.determinant
        (<Status.OK: 'ok'>, 5.0)
    """
    # === Select Backend ===
    # Checked first so that a bad choice fails before anything is copied
    backend_impl = _get_backend(backend)

    # === Construct Design ===
    if isinstance(matrix, LUDesign):
        design = matrix
    else:
        design = LUDesign.from_array(matrix, ndim=ndim, overwrite_a=overwrite_a)

    # === Factor ===
    result = backend_impl.solve(design)

    # === Wrap and Return ===
    solution = LUSolution(_result=result, _design=design)
    if solution.is_singular:
        warnings.warn(
            f"Matrix is singular to working precision "
            f"(condition estimate {solution.condition:.3e}); "
            f"do not solve with this factorization.",
            RuntimeWarning,
            stacklevel=2,
        )
    return solution


def solve(
    a: ArrayLike | LUSolution | Factorizer,
    b: ArrayLike,
    *,
    overwrite_b: bool = True,
    backend: BackendChoice = 'auto',
) -> NDArray[np.float64]:
    """
    Solve A x = b.

    ``a`` may be a matrix, which is factored first (the caller's matrix is
    not modified), or an existing factorization, which is reused.

    Args:
        a: n x n matrix, LUSolution, or factored Factorizer
        b: Right-hand side of length n
        overwrite_b: Write the solution back into b when b is a writeable
            float64 ndarray or a list
        backend: Backend used when ``a`` has to be factored

    Returns:
        Solution vector x

    Raises:
        ConfigurationError: On malformed input or a length mismatch
        SingularMatrixError: If the factorization is singular

    Example:
        >>> from pylinsolve.lu import solve
        >>> solve([[0.0, 1.0], [1.0, 0.0]], [2.0, 5.0])
        array([5., 2.])
    """
    from pylinsolve.lu.factorizer import Factorizer
    from pylinsolve.lu.solver import Solver

    if isinstance(a, (LUSolution, Factorizer)):
        lu = a
    else:
        _get_backend(backend)
        design = LUDesign.from_array(a)
        with warnings.catch_warnings():
            # A singular matrix is reported below as SingularMatrixError
            warnings.simplefilter('ignore', RuntimeWarning)
            lu = factor(design, backend=backend)

    return Solver(lu).solve(b, overwrite_b=overwrite_b)


def _get_backend(choice: BackendChoice):
    """
    Select and instantiate the appropriate backend.

    Args:
        choice: User's backend preference

    Returns:
        Backend instance ready to factor

    Raises:
        ConfigurationError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_gauss'):
        return CPUGaussBackend()

    elif choice == 'cpu_lapack':
        return CPULapackBackend()

    else:
        raise ConfigurationError(f"Unknown backend: {choice!r}")
