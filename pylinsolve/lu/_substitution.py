"""
Forward elimination and back substitution against a compact LU factor.

The factor layout is the one produced by the elimination kernel: the
negated multipliers of step k sit below the diagonal of column k in the
row order current at step k (later interchanges only touch columns >= k),
and U sits on and above the diagonal. Solving therefore replays each
interchange immediately before applying that step's multipliers.
"""

import numpy as np
from numpy.typing import NDArray


def lu_solve_inplace(
    a: NDArray[np.float64],
    pivot: NDArray[np.intp],
    b: NDArray[np.float64],
) -> None:
    """
    Overwrite b with the solution of A x = b.

    No checks and no allocation: a must be a complete (non-singular)
    factorization of order len(b). Used both by the Solver and by the
    condition estimator.

    Args:
        a: n x n factor view (multipliers below, U on/above the diagonal)
        pivot: Permutation record of length n
        b: Right-hand side, overwritten with the solution
    """
    n = a.shape[0]

    if n == 1:
        b[0] /= a[0, 0]
        return

    # Permutation replay + forward elimination
    for k in range(n - 1):
        m = pivot[k]
        t = b[m]
        b[m] = b[k]
        b[k] = t
        b[k + 1:] += a[k + 1:, k] * t

    # Back substitution
    for k in range(n - 1, -1, -1):
        t = b[k] - a[k, k + 1:] @ b[k + 1:]
        b[k] = t / a[k, k]
