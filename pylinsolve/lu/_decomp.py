"""
Gaussian elimination with partial pivoting and condition estimation.

Row-wise elimination in the style of Forsythe, Malcolm & Moler's DECOMP:
the factor is built in place, the multipliers are stored negated in the
eliminated slots, and the condition of the matrix is estimated with one
step of inverse iteration on the 1-norm.

All kernels take the n x n factor view of an LUDesign and mutate it.
They report singularity by returning the step at which it was detected
rather than raising; the caller decides what status to record.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.compute.precision import (
    SINGULAR_CONDITION,
    is_negligible,
    negligible,
)
from pylinsolve.lu._substitution import lu_solve_inplace


def one_norm(a: NDArray[np.float64]) -> float:
    """Maximum absolute column sum of a."""
    return float(np.max(np.sum(np.abs(a), axis=0)))


def eliminate(
    a: NDArray[np.float64],
    pivot: NDArray[np.intp],
    anorm: float,
) -> int | None:
    """
    Reduce a to upper triangular form in place.

    For each step k the row with the largest |a[i, k]|, i >= k, becomes the
    pivot row (first occurrence wins ties). Rows are interchanged over
    columns k..n-1 only, and every interchange flips the sign of
    pivot[n-1].

    Elimination stops at the first pivot smaller than anorm * eps (or
    exactly zero, which covers the zero matrix). The rows below it are
    left as they were at that point.

    Only rows whose multiplier is exactly zero skip the update. A
    multiplier is relative to its pivot, so comparing it against the
    scaled threshold would drop real updates once anorm exceeds 1/eps.

    Args:
        a: n x n factor view, overwritten
        pivot: Permutation record, pivot[n-1] must hold the initial parity
        anorm: 1-norm of the matrix before elimination

    Returns:
        Step at which a negligible pivot was found, or None
    """
    n = a.shape[0]
    tiny = negligible(anorm)

    for k in range(n - 1):
        m = k + int(np.argmax(np.abs(a[k:, k])))
        pivot[k] = m

        if m != k:
            pivot[n - 1] = -pivot[n - 1]
            a[[k, m], k:] = a[[m, k], k:]

        pvt = a[k, k]
        if is_negligible(pvt, tiny):
            return k

        t = -(a[k + 1:, k] / pvt)
        a[k + 1:, k] = t

        # Rows with a zero multiplier are left alone
        rows = np.flatnonzero(t != 0.0) + k + 1
        if rows.size:
            a[rows, k + 1:] += np.outer(t[rows - k - 1], a[k, k + 1:])

    return None


def estimate_condition(
    a: NDArray[np.float64],
    pivot: NDArray[np.intp],
    anorm: float,
    work: NDArray[np.float64],
) -> tuple[float, int | None]:
    """
    Estimate the 1-norm condition number of a factored matrix.

    cond = anorm * ||z||_1 / ||y||_1, where y comes from solving the
    transposed system against a vector e of +1/-1 entries chosen to cause
    growth, and z solves A z = y. This is one step of inverse iteration
    for the smallest singular vector.

    Args:
        a: Completed n x n factor view (read only here)
        pivot: Permutation record from eliminate()
        anorm: 1-norm of the matrix before elimination
        work: Scratch vector of length n

    Returns:
        (condition, singular_step). If a diagonal element of U is
        negligible, condition is SINGULAR_CONDITION and singular_step is
        its index; otherwise singular_step is None. An estimate that
        overflows is reported as SINGULAR_CONDITION; one too large to add
        one to is returned as computed (see is_singular_condition).
    """
    n = a.shape[0]
    tiny = negligible(anorm)

    # Solve (a-transpose) * y = e
    for k in range(n):
        t = float(a[:k, k] @ work[:k])
        ek = -1.0 if t < 0.0 else 1.0
        if is_negligible(a[k, k], tiny):
            return SINGULAR_CONDITION, k
        work[k] = -(ek + t) / a[k, k]

    for k in range(n - 2, -1, -1):
        work[k] = a[k + 1:, k] @ work[k + 1:]
        m = pivot[k]
        if m != k:
            work[k], work[m] = work[m], work[k]

    ynorm = float(np.sum(np.abs(work)))
    if not np.isfinite(ynorm):
        return SINGULAR_CONDITION, None

    # Solve a * z = y with y scaled to unit 1-norm
    work /= ynorm
    lu_solve_inplace(a, pivot, work)
    znorm = float(np.sum(np.abs(work)))

    condition = anorm * znorm
    if not np.isfinite(condition):
        return SINGULAR_CONDITION, None
    return max(condition, 1.0), None
