"""
Numerical precision constants and utilities.

Provides machine epsilon and the sentinel values used by the
factorization backends to report loss of precision.
"""

import numpy as np


# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# Condition estimate reported for a matrix singular to working precision
SINGULAR_CONDITION: float = 1.0e32


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype
    """
    return float(np.finfo(dtype).eps)


def negligible(anorm: float, dtype: np.dtype | type = np.float64) -> float:
    """
    Threshold below which a pivot is treated as zero.

    Scaled by the 1-norm of the matrix being factored, so the test is
    relative to the size of its entries.
    """
    return anorm * machine_epsilon(dtype)


def is_negligible(value: float, threshold: float) -> bool:
    """
    True if a pivot is too small to divide by.

    An exact zero always counts, so that a zero matrix (threshold 0.0)
    is caught as well.
    """
    return abs(value) < threshold or value == 0.0


def is_singular_condition(condition: float) -> bool:
    """
    True if adding one to the condition estimate cannot be represented.

    Such a matrix is singular to working precision even if every pivot
    passed the elimination threshold.
    """
    return condition + 1.0 == condition
