"""
Exception hierarchy for pylinsolve.

All exceptions inherit from PyLinSolveError to allow catching any
library-specific error. Each exception class carries the Status code
that the failure corresponds to.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
    - A singular factorization is a status, not an exception; only
      solving against one raises
"""

from pylinsolve.core.status import Status


class PyLinSolveError(Exception):
    """Base exception for all pylinsolve errors."""
    status: Status | None = None


class ConfigurationError(PyLinSolveError):
    """
    Input is malformed.

    Raised before any buffer is mutated when the matrix or vector supplied
    by the caller cannot be factored or solved as given (empty, non-square,
    non-finite, wrong stride, size mismatch). The caller may retry with
    corrected input.
    """
    status = Status.CONFIGURATION_ERROR


class DimensionError(ConfigurationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when a matrix and a vector have inconsistent sizes.
    """
    pass


class NumericalError(PyLinSolveError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular to working precision.

    Raised when a solve is requested against a factorization whose status
    is SINGULAR. The factor buffer of such a factorization may be only
    partially eliminated and cannot produce a meaningful solution.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Condition estimate, if available
        step: Elimination step at which singularity was detected, if known
    """
    status = Status.SINGULAR

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        step: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.step = step


class WorkspaceAllocationError(PyLinSolveError, MemoryError):
    """
    Scratch workspace could not be acquired.

    Transient: the caller may retry under lower memory pressure. The
    factor buffer is left untouched when this is raised.

    Attributes:
        size: Number of float64 elements requested
    """
    status = Status.ALLOCATION_FAILURE

    def __init__(self, message: str, size: int | None = None):
        super().__init__(message)
        self.size = size
