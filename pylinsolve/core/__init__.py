"""
Core infrastructure for pylinsolve.

This module provides shared abstractions, utilities, and compute
infrastructure used by the decomposition domains.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    status: Status codes
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, precision constants, scratch workspaces
"""

from pylinsolve.core.protocols import Backend
from pylinsolve.core.result import Result
from pylinsolve.core.status import Status
from pylinsolve.core.exceptions import (
    PyLinSolveError,
    ConfigurationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
    WorkspaceAllocationError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    "Status",
    # Exceptions
    "PyLinSolveError",
    "ConfigurationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    "WorkspaceAllocationError",
]
