"""
Factorization status codes for pylinsolve.

This module is the SINGLE SOURCE OF TRUTH for status values.
Import from here, never compare against raw strings.

Usage:
    from pylinsolve.core.status import Status

    if solution.status is Status.SINGULAR:
        ...
"""

from enum import Enum


class Status(str, Enum):
    """
    Outcome of a factorization request.

    OK and SINGULAR are reported on a completed (or partially completed)
    factorization. CONFIGURATION_ERROR and ALLOCATION_FAILURE mean the
    factorization never started; they are carried by the corresponding
    exceptions rather than returned.
    """
    OK = 'ok'
    ALLOCATION_FAILURE = 'allocation_failure'
    CONFIGURATION_ERROR = 'configuration_error'
    SINGULAR = 'singular'

    def __str__(self) -> str:
        return self.value


__all__ = ['Status']
