"""
Shared compute infrastructure for pylinsolve.

This module provides timing utilities, precision constants and scratch
buffer ownership shared by all factorization backends.

IMPORTANT: This is NOT where backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    precision: Numerical precision constants and utilities
    tolerances: Tolerance tiers and residual bounds
    workspace: Scoped scratch-buffer ownership
"""

from pylinsolve.core.compute.timing import Timer, timed
from pylinsolve.core.compute.workspace import Workspace

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Buffers
    "Workspace",
]
