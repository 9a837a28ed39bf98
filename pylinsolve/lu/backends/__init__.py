"""
LU factorization backends.

Available backends:
    CPUGaussBackend: Reference Gaussian elimination with LINPACK condition estimate
    CPULapackBackend: LAPACK getrf/gecon via SciPy, repacked to the same layout
"""

from pylinsolve.lu.backends.cpu import CPUGaussBackend
from pylinsolve.lu.backends.lapack import CPULapackBackend

__all__ = [
    "CPUGaussBackend",
    "CPULapackBackend",
]
