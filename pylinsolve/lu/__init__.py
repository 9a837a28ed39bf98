"""
Dense LU factorization with partial pivoting.

This module factors square matrices by Gaussian elimination, estimates
their condition number, and solves linear systems against the factors.

Public API:
    factor(A, ...) -> LUSolution
    solve(A or LUSolution, b, ...) -> x
    Factorizer:    owns one factorization at a time (reset-before-rebind)
    Solver:        solves against a factorization, writing x back into b

Singularity is reported through ``status`` on the factorization and only
raised (SingularMatrixError) when a solve is attempted with it.

Example:
    >>> from pylinsolve.lu import Factorizer, Solver
    >>> f = Factorizer()
    >>> f.factor([[2.0, 1.0], [1.0, 3.0]]).status
    <Status.OK: 'ok'>
    >>> Solver(f).solve([3.0, 4.0])
    array([1., 1.])
"""

from pylinsolve.lu.design import LUDesign
from pylinsolve.lu.solution import LUSolution, LUParams
from pylinsolve.lu.solvers import factor, solve
from pylinsolve.lu.factorizer import Factorizer
from pylinsolve.lu.solver import Solver

__all__ = [
    "factor",
    "solve",
    "Factorizer",
    "Solver",
    "LUDesign",
    "LUSolution",
    "LUParams",
]
