"""
Tolerance tiers for numerical validation.

Defines precision expectations for the double-precision backends:
- CPU FP64: well-conditioned systems, tight agreement with LAPACK
- CPU FP64 ill-conditioned: relaxed for cond > ILL_CONDITIONED_THRESHOLD

Used by the test suite and by the backends' ill-conditioning warning.
"""

from dataclasses import dataclass

from pylinsolve.core.compute.precision import EPSILON_64


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Well-conditioned double precision: agreement with LAPACK to near machine precision
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision, matches LAPACK',
)

# Double precision, ill-conditioned problems (cond > 1e4)
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned (cond > 1e4)',
)

# Condition estimate above which a factorization is reported as
# ill-conditioned. Solutions lose roughly log10(cond) significant digits.
ILL_CONDITIONED_THRESHOLD = 1e4

# Multiple of n * eps * cond * ||b|| allowed for the solution residual
RESIDUAL_SAFETY_FACTOR = 10.0


def select_tolerance(is_ill_conditioned: bool = False) -> ToleranceTier:
    """Select appropriate tolerance tier for a factorization."""
    if is_ill_conditioned:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64


def residual_tolerance(condition: float, rhs_norm: float, n: int) -> float:
    """
    Upper bound on ||A x - b||_inf expected from a backward-stable solve.

    Gaussian elimination with partial pivoting has a residual of order
    n * eps * ||A|| * ||x||, which is bounded by n * eps * cond * ||b||.

    Args:
        condition: Condition estimate from the factorization
        rhs_norm: Infinity norm of the right-hand side
        n: Order of the system

    Returns:
        Residual bound
    """
    return RESIDUAL_SAFETY_FACTOR * n * EPSILON_64 * condition * max(rhs_norm, 1.0)
