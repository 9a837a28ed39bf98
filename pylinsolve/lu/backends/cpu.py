"""
CPU reference backend for LU factorization.

Gaussian elimination with partial pivoting on the design buffer, followed
by a LINPACK-style condition estimate. This is the reference
implementation: it defines the compact factor layout, the permutation
record and the singularity rules that the other backends reproduce.
"""

from typing import Any
import numpy as np

from pylinsolve.core.result import Result, make_provenance
from pylinsolve.core.status import Status
from pylinsolve.core.compute.precision import SINGULAR_CONDITION, is_singular_condition
from pylinsolve.core.compute.timing import Timer
from pylinsolve.core.compute.tolerances import ILL_CONDITIONED_THRESHOLD
from pylinsolve.core.compute.workspace import Workspace
from pylinsolve.lu._decomp import eliminate, estimate_condition, one_norm
from pylinsolve.lu.design import LUDesign
from pylinsolve.lu.solution import LUParams


class CPUGaussBackend:
    """
    CPU backend using row-wise Gaussian elimination.

    Implements the Backend protocol for LUDesign -> LUParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_gauss'

    def solve(self, design: LUDesign) -> Result[LUParams]:
        """
        Factor the design buffer in place.

        Algorithm:
            1. Acquire an n-element workspace (before touching the buffer)
            2. Compute the 1-norm of the matrix
            3. Eliminate with partial pivoting, stopping at a negligible pivot
            4. Estimate the condition number by one step of inverse iteration

        A 1 x 1 matrix is singular only if its element is exactly zero.
        The anorm * eps threshold does not apply there, since anorm is the
        element itself; [[1e-300]] factors with status OK and condition 1.0.

        Args:
            design: Validated LU design

        Returns:
            Result containing LUParams. Singularity is reported through
            params.status, not raised.

        Raises:
            WorkspaceAllocationError: If the workspace cannot be acquired
        """
        timer = Timer()
        timer.start()

        n = design.n
        a = design.matrix
        pivot = np.zeros(n, dtype=np.intp)
        pivot[n - 1] = 1
        singular_step: int | None = None

        with Workspace(n) as work:
            with timer.section('norm'):
                anorm = one_norm(a)

            if n == 1:
                # One element only
                condition = 1.0
                if a[0, 0] == 0.0:
                    condition = SINGULAR_CONDITION
                    singular_step = 0
            else:
                with timer.section('elimination'):
                    singular_step = eliminate(a, pivot, anorm)

                if singular_step is not None:
                    condition = SINGULAR_CONDITION
                else:
                    with timer.section('condition_estimate'):
                        condition, singular_step = estimate_condition(
                            a, pivot, anorm, work
                        )

        singular = singular_step is not None or is_singular_condition(condition)
        status = Status.SINGULAR if singular else Status.OK

        timer.stop()

        warnings: list[str] = []
        if singular:
            warnings.append(
                "Matrix is singular to working precision; the factorization "
                "may be incomplete and must not be used to solve."
            )
        elif condition > ILL_CONDITIONED_THRESHOLD:
            warnings.append(
                f"Matrix is ill-conditioned (condition estimate {condition:.3e}); "
                f"expect to lose about {int(np.log10(condition))} significant digits."
            )

        params = LUParams(
            factors=a,
            pivot=pivot,
            condition=condition,
            status=status,
            norm=anorm,
            singular_step=singular_step,
        )

        info: dict[str, Any] = {
            'method': 'gaussian_elimination',
            'pivoting': 'partial',
            'condition_method': 'linpack_inverse_iteration',
            'status': status.value,
            'singular_step': singular_step,
            'norm': anorm,
            **design.metadata(),
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings),
            provenance=make_provenance(algorithm='gaussian_elimination'),
        )
