"""
LAPACK backend for LU factorization.

Uses getrf (via scipy.linalg.lu_factor) for the factorization and gecon
for the 1-norm condition estimate. The LAPACK factor is converted to the
compact layout of the reference backend, so factorizations from either
backend can be handed to the same Solver.

The two backends agree on pivot choice and on U; condition estimates
differ because gecon uses Hager's estimator rather than a single inverse
iteration step.
"""

import warnings as _warnings
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import LinAlgWarning, lu_factor
from scipy.linalg.lapack import dgecon

from pylinsolve.core.exceptions import WorkspaceAllocationError
from pylinsolve.core.result import Result, make_provenance
from pylinsolve.core.status import Status
from pylinsolve.core.compute.precision import (
    SINGULAR_CONDITION,
    is_negligible,
    is_singular_condition,
    negligible,
)
from pylinsolve.core.compute.timing import Timer
from pylinsolve.core.compute.tolerances import ILL_CONDITIONED_THRESHOLD
from pylinsolve.lu._decomp import one_norm
from pylinsolve.lu.design import LUDesign
from pylinsolve.lu.solution import LUParams


class CPULapackBackend:
    """
    CPU backend using LAPACK getrf/gecon through SciPy.

    Implements the Backend protocol for LUDesign -> LUParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_lapack'

    def solve(self, design: LUDesign) -> Result[LUParams]:
        """
        Factor the design buffer with LAPACK and store the result in place.

        LAPACK always completes the elimination, so a singular matrix is
        fully factored here; the status is still SINGULAR and the first
        negligible diagonal element is reported as the singular step.

        Raises:
            WorkspaceAllocationError: If LAPACK's working copy cannot be
                allocated. The design buffer is untouched in that case.
        """
        timer = Timer()
        timer.start()

        n = design.n
        a = design.matrix

        with timer.section('norm'):
            anorm = one_norm(a)

        with timer.section('getrf'):
            try:
                with _warnings.catch_warnings():
                    # Exactly singular input is reported through the status
                    _warnings.simplefilter('ignore', LinAlgWarning)
                    lu, piv = lu_factor(a, check_finite=False)
            except MemoryError as e:
                raise WorkspaceAllocationError(
                    f"could not allocate LAPACK working copy of order {n}",
                    size=n * n,
                ) from e

        tiny = negligible(anorm)
        diag = np.diag(lu)
        small = [k for k in range(n) if is_negligible(diag[k], tiny)]
        singular_step = small[0] if small else None

        if singular_step is not None:
            condition = SINGULAR_CONDITION
        else:
            with timer.section('gecon'):
                rcond, info = dgecon(lu, anorm, norm='1')
            if info != 0 or rcond <= 0.0:
                condition = SINGULAR_CONDITION
            else:
                condition = max(1.0 / float(rcond), 1.0)

        with timer.section('repack'):
            pivot = _pivot_record(piv)
            a[...] = _to_compact(lu, pivot)

        singular = singular_step is not None or is_singular_condition(condition)
        status = Status.SINGULAR if singular else Status.OK

        timer.stop()

        warnings: list[str] = []
        if singular:
            warnings.append(
                "Matrix is singular to working precision; the factorization "
                "must not be used to solve."
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

        info_dict: dict[str, Any] = {
            'method': 'lapack_getrf',
            'pivoting': 'partial',
            'condition_method': 'lapack_gecon',
            'status': status.value,
            'singular_step': singular_step,
            'norm': anorm,
            **design.metadata(),
        }

        return Result(
            params=params,
            info=info_dict,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings),
            provenance=make_provenance(algorithm='lapack_getrf_gecon'),
        )


def _pivot_record(piv: NDArray[np.int32]) -> NDArray[np.intp]:
    """
    Build the permutation record from LAPACK's 0-based ipiv.

    ipiv[n-1] is always n-1, so that slot is free to hold the parity.
    """
    n = piv.shape[0]
    pivot = np.asarray(piv, dtype=np.intp).copy()
    swaps = int(np.count_nonzero(pivot[: n - 1] != np.arange(n - 1)))
    pivot[n - 1] = -1 if swaps % 2 else 1
    return pivot


def _to_compact(lu: NDArray[np.float64], pivot: NDArray[np.intp]) -> NDArray[np.float64]:
    """
    Convert LAPACK's packed factor to the compact elimination layout.

    LAPACK applies every interchange to whole rows, so the multipliers of
    step k end up permuted by the interchanges of later steps. Undoing
    those interchanges on the columns before each step, latest first, puts
    each column back in the row order of its own step. The multipliers are
    then negated.
    """
    n = lu.shape[0]
    out = np.array(lu, dtype=np.float64, order='C')
    for k in range(n - 2, -1, -1):
        m = int(pivot[k])
        if m != k:
            out[[k, m], :k] = out[[m, k], :k]
    lower = np.tril_indices(n, -1)
    out[lower] = -out[lower]
    return out
