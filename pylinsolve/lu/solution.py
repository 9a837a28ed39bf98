"""
LU solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.exceptions import SingularMatrixError
from pylinsolve.core.result import Result
from pylinsolve.core.status import Status

if TYPE_CHECKING:
    from pylinsolve.lu.design import LUDesign


@dataclass(frozen=True)
class LUParams:
    """
    Parameter payload for an LU factorization.

    This is the data computed by backends. ``factors`` is a view onto the
    design buffer, not a copy.

    Attributes:
        factors: n x n compact factor (negated multipliers below the
            diagonal, U on and above it)
        pivot: Permutation record; pivot[k] is the pivot row of step k for
            k < n-1, pivot[n-1] is the interchange parity (+1 or -1)
        condition: Condition estimate (>= 1.0, 1e32 if singular)
        status: Status.OK or Status.SINGULAR
        norm: 1-norm of the matrix before factorization
        singular_step: Step at which a negligible pivot stopped the
            factorization, or None
    """
    factors: NDArray[np.float64]
    pivot: NDArray[np.intp]
    condition: float
    status: Status
    norm: float
    singular_step: int | None = None


@dataclass
class LUSolution:
    """
    User-facing factorization results.

    Wraps the backend Result and provides convenient accessors for the
    factors, the permutation, the condition estimate and the determinant.
    """
    _result: Result[LUParams]
    _design: 'LUDesign'

    # Cached computations
    _unpacked: tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.intp]] | None = None

    @property
    def status(self) -> Status:
        return self._result.params.status

    @property
    def condition(self) -> float:
        return self._result.params.condition

    @property
    def is_singular(self) -> bool:
        return self.status is Status.SINGULAR

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def ndim(self) -> int:
        return self._design.ndim

    @property
    def factors(self) -> NDArray[np.float64]:
        return self._result.params.factors

    @property
    def pivot(self) -> NDArray[np.intp]:
        return self._result.params.pivot

    @property
    def parity(self) -> int:
        """(-1) ** (number of row interchanges)."""
        return int(self.pivot[-1])

    @property
    def norm(self) -> float:
        return self._result.params.norm

    @property
    def singular_step(self) -> int | None:
        return self._result.params.singular_step

    @property
    def design(self) -> 'LUDesign':
        return self._design

    @property
    def determinant(self) -> float:
        """
        det(A) = parity * prod(diag(U)).

        A singular factorization may be incomplete, so its diagonal says
        nothing reliable; 0.0 is returned instead.
        """
        if self.is_singular:
            return 0.0
        return float(self.parity * np.prod(np.diag(self.factors)))

    def _unpack(self) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.intp]]:
        """
        Convert the compact factor to explicit P, L, U with P A = L U.

        The compact layout keeps the multipliers of step k in the row order
        current at step k. Applying each later interchange to the columns
        before it gives the usual unit lower triangular L.
        """
        if self._unpacked is not None:
            return self._unpacked

        n = self.n
        a = self.factors
        lower = -np.tril(a, -1)
        perm = np.arange(n)
        for k in range(n - 1):
            m = int(self.pivot[k])
            if m != k:
                lower[[k, m], :k] = lower[[m, k], :k]
                perm[[k, m]] = perm[[m, k]]
        lower[np.diag_indices(n)] = 1.0
        upper = np.triu(a)
        self._unpacked = (lower, upper, perm)
        return self._unpacked

    @property
    def lower(self) -> NDArray[np.float64]:
        """Unit lower triangular factor L."""
        self.require_nonsingular()
        return self._unpack()[0]

    @property
    def upper(self) -> NDArray[np.float64]:
        """Upper triangular factor U."""
        self.require_nonsingular()
        return self._unpack()[1]

    @property
    def row_order(self) -> NDArray[np.intp]:
        """Row indices such that A[row_order] = L @ U."""
        self.require_nonsingular()
        return self._unpack()[2]

    @property
    def permutation(self) -> NDArray[np.float64]:
        """Permutation matrix P such that P @ A = L @ U."""
        order = self.row_order
        return np.eye(self.n)[order]

    def require_nonsingular(self, matrix_name: str = 'A') -> None:
        """
        Raise SingularMatrixError if this factorization is singular.

        Raises:
            SingularMatrixError: If status is SINGULAR
        """
        if self.is_singular:
            step = self.singular_step
            where = f" (negligible pivot at step {step})" if step is not None else ""
            raise SingularMatrixError(
                f"{matrix_name} is singular to working precision{where}; "
                f"condition estimate {self.condition:.3e}",
                matrix_name=matrix_name,
                condition_number=self.condition,
                step=step,
            )

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Generate a text summary of the factorization."""
        lines = [
            "LU Factorization (partial pivoting)",
            "=" * 60,
            f"Order: {self.n}",
            f"Row stride: {self.ndim}",
            f"Status: {self.status}",
            f"Condition estimate: {self.condition:.6e}",
            f"1-norm: {self.norm:.6e}",
        ]
        if self.is_singular:
            if self.singular_step is not None:
                lines.append(f"Negligible pivot at step: {self.singular_step}")
        else:
            lines.append(f"Determinant: {self.determinant:.6e}")
        lines.append(f"Row interchanges parity: {self.parity:+d}")

        if self.warnings:
            lines.append("")
            lines.append("Warnings:")
            for w in self.warnings:
                lines.append(f"  - {w}")

        lines.append("-" * 60)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LUSolution(n={self.n}, status={self.status.value}, "
            f"condition={self.condition:.4e})"
        )
