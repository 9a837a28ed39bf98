"""
Generic result container for all pylinsolve computations.

The Result class provides a standardized envelope that backend output is
wrapped in. This enables shared tooling for timing, diagnostics and
reproducibility while letting each decomposition define its own payload.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (status, pivoting, diagnostics)
    - timing is optional (don't burden unit tests)
    - provenance records library versions for reproducibility
    - Immutable (frozen=True) for reproducibility
"""

import platform
from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Version information captured when a Result is created."""
    import numpy as np
    import scipy

    from pylinsolve import __version__

    return {
        'pylinsolve_version': __version__,
        'numpy_version': np.__version__,
        'scipy_version': scipy.__version__,
        'python_version': platform.python_version(),
    }


def make_provenance(**extra: Any) -> dict[str, Any]:
    """Default provenance extended with backend-specific entries."""
    provenance: dict[str, Any] = dict(_default_provenance())
    provenance.update(extra)
    return provenance


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for numerical computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (factors, pivots, condition, ...)
        info: Structured metadata (method, status, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Library versions and algorithm details

    Examples:
        >>> Result(
        ...     params=LUParams(...),
        ...     info={'method': 'gaussian_elimination', 'status': 'ok'},
        ...     timing={'total_seconds': 0.001, 'elimination': 0.0008},
        ...     backend_name='cpu_gauss',
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, Any] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
