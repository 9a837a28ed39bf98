"""
Core protocols for pylinsolve.

These define structural interfaces that decomposition backends must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) to allow
flexibility while maintaining type safety.
"""

from typing import Protocol, TypeVar, runtime_checkable

from pylinsolve.core.result import Result

D = TypeVar('D', contravariant=True)  # Design type
P = TypeVar('P', covariant=True)      # Parameter payload type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for factorization backends.

    A backend takes a validated design (an owned matrix buffer) and factors
    it in place, returning the payload wrapped in a Result. The backend
    handles the numerical work only; validation happens at the boundary.

    Backends are stateless. All per-call state lives in the design they are
    handed, which makes them easy to test and swap.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_gauss', 'cpu_lapack'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Factor the design's matrix buffer in place.

        Returns:
            Result envelope containing parameter payload and metadata

        Raises:
            WorkspaceAllocationError: If scratch memory cannot be acquired
        """
        ...
