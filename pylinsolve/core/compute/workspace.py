"""
Scoped scratch-buffer ownership.

A Workspace acquires a float64 scratch vector on entry and releases it on
exit, whichever way the block is left (normal completion, early return on
a singular pivot, or an exception). Allocation failure is reported as
WorkspaceAllocationError before any caller buffer has been touched.

Usage:
    with Workspace(n) as work:
        work[:] = ...
    # work has been released here
"""

from __future__ import annotations

from types import TracebackType

import numpy as np
from numpy.typing import NDArray

from pylinsolve.core.exceptions import WorkspaceAllocationError


class Workspace:
    """
    Owned float64 scratch vector of fixed length.

    A Workspace can be entered once. After exit, ``released`` is True and
    the array is no longer reachable through it.
    """

    def __init__(self, size: int):
        if size < 0:
            raise ValueError(f"Workspace size must be non-negative, got {size}")
        self._size = size
        self._array: NDArray[np.float64] | None = None
        self._released = False

    @property
    def size(self) -> int:
        return self._size

    @property
    def acquired(self) -> bool:
        """True while the scratch vector is held."""
        return self._array is not None

    @property
    def released(self) -> bool:
        """True once the scratch vector has been given back."""
        return self._released

    def __enter__(self) -> NDArray[np.float64]:
        if self._released or self._array is not None:
            raise RuntimeError("Workspace cannot be entered more than once")
        try:
            self._array = np.empty(self._size, dtype=np.float64)
        except MemoryError as e:
            raise WorkspaceAllocationError(
                f"could not allocate workspace of {self._size} float64 elements",
                size=self._size,
            ) from e
        return self._array

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._array = None
        self._released = True

    def __repr__(self) -> str:
        state = 'released' if self._released else ('held' if self.acquired else 'idle')
        return f"Workspace(size={self._size}, {state})"
