"""
LU Design.

LUDesign owns the buffer a factorization is performed in: a flat,
row-major float64 array holding a matrix of logical order n with an
explicit row stride ndim >= n. The stride lets the leading n x n block
of a larger allocation be factored in place.

Factorization destroys the buffer contents. Designs built with
from_array() copy the caller's matrix unless overwrite_a=True, so the
caller's matrix survives; designs built with from_buffer() always work
in the caller's storage.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinsolve.core.exceptions import ConfigurationError, WorkspaceAllocationError
from pylinsolve.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_finite,
    check_nonempty,
    check_square,
    check_stride,
)


@dataclass(frozen=True)
class LUDesign:
    """
    Matrix buffer specification for an LU factorization.

    Construction:
        LUDesign.from_array(A)                  # owned copy, stride n
        LUDesign.from_array(A, ndim=8)          # owned copy, stride 8
        LUDesign.from_array(A, overwrite_a=True)  # factor A's storage
        LUDesign.from_buffer(buf, 3, ndim=5)    # leading 3x3 block of buf

    The dataclass is frozen: the buffer reference, order and stride never
    change. The buffer contents are mutated by the backend that factors it.
    """
    _buffer: NDArray[np.float64]
    _n: int
    _ndim: int
    _owns_buffer: bool = True

    @classmethod
    def from_array(
        cls,
        matrix: ArrayLike,
        *,
        ndim: int | None = None,
        overwrite_a: bool = False,
    ) -> LUDesign:
        """
        Build a design from a square matrix.

        Args:
            matrix: n x n array-like (nested sequences are accepted)
            ndim: Row stride of the buffer. Defaults to n.
            overwrite_a: If True and matrix is a C-contiguous float64 ndarray
                (and ndim is None or equal to n), factor its storage directly.

        Returns:
            LUDesign ready for factorization

        Raises:
            ConfigurationError: If the matrix is empty, not 2D, not square,
                non-finite, or ndim < n. Raised before anything is copied.
        """
        arr = check_array(matrix, 'matrix')
        check_2d(arr, 'matrix')
        check_nonempty(arr, 'matrix')
        check_square(arr, 'matrix')
        check_finite(arr, 'matrix')

        n = arr.shape[0]
        stride = n if ndim is None else int(ndim)
        check_stride(n, stride, n * stride, 'matrix')

        if (
            overwrite_a
            and stride == n
            and arr is matrix
            and arr.flags.c_contiguous
            and arr.flags.writeable
        ):
            return cls(_buffer=arr.reshape(-1), _n=n, _ndim=n, _owns_buffer=False)

        try:
            buffer = np.zeros(n * stride, dtype=np.float64)
        except MemoryError as e:
            raise WorkspaceAllocationError(
                f"could not allocate factor buffer of {n * stride} float64 elements",
                size=n * stride,
            ) from e
        buffer.reshape(n, stride)[:, :n] = arr
        return cls(_buffer=buffer, _n=n, _ndim=stride)

    @classmethod
    def from_buffer(
        cls,
        buffer: NDArray[np.float64],
        n: int,
        *,
        ndim: int | None = None,
    ) -> LUDesign:
        """
        Wrap the leading n x n block of a flat row-major buffer.

        The buffer is factored in place; no copy is made.

        Args:
            buffer: 1D, writeable, contiguous float64 array
            n: Logical order of the matrix
            ndim: Row stride. Defaults to n.

        Raises:
            ConfigurationError: If the buffer is not a writeable contiguous
                1D float64 array, or n, ndim and the buffer size disagree
        """
        if not isinstance(buffer, np.ndarray):
            raise ConfigurationError(
                f"buffer: expected numpy.ndarray, got {type(buffer).__name__}"
            )
        check_1d(buffer, 'buffer')
        if buffer.dtype != np.float64:
            raise ConfigurationError(
                f"buffer: expected float64 storage, got {buffer.dtype}"
            )
        if not (buffer.flags.c_contiguous and buffer.flags.writeable):
            raise ConfigurationError("buffer: must be contiguous and writeable")

        stride = n if ndim is None else int(ndim)
        check_stride(int(n), stride, buffer.size, 'buffer')

        block = buffer[: n * stride].reshape(n, stride)[:, :n]
        check_finite(block, 'buffer')
        return cls(_buffer=buffer, _n=int(n), _ndim=stride, _owns_buffer=False)

    # === Properties ===

    @property
    def n(self) -> int:
        """Logical order of the matrix."""
        return self._n

    @property
    def ndim(self) -> int:
        """Row stride of the buffer."""
        return self._ndim

    @property
    def buffer(self) -> NDArray[np.float64]:
        """The flat row-major storage."""
        return self._buffer

    @property
    def owns_buffer(self) -> bool:
        """False if the buffer is caller storage factored in place."""
        return self._owns_buffer

    @property
    def matrix(self) -> NDArray[np.float64]:
        """
        Writeable n x n view onto the buffer.

        Element (i, j) lives at buffer[i * ndim + j]. Writes through the
        view land in the buffer.
        """
        n, ndim = self._n, self._ndim
        return self._buffer[: n * ndim].reshape(n, ndim)[:, :n]

    def metadata(self) -> dict[str, Any]:
        return {
            'n': self._n,
            'ndim': self._ndim,
            'owns_buffer': self._owns_buffer,
        }
