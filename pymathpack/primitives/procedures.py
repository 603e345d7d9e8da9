"""
Generic matrix procedures.

These operate on any matrix or vector type of the package, and on plain
float64 numpy arrays so that the solvers can apply them to working
buffers. Diagonals, rows and columns are copied element by element; when
the source is shorter than the destination vector the remainder of the
destination is zero-filled (get_*), and when it is longer only the first
`destination size` elements are written (set_*).

Diagonal offsets:
    d = 0    main diagonal
    d > 0    d-th super-diagonal  (row r, column r + d)
    d < 0    |d|-th sub-diagonal  (row r + |d|, column r)
"""

from __future__ import annotations

from typing import Any, Union

import numpy as np
from numpy.typing import NDArray

from pymathpack.core.exceptions import ValidationError
from pymathpack.core.protocols import MatrixLike, VectorLike
from pymathpack.core.validation import check_index
from pymathpack.primitives.matrices import MatrixBase
from pymathpack.primitives.vectors import VectorBase, VectorN

# Package value types or plain float64 arrays
MatrixArg = Union[MatrixLike, NDArray[np.float64]]
VectorArg = Union[VectorLike, NDArray[np.float64]]


def matrix_view(A: Any, name: str = 'A') -> NDArray[np.float64]:
    """Live 2-D float64 view of A (MatrixBase or ndarray)."""
    if isinstance(A, MatrixBase):
        return A.array
    if isinstance(A, np.ndarray) and A.ndim == 2 and A.dtype == np.float64:
        return A
    raise ValidationError(
        f"{name}: expected a matrix or 2-D float64 array, got {type(A).__name__}"
    )


def vector_view(u: Any, name: str = 'u') -> NDArray[np.float64]:
    """Live 1-D float64 view of u (VectorBase or ndarray)."""
    if isinstance(u, VectorBase):
        return u.array
    if isinstance(u, np.ndarray) and u.ndim == 1 and u.dtype == np.float64:
        return u
    raise ValidationError(
        f"{name}: expected a vector or 1-D float64 array, got {type(u).__name__}"
    )


def rhs_view(B: Any, name: str = 'B') -> NDArray[np.float64]:
    """
    Live 2-D view of a right-hand side.

    A vector of size N is viewed as N x 1; a matrix as itself.
    """
    if isinstance(B, VectorBase):
        return B.array.reshape(-1, 1)
    if isinstance(B, MatrixBase):
        return B.array
    if isinstance(B, np.ndarray) and B.dtype == np.float64 and B.ndim in (1, 2):
        return B.reshape(B.shape[0], -1)
    raise ValidationError(
        f"{name}: expected a vector, matrix or float64 array, got {type(B).__name__}"
    )


def _diagonal_index(rows: int, cols: int, d: int) -> tuple[NDArray[np.intp], NDArray[np.intp]]:
    # valid offsets: -rows < d < cols
    if isinstance(d, (int, np.integer)) and d < 0:
        d = -check_index(-d, rows, "sub-diagonal offset")
    else:
        d = check_index(d, cols, "diagonal offset")
    if d >= 0:
        r = np.arange(min(rows, cols - d))
        return r, r + d
    c = np.arange(min(rows + d, cols))
    return c - d, c


def _copy_out(src: NDArray[np.float64], dst: NDArray[np.float64]) -> None:
    k = min(src.shape[0], dst.shape[0])
    dst[:k] = src[:k]
    dst[k:] = 0.0


def get_diag(A: MatrixArg, d: int = 0, u: VectorArg | None = None) -> VectorArg:
    """
    Copy the d-th diagonal of A into u.

    When u is None a VectorN of the diagonal's length is allocated.

    Returns:
        u
    """
    a = matrix_view(A)
    rr, cc = _diagonal_index(a.shape[0], a.shape[1], d)
    if u is None:
        return VectorN._new(a[rr, cc].copy())
    _copy_out(a[rr, cc], vector_view(u))
    return u


def set_diag(u: VectorArg, A: MatrixArg, d: int = 0) -> MatrixArg:
    """Copy u into the d-th diagonal of A; returns A."""
    a = matrix_view(A)
    v = vector_view(u)
    rr, cc = _diagonal_index(a.shape[0], a.shape[1], d)
    k = min(v.shape[0], rr.shape[0])
    a[rr[:k], cc[:k]] = v[:k]
    return A


def get_row(A: MatrixArg, i: int, u: VectorArg | None = None) -> VectorArg:
    """
    Copy row i of A into u (zero-padding u if it is longer than a row).

    Raises:
        IndexOutOfRangeError: If i is not a valid row index
    """
    a = matrix_view(A)
    i = check_index(i, a.shape[0], 'row')
    if u is None:
        return VectorN._new(a[i].copy())
    _copy_out(a[i], vector_view(u))
    return u


def set_row(u: VectorArg, A: MatrixArg, i: int) -> MatrixArg:
    """Copy u into row i of A; returns A."""
    a = matrix_view(A)
    v = vector_view(u)
    i = check_index(i, a.shape[0], 'row')
    k = min(v.shape[0], a.shape[1])
    a[i, :k] = v[:k]
    return A


def get_col(A: MatrixArg, j: int, u: VectorArg | None = None) -> VectorArg:
    """
    Copy column j of A into u (zero-padding u if it is longer than a column).

    Raises:
        IndexOutOfRangeError: If j is not a valid column index
    """
    a = matrix_view(A)
    j = check_index(j, a.shape[1], 'column')
    if u is None:
        return VectorN._new(a[:, j].copy())
    _copy_out(a[:, j], vector_view(u))
    return u


def set_col(u: VectorArg, A: MatrixArg, j: int) -> MatrixArg:
    """Copy u into column j of A; returns A."""
    a = matrix_view(A)
    v = vector_view(u)
    j = check_index(j, a.shape[1], 'column')
    k = min(v.shape[0], a.shape[0])
    a[:k, j] = v[:k]
    return A


def swap_rows(A: MatrixArg, i: int, j: int) -> MatrixArg:
    """Exchange rows i and j of A in place; returns A."""
    a = matrix_view(A)
    i = check_index(i, a.shape[0], 'row')
    j = check_index(j, a.shape[0], 'row')
    if i != j:
        a[[i, j]] = a[[j, i]]
    return A


def swap_cols(A: MatrixArg, i: int, j: int) -> MatrixArg:
    """Exchange columns i and j of A in place; returns A."""
    a = matrix_view(A)
    i = check_index(i, a.shape[1], 'column')
    j = check_index(j, a.shape[1], 'column')
    if i != j:
        a[:, [i, j]] = a[:, [j, i]]
    return A
