"""
Gauss-Jordan and Gaussian elimination.

Both routines solve A X = B for one or more right-hand sides and replace
A with its inverse. B is copied into X (allocated when not supplied) and
is itself left unmodified.

Gauss-Jordan uses full pivoting: at each step the largest remaining
element of the unreduced block is moved onto the diagonal by a row swap,
while the column choice is only recorded and undone at the end by
swapping the columns of the inverse in reverse order.

Gaussian elimination uses partial pivoting (largest element of the current
column at or below the diagonal) and recovers the inverse by carrying the
identity matrix as additional right-hand-side columns.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pymathpack.core.validation import check_square
from pymathpack.primitives.procedures import matrix_view, swap_cols, swap_rows
from pymathpack.solvers._common import check_pivot, prepare_output


def gauss_jordan(A: Any, B: Any, X: Any = None) -> Any:
    """
    Solve A X = B by Gauss-Jordan elimination with full pivoting.

    Args:
        A: N x N coefficient matrix, overwritten with its inverse
        B: Right-hand side, vector of size N or N x M matrix (not modified)
        X: Optional output of B's shape; a copy of B is allocated if None

    Returns:
        X, holding the solution

    Raises:
        DimensionMismatchError: If A is not square or B does not have N rows
        SingularMatrixError: If no non-zero pivot remains at some step
    """
    a = matrix_view(A)
    n = a.shape[0]
    check_square(a.shape[0], a.shape[1], 'gauss_jordan')
    X, x = prepare_output(B, X, n, 'gauss_jordan')
    scale = float(np.max(np.abs(a))) if a.size else 0.0

    if n == 1:
        pivot = a[0, 0]
        check_pivot(pivot, scale, 0, 'gauss_jordan')
        x /= pivot
        a[0, 0] = 1.0 / pivot
        return X

    used = np.zeros(n, dtype=bool)
    indxr = np.empty(n, dtype=np.intp)
    indxc = np.empty(n, dtype=np.intp)

    for i in range(n):
        # Full pivot search over the rows and columns not yet reduced
        free = np.flatnonzero(~used)
        block = np.abs(a[np.ix_(free, free)])
        r, c = np.unravel_index(np.argmax(block), block.shape)
        irow, icol = int(free[r]), int(free[c])
        used[icol] = True

        # Move the pivot onto the diagonal
        if irow != icol:
            swap_rows(a, irow, icol)
            swap_rows(x, irow, icol)
        indxr[i] = irow
        indxc[i] = icol

        pivot = a[icol, icol]
        check_pivot(pivot, scale, i, 'gauss_jordan')
        pivinv = 1.0 / pivot
        a[icol, icol] = 1.0
        a[icol] *= pivinv
        x[icol] *= pivinv

        # Reduce every other row
        dum = a[:, icol].copy()
        dum[icol] = 0.0
        a[dum != 0.0, icol] = 0.0
        a -= np.outer(dum, a[icol])
        x -= np.outer(dum, x[icol])

    # Undo the column permutation in reverse order
    for k in range(n - 1, -1, -1):
        if indxr[k] != indxc[k]:
            swap_cols(a, int(indxr[k]), int(indxc[k]))

    return X


def gauss_elimination(A: Any, B: Any, X: Any = None) -> Any:
    """
    Solve A X = B by Gaussian elimination with partial pivoting.

    Same contract as gauss_jordan: A is overwritten with its inverse and X
    (a copy of B unless supplied) receives the solution.

    Raises:
        DimensionMismatchError: If A is not square or B does not have N rows
        SingularMatrixError: If a column has no non-zero pivot candidate
    """
    a = matrix_view(A)
    n = a.shape[0]
    check_square(a.shape[0], a.shape[1], 'gauss_elimination')
    X, x = prepare_output(B, X, n, 'gauss_elimination')
    scale = float(np.max(np.abs(a))) if a.size else 0.0

    if n == 1:
        pivot = a[0, 0]
        check_pivot(pivot, scale, 0, 'gauss_elimination')
        x /= pivot
        a[0, 0] = 1.0 / pivot
        return X

    m = x.shape[1]
    work = a.copy()
    rhs = np.hstack([x, np.eye(n)])

    # Forward elimination
    for k in range(n):
        p = k + int(np.argmax(np.abs(work[k:, k])))
        check_pivot(work[p, k], scale, k, 'gauss_elimination')
        if p != k:
            swap_rows(work, p, k)
            swap_rows(rhs, p, k)
        factors = work[k + 1:, k] / work[k, k]
        work[k + 1:, k:] -= np.outer(factors, work[k, k:])
        rhs[k + 1:] -= np.outer(factors, rhs[k])

    # Back substitution over every right-hand-side column
    for k in range(n - 1, -1, -1):
        rhs[k] = (rhs[k] - work[k, k + 1:] @ rhs[k + 1:]) / work[k, k]

    x[:] = rhs[:, :m]
    a[:] = rhs[:, m:]
    return X
