"""
Tridiagonal system solver.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pymathpack.core.exceptions import DimensionMismatchError
from pymathpack.primitives.procedures import matrix_view, vector_view
from pymathpack.solvers._common import check_pivot


def tridiagonal(A: Any, B: Any) -> Any:
    """
    Solve a tridiagonal system in O(N).

    A is an N x 3 band matrix: column 0 holds the sub-diagonal (A[0, 0] is
    unused), column 1 the diagonal, column 2 the super-diagonal
    (A[N-1, 2] is unused). B holds the N right-hand-side values and is
    overwritten with the solution. No pivoting is performed, so the method
    is meant for diagonally dominant or otherwise well-behaved systems.

    A is left unchanged; the decomposition keeps its scaled super-diagonal
    in a scratch buffer.

    Args:
        A: N x 3 band matrix (MatrixN or 2-D float64 array)
        B: Right-hand side of size N (vector or 1-D float64 array)

    Returns:
        B, now holding the solution

    Raises:
        DimensionMismatchError: If A is not N x 3 or B is not of size N
        SingularMatrixError: If an elimination pivot is exactly zero
    """
    a = matrix_view(A)
    u = vector_view(B, 'B')
    n = a.shape[0]
    if a.shape[1] != 3:
        raise DimensionMismatchError(
            f"tridiagonal: band matrix must have 3 columns, got {a.shape[1]}",
            expected=(n, 3),
            actual=a.shape,
        )
    if u.shape[0] != n:
        raise DimensionMismatchError(
            f"tridiagonal: right-hand side has {u.shape[0]} elements, band has {n} rows",
            expected=(n,),
            actual=(u.shape[0],),
        )

    sub, diag, sup = a[:, 0], a[:, 1], a[:, 2]
    scale = float(np.max(np.abs(a))) if a.size else 0.0
    gam = np.empty(n, dtype=np.float64)

    bet = diag[0]
    check_pivot(bet, scale, 0, 'tridiagonal')
    u[0] = u[0] / bet
    for j in range(1, n):
        gam[j] = sup[j - 1] / bet
        bet = diag[j] - sub[j] * gam[j]
        check_pivot(bet, scale, j, 'tridiagonal')
        u[j] = (u[j] - sub[j] * u[j - 1]) / bet

    # Back substitution
    for j in range(n - 2, -1, -1):
        u[j] -= gam[j + 1] * u[j + 1]

    return B
