"""
LU decomposition with partial pivoting (LAPACK dgetrf / dgetrs).

After lu_decompose, A holds L and U together: U on and above the diagonal,
L below it with its unit diagonal implied. The pivot array records, for
each row i, the row it was exchanged with (0-based); the parity is +1 for
an even number of effective exchanges and -1 for an odd number, so that
det(A) = parity * prod(diag(U)).
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pymathpack.core.exceptions import DimensionMismatchError, SingularMatrixError
from pymathpack.core.validation import check_square
from pymathpack.factorizations._adapter import (
    rhs_to_fortran,
    run,
    to_fortran,
    to_row_major,
)
from pymathpack.primitives.procedures import matrix_view, rhs_view


@dataclass(frozen=True)
class LUResult:
    """
    Pivoting record of an LU decomposition.

    Attributes:
        pivots: Row i was interchanged with row pivots[i] (0-based)
        parity: +1 for an even number of interchanges, -1 for odd
    """
    pivots: NDArray[np.intc]
    parity: int


def _factor(a: NDArray[np.float64]) -> tuple[NDArray[np.float64], NDArray[np.intc], int, int]:
    (lu, piv), info = run('dgetrf', to_fortran(a))
    swaps = int(np.count_nonzero(piv != np.arange(piv.shape[0])))
    parity = -1 if swaps % 2 else 1
    return to_row_major(lu), piv, parity, info


def lu_decompose(A: Any) -> LUResult:
    """
    Factor the square matrix A = P L U in place.

    A matrix with an exactly zero diagonal element of U still factors
    (as LAPACK does); a RuntimeWarning is emitted and any later solve
    with the factors raises SingularMatrixError.

    Returns:
        LUResult(pivots, parity)

    Raises:
        DimensionMismatchError: If A is not square
    """
    a = matrix_view(A)
    check_square(a.shape[0], a.shape[1], 'lu_decompose')
    lu, piv, parity, info = _factor(a)
    a[:] = lu
    if info > 0:
        warnings.warn(
            f"lu_decompose: U[{info - 1}, {info - 1}] is exactly zero; "
            f"the matrix is singular and cannot be used to solve",
            RuntimeWarning,
            stacklevel=2,
        )
    return LUResult(pivots=piv.copy(), parity=parity)


def lu_back_substitute(A: Any, pivots: NDArray[np.intc], B: Any) -> Any:
    """
    Solve A X = B from the factors produced by lu_decompose.

    Args:
        A: The decomposed matrix (L\\U)
        pivots: LUResult.pivots of the same decomposition
        B: Right-hand side (vector or matrix), overwritten with X

    Returns:
        B

    Raises:
        SingularMatrixError: If U has an exactly zero diagonal element
    """
    a = matrix_view(A)
    n = a.shape[0]
    check_square(n, a.shape[1], 'lu_back_substitute')
    b = rhs_view(B)
    if b.shape[0] != n:
        raise DimensionMismatchError(
            f"lu_back_substitute: right-hand side has {b.shape[0]} rows, "
            f"system order is {n}",
            expected=(n,),
            actual=(b.shape[0],),
        )
    zero = np.flatnonzero(np.diag(a) == 0.0)
    if zero.size:
        raise SingularMatrixError(
            f"lu_back_substitute: U[{zero[0]}, {zero[0]}] is zero, matrix is singular",
            matrix_name='A',
            pivot_index=int(zero[0]),
            routine='dgetrs',
        )

    (x,), _ = run(
        'dgetrs', to_fortran(a), np.asarray(pivots, dtype=np.intc), rhs_to_fortran(b)
    )
    b[:] = to_row_major(x)
    return B


def lu_determinant(A: Any) -> float:
    """Determinant of A via LU factorization of a copy."""
    a = matrix_view(A)
    check_square(a.shape[0], a.shape[1], 'lu_determinant')
    lu, _, parity, _ = _factor(a)
    return float(parity * np.prod(np.diag(lu)))
