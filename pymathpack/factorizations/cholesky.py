"""
Cholesky factorization of symmetric positive definite matrices
(LAPACK dpotrf / dpotrs).

Only the upper triangle of A is referenced.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from pymathpack.core.exceptions import (
    DimensionMismatchError,
    IllegalArgumentError,
    NotPositiveDefiniteError,
)
from pymathpack.factorizations._adapter import (
    rhs_to_fortran,
    run,
    to_fortran,
    to_row_major,
)
from pymathpack.primitives.matrices import MatrixBase, MatrixN
from pymathpack.primitives.procedures import matrix_view, rhs_view


def _factor(A: Any, routine: str) -> np.ndarray:
    a = matrix_view(A)
    if a.shape[0] != a.shape[1]:
        raise IllegalArgumentError(
            f"{routine}: matrix must be square, got {a.shape[0]} x {a.shape[1]}",
            routine=routine,
        )
    (c,), info = run('dpotrf', to_fortran(a), lower=0, clean=1)
    if info > 0:
        raise NotPositiveDefiniteError(
            f"{routine}: leading minor of order {info} is not positive definite",
            matrix_name='A',
            minor_order=info,
            routine='dpotrf',
            info=info,
        )
    return c


def cholesky_decompose(A: Any):
    """
    Factor A = U^T U with U upper triangular.

    Returns:
        U, a new matrix of A's type (MatrixN for array input); entries
        below the diagonal are zero

    Raises:
        IllegalArgumentError: If A is not square or LAPACK rejects it
        NotPositiveDefiniteError: If A is not positive definite
    """
    u = to_row_major(_factor(A, 'cholesky_decompose'))
    if isinstance(A, MatrixBase):
        return A._new(u)
    return MatrixN._new(u)


def cholesky_solve(A: Any, B: Any) -> Any:
    """
    Solve A X = B for SPD A; B (vector or matrix) is overwritten with X.

    Returns:
        B

    Raises:
        NotPositiveDefiniteError: If A is not positive definite
    """
    c = _factor(A, 'cholesky_solve')
    b = rhs_view(B)
    if b.shape[0] != c.shape[0]:
        raise DimensionMismatchError(
            f"cholesky_solve: right-hand side has {b.shape[0]} rows, "
            f"system order is {c.shape[0]}",
            expected=(c.shape[0],),
            actual=(b.shape[0],),
        )
    (x,), _ = run('dpotrs', c, rhs_to_fortran(b), lower=0)
    b[:] = to_row_major(x)
    return B
