"""
Linear least squares.

Given an M x N data matrix D (M >= N, full column rank) and right-hand
side B, find X minimizing ||D X - B||.

lls() solves the normal equations (D^T D) X = D^T B with Gauss-Jordan
elimination. It is fast and simple, but forming D^T D squares the
condition number of D, so roughly twice as many digits are lost as with an
orthogonal method. lls_qr() factors D = Q R and solves R X = Q^T B by back
substitution, which works with the condition number of D itself.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from scipy.linalg import solve_triangular

from pymathpack.core.exceptions import DimensionMismatchError, SingularMatrixError
from pymathpack.factorizations.qr import qr_decompose
from pymathpack.primitives.matrices import MatrixN
from pymathpack.primitives.procedures import matrix_view, rhs_view
from pymathpack.primitives.vectors import VectorBase, VectorN
from pymathpack.solvers._gauss import gauss_jordan


def _wrap_like(B: Any, data: np.ndarray) -> Any:
    if isinstance(B, VectorBase) or (isinstance(B, np.ndarray) and B.ndim == 1):
        return VectorN._new(np.ascontiguousarray(data.ravel()))
    return MatrixN._new(np.ascontiguousarray(data))


def _check_rows(d: np.ndarray, b: np.ndarray, routine: str) -> None:
    if b.shape[0] != d.shape[0]:
        raise DimensionMismatchError(
            f"{routine}: D has {d.shape[0]} rows, right-hand side has {b.shape[0]}",
            expected=(d.shape[0],),
            actual=(b.shape[0],),
        )


def lls(D: Any, B: Any, X: Any = None) -> Any:
    """
    Least-squares solution through the normal equations.

    Args:
        D: M x N data matrix
        B: Right-hand side, vector of size M or M x K matrix
        X: Optional output (vector of size N or N x K matrix)

    Returns:
        X, holding the least-squares solution

    Raises:
        DimensionMismatchError: If D and B disagree on M
        SingularMatrixError: If D^T D is singular (D rank deficient)
    """
    d = matrix_view(D, 'D')
    b = rhs_view(B)
    _check_rows(d, b, 'lls')

    normal = MatrixN._new(d.T @ d)
    rhs = _wrap_like(B, d.T @ b)
    return gauss_jordan(normal, rhs, X)


def lls_qr(D: Any, B: Any) -> Any:
    """
    Least-squares solution through a QR factorization of D.

    Returns:
        VectorN of size N when B is a vector, otherwise an N x K MatrixN

    Raises:
        DimensionMismatchError: If M < N or D and B disagree on M
        SingularMatrixError: If R has a negligible diagonal element
    """
    d = matrix_view(D, 'D')
    b = rhs_view(B)
    _check_rows(d, b, 'lls_qr')

    result = qr_decompose(D)
    r = result.R.array
    n = d.shape[1]
    if result.rank < n:
        raise SingularMatrixError(
            f"lls_qr: D is rank deficient (numerical rank {result.rank} < {n} columns)",
            matrix_name='D',
            routine='lls_qr',
        )

    qtb = result.Q.array.T @ b
    return _wrap_like(B, solve_triangular(r, qtb, lower=False))
