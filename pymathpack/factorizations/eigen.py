"""
Symmetric eigendecomposition (LAPACK dsyev).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pymathpack.core.exceptions import ConvergenceFailureError
from pymathpack.core.validation import check_square
from pymathpack.factorizations._adapter import query_lwork, run, to_fortran, to_row_major
from pymathpack.primitives.matrices import MatrixN
from pymathpack.primitives.procedures import matrix_view
from pymathpack.primitives.vectors import VectorN


@dataclass(frozen=True)
class EigenResult:
    """
    Eigenvalues and eigenvectors of a symmetric matrix.

    Attributes:
        W: Eigenvalues in ascending order
        V: Orthonormal eigenvectors; column j belongs to W[j]
    """
    W: VectorN
    V: MatrixN


def eigenvalues(A: Any) -> EigenResult:
    """
    Eigendecomposition A = V diag(W) V^T of a symmetric matrix.

    Only the upper triangle of A is referenced; A is not modified.

    Raises:
        DimensionMismatchError: If A is not square
        ConvergenceFailureError: If the QR iteration fails to converge
    """
    a = matrix_view(A)
    n = a.shape[0]
    check_square(n, a.shape[1], 'eigenvalues')

    lwork = query_lwork('dsyev', n, lower=0)
    (w, v), info = run('dsyev', to_fortran(a), compute_v=1, lower=0, lwork=lwork)
    if info > 0:
        raise ConvergenceFailureError(
            f"eigenvalues: {info} off-diagonal elements of the intermediate "
            f"tridiagonal form did not converge to zero",
            routine='dsyev',
            info=info,
        )
    return EigenResult(W=VectorN._new(w.copy()), V=MatrixN._new(to_row_major(v)))
