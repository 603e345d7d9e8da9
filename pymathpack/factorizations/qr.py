"""
QR and RQ decompositions (LAPACK dgeqrf/dorgqr and dgerqf/dorgrq).

Both factorizations leave their input untouched and return new MatrixN
factors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from pymathpack.core.exceptions import DimensionMismatchError
from pymathpack.factorizations._adapter import run_with_workspace, to_fortran, to_row_major
from pymathpack.primitives.matrices import MatrixN


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition A = Q R.

    Attributes:
        Q: M x N matrix with orthonormal columns
        R: N x N upper triangular matrix
        rank: Numerical rank determined from the R diagonal
    """
    Q: MatrixN
    R: MatrixN
    rank: int


@dataclass(frozen=True)
class RQResult:
    """
    Result of RQ decomposition A = R Q.

    Attributes:
        R: Upper triangular (M <= N: M x M) or upper trapezoidal
           (M > N: M x N) factor
        Q: Orthonormal rows (M <= N: M x N) or orthogonal (M > N: N x N)
    """
    R: MatrixN
    Q: MatrixN


def _numerical_rank(r: np.ndarray, shape: tuple[int, int]) -> int:
    diag_R = np.abs(np.diag(r))
    if len(diag_R) > 0 and diag_R.max() > 0:
        tol = max(shape) * np.finfo(np.float64).eps * diag_R.max()
        return int(np.sum(diag_R > tol))
    return 0


def qr_decompose(A: Any) -> QRResult:
    """
    Thin QR decomposition of an M x N matrix with M >= N.

    Returns:
        QRResult with Q (M x N), R (N x N) and the numerical rank

    Raises:
        DimensionMismatchError: If M < N
    """
    a = to_fortran(A)
    m, n = a.shape
    if m < n:
        raise DimensionMismatchError(
            f"qr_decompose: requires rows >= cols, got {m} x {n}",
            expected=(n, n),
            actual=(m, n),
        )

    (qr, tau), _ = run_with_workspace('dgeqrf', a)
    R = np.triu(qr[:n, :n])
    (q,), _ = run_with_workspace('dorgqr', qr, tau)

    return QRResult(
        Q=MatrixN._new(to_row_major(q)),
        R=MatrixN._new(to_row_major(R)),
        rank=_numerical_rank(R, (m, n)),
    )


def rq_decompose(A: Any) -> RQResult:
    """
    RQ decomposition of an M x N matrix.

    dgerqf stores R in the last min(M, N) columns (M <= N) or on and above
    the (N - M)-th diagonal (M > N); the remaining entries hold the
    elementary reflectors from which dorgrq builds Q.

    Returns:
        RQResult with R and Q
    """
    a = to_fortran(A)
    m, n = a.shape
    (rq, tau), _ = run_with_workspace('dgerqf', a)

    if m <= n:
        R = np.triu(rq[:, n - m:])
        (q,), _ = run_with_workspace('dorgrq', rq, tau)
    else:
        R = np.triu(rq, n - m)
        (q,), _ = run_with_workspace('dorgrq', np.asfortranarray(rq[m - n:, :]), tau)

    return RQResult(
        R=MatrixN._new(to_row_major(R)),
        Q=MatrixN._new(to_row_major(q)),
    )
