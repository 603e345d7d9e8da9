"""
Singular value decomposition (LAPACK dgesvd).

A = U diag(S) V^T. The factor returned is Vt (V transposed), as LAPACK
produces it, so reconstruction is U @ diag(S) @ Vt.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

import numpy as np

from pymathpack.core.exceptions import (
    ConvergenceFailureError,
    DimensionMismatchError,
    ValidationError,
)
from pymathpack.factorizations._adapter import query_lwork, run, to_fortran, to_row_major
from pymathpack.primitives.matrices import MatrixN
from pymathpack.primitives.vectors import VectorN


@dataclass(frozen=True)
class SVDResult:
    """
    Result of singular value decomposition.

    Attributes:
        U: Left singular vectors (M x M, or M x N in economy mode)
        S: Singular values, non-negative and non-increasing; a VectorN, or
           a diagonal MatrixN (M x N, or N x N in economy mode)
        Vt: Right singular vectors transposed (N x N)
    """
    U: MatrixN
    S: VectorN | MatrixN
    Vt: MatrixN


def svd(
    A: Any,
    economy: bool = False,
    singular_values: Literal['vector', 'matrix'] = 'vector',
) -> SVDResult:
    """
    Singular value decomposition of an M x N matrix.

    Args:
        A: Matrix to decompose (not modified)
        economy: Return the reduced U (M x N); requires M >= N
        singular_values: 'vector' for a VectorN of min(M, N) values,
            'matrix' to embed them on the diagonal of a MatrixN shaped
            like diag(S) in the reconstruction

    Raises:
        DimensionMismatchError: If economy is requested with M < N
        ConvergenceFailureError: If the bidiagonal QR iteration fails
    """
    if singular_values not in ('vector', 'matrix'):
        raise ValidationError(
            f"svd: singular_values must be 'vector' or 'matrix', got {singular_values!r}"
        )
    a = to_fortran(A)
    m, n = a.shape
    if economy and m < n:
        raise DimensionMismatchError(
            f"svd: economy mode requires rows >= cols, got {m} x {n}",
            expected=(n, n),
            actual=(m, n),
        )

    full = 0 if economy else 1
    lwork = query_lwork('dgesvd', m, n, compute_uv=1, full_matrices=full)
    (u, s, vt), info = run(
        'dgesvd', a, compute_uv=1, full_matrices=full, lwork=lwork, overwrite_a=1
    )
    if info > 0:
        raise ConvergenceFailureError(
            f"svd: {info} superdiagonals of the intermediate bidiagonal form "
            f"did not converge to zero",
            routine='dgesvd',
            info=info,
        )

    if singular_values == 'matrix':
        rows = n if economy else m
        S = np.zeros((rows, n), dtype=np.float64)
        k = s.shape[0]
        S[np.arange(k), np.arange(k)] = s
        S_out = MatrixN._new(S)
    else:
        S_out = VectorN._new(s.copy())

    return SVDResult(
        U=MatrixN._new(to_row_major(u)),
        S=S_out,
        Vt=MatrixN._new(to_row_major(vt)),
    )
