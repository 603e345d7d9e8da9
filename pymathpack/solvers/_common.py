"""
Shared plumbing for the direct solvers.

Right-hand sides may be vectors (one system) or matrices (one system per
column); the eliminators see both as a 2-D working view.
"""

from __future__ import annotations

import warnings
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pymathpack.core.constants import PIVOT_WARNING_RTOL
from pymathpack.core.exceptions import (
    DimensionMismatchError,
    SingularMatrixError,
)
from pymathpack.primitives.procedures import rhs_view


def prepare_output(B: Any, X: Any, n: int, routine: str) -> tuple[Any, NDArray[np.float64]]:
    """
    Validate B against the system order n and load it into X.

    When X is None it becomes a copy of B. B itself is never written.

    Returns:
        (X, live 2-D view of X)
    """
    b = rhs_view(B)
    if b.shape[0] != n:
        raise DimensionMismatchError(
            f"{routine}: right-hand side has {b.shape[0]} rows, system order is {n}",
            expected=(n,),
            actual=(b.shape[0],),
        )
    if X is None:
        X = B.copy()
        return X, rhs_view(X, 'X')

    x = rhs_view(X, 'X')
    if x.shape != b.shape:
        raise DimensionMismatchError(
            f"{routine}: output X has shape {x.shape}, right-hand side has {b.shape}",
            expected=b.shape,
            actual=x.shape,
        )
    x[:] = b
    return X, x


def check_pivot(pivot: float, scale: float, index: int, routine: str) -> None:
    """
    Fail on an exactly zero pivot, warn on a tiny one.

    Args:
        pivot: The pivot element about to be divided by
        scale: Largest absolute coefficient of the input matrix
        index: Elimination step (row/column of the pivot)
        routine: Name reported in the diagnostics

    Raises:
        SingularMatrixError: If pivot == 0
    """
    if pivot == 0.0:
        raise SingularMatrixError(
            f"{routine}: zero pivot at step {index}, matrix is singular",
            matrix_name='A',
            pivot_index=index,
            routine=routine,
        )
    if abs(pivot) < PIVOT_WARNING_RTOL * scale:
        warnings.warn(
            f"{routine}: pivot {pivot:.3e} at step {index} is tiny relative to "
            f"the largest coefficient {scale:.3e}; matrix is nearly singular "
            f"and the result may be dominated by round-off",
            RuntimeWarning,
            stacklevel=3,
        )
