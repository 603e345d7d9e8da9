"""
LAPACK calling adapter.

The only module that knows LAPACK is column-major. Row-major value types
are copied into Fortran-ordered float64 arrays immediately before a call
and results are copied back into row-major value types immediately after;
nothing outside this package's factorization adapters sees the difference.

Every scipy.linalg.lapack wrapper returns its outputs followed by an
integer `info`:

    info == 0   success
    info < 0    argument -info had an illegal value  -> IllegalArgumentError
    info > 0    routine-specific numerical failure   -> left to the caller

Routines that need scratch space are called twice: once as a workspace
query (lwork=-1, or the matching *_lwork routine) and once with the
optimal size.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import lapack

from pymathpack.core.exceptions import IllegalArgumentError
from pymathpack.primitives.procedures import matrix_view


def to_fortran(A: Any, name: str = 'A') -> NDArray[np.float64]:
    """Column-major float64 copy of a matrix."""
    return np.array(matrix_view(A, name), dtype=np.float64, order='F')


def rhs_to_fortran(b: NDArray[np.float64]) -> NDArray[np.float64]:
    """Column-major 2-D copy of a right-hand side (1-D becomes N x 1)."""
    return np.array(b.reshape(b.shape[0], -1), dtype=np.float64, order='F')


def to_row_major(a: NDArray[np.float64]) -> NDArray[np.float64]:
    """Row-major copy of a LAPACK result."""
    return np.ascontiguousarray(a, dtype=np.float64)


def get_routine(name: str):
    return getattr(lapack, name)


def check_info(name: str, info: int) -> int:
    """
    Raise for illegal arguments; hand positive codes back to the caller.

    Raises:
        IllegalArgumentError: If info < 0
    """
    info = int(info)
    if info < 0:
        raise IllegalArgumentError(
            f"{name}: argument {-info} had an illegal value",
            routine=name,
            info=info,
        )
    return info


def run(name: str, *args: Any, **kwargs: Any) -> tuple[tuple[Any, ...], int]:
    """
    Call a LAPACK routine and split off its info code.

    Returns:
        (outputs, info) with info >= 0
    """
    *outputs, info = get_routine(name)(*args, **kwargs)
    return tuple(outputs), check_info(name, info)


def query_lwork(name: str, *args: Any, **kwargs: Any) -> int:
    """
    Optimal workspace size from a *_lwork query routine.
    """
    work, info = get_routine(name + '_lwork')(*args, **kwargs)
    check_info(name + '_lwork', info)
    return max(int(np.real(work)), 1)


def run_with_workspace(name: str, *args: Any, **kwargs: Any) -> tuple[tuple[Any, ...], int]:
    """
    Workspace query followed by the real call.

    For routines whose outputs end in (..., work, info): the first call
    with lwork=-1 only reports the optimal size in work[0]. The returned
    outputs exclude the work array.
    """
    routine = get_routine(name)
    *_, work, info = routine(*args, lwork=-1, **kwargs)
    check_info(name, info)
    lwork = max(int(np.real(work[0])), 1)
    *outputs, _, info = routine(*args, lwork=lwork, **kwargs)
    return tuple(outputs), check_info(name, info)
