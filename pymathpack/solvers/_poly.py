"""
Real roots of quadratic and cubic polynomials.

Coefficients are given in ascending order of power, e.g. for the cubic
c[0] + c[1] x + c[2] x^2 + c[3] x^3. Closed-form solutions after
"Solving Quartics and Cubics for Graphics" (Schwarze, Graphics Gems I):
the cubic is reduced to the depressed form y^3 + 3 p y + 2 q = 0 and
solved by Cardano's formula or, with three real roots, trigonometrically.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pymathpack.core.constants import EQUATION_EPSILON
from pymathpack.core.exceptions import IllegalArgumentError, ValidationError
from pymathpack.core.validation import check_array, check_finite, check_size
from pymathpack.primitives.vectors import VectorN


def _is_zero(value: float) -> bool:
    return -EQUATION_EPSILON < value < EQUATION_EPSILON


def _coefficients(c: Any, size: int, routine: str) -> NDArray[np.float64]:
    data = check_array(c, routine).ravel()
    check_size(data, size, routine)
    check_finite(data, routine)
    if not np.any(data):
        raise IllegalArgumentError(
            f"{routine}: every coefficient is zero, the roots are undefined",
            routine=routine,
        )
    return data


def _store(values: list[float], roots: VectorN | None) -> VectorN:
    found = np.sort(np.asarray(values, dtype=np.float64))
    if roots is None:
        return VectorN._new(found)
    if not isinstance(roots, VectorN):
        raise ValidationError(
            f"roots: expected a VectorN, got {type(roots).__name__}"
        )
    # Zero real roots leave an empty vector, so bypass reserve()
    roots._data = found
    return roots


def _quadratic(c0: float, c1: float, c2: float) -> list[float]:
    if _is_zero(c2):
        if _is_zero(c1):
            return []
        return [-c0 / c1]

    # Normal form x^2 + 2 p x + q = 0
    p = c1 / (2.0 * c2)
    q = c0 / c2
    D = p * p - q
    if _is_zero(D):
        return [-p]
    if D < 0.0:
        return []
    sqrt_D = float(np.sqrt(D))
    return [sqrt_D - p, -sqrt_D - p]


def solve_quadratic(c: Any, roots: VectorN | None = None) -> VectorN:
    """
    Real roots of c[0] + c[1] x + c[2] x^2.

    A vanishing x^2 coefficient degrades to the linear equation. A double
    root is reported once.

    Args:
        c: Three coefficients, ascending powers
        roots: Optional VectorN receiving the roots (resized to fit)

    Returns:
        VectorN with 0, 1 or 2 roots in ascending order

    Raises:
        IllegalArgumentError: If every coefficient is zero
    """
    data = _coefficients(c, 3, 'solve_quadratic')
    return _store(_quadratic(data[0], data[1], data[2]), roots)


def solve_cubic(c: Any, roots: VectorN | None = None) -> VectorN:
    """
    Real roots of c[0] + c[1] x + c[2] x^2 + c[3] x^3.

    A vanishing x^3 coefficient degrades to solve_quadratic.

    Returns:
        VectorN with 0 to 3 roots in ascending order

    Raises:
        IllegalArgumentError: If every coefficient is zero
    """
    data = _coefficients(c, 4, 'solve_cubic')
    if _is_zero(data[3]):
        return _store(_quadratic(data[0], data[1], data[2]), roots)

    # Normal form x^3 + A x^2 + B x + C = 0
    A = data[2] / data[3]
    B = data[1] / data[3]
    C = data[0] / data[3]

    # Substitute x = y - A/3 to eliminate the quadric term
    sq_A = A * A
    p = (-sq_A / 3.0 + B) / 3.0
    q = (2.0 / 27.0 * A * sq_A - A * B / 3.0 + C) / 2.0

    cb_p = p * p * p
    D = q * q + cb_p

    if _is_zero(D):
        if _is_zero(q):
            s = [0.0]
        else:
            u = float(np.cbrt(-q))
            s = [2.0 * u, -u]
    elif D < 0.0:
        # Casus irreducibilis: three real roots
        phi = float(np.arccos(np.clip(-q / np.sqrt(-cb_p), -1.0, 1.0))) / 3.0
        t = 2.0 * float(np.sqrt(-p))
        s = [
            t * np.cos(phi),
            -t * np.cos(phi + np.pi / 3.0),
            -t * np.cos(phi - np.pi / 3.0),
        ]
    else:
        sqrt_D = float(np.sqrt(D))
        u = float(np.cbrt(sqrt_D - q))
        v = -float(np.cbrt(sqrt_D + q))
        s = [u + v]

    sub = A / 3.0
    return _store([float(root) - sub for root in s], roots)
