"""
Direct solvers for dense linear systems and low-order polynomials.

    tridiagonal        O(N) band solver, no pivoting
    gauss_jordan       full pivoting, A replaced by its inverse
    gauss_elimination  partial pivoting, A replaced by its inverse
    lls, lls_qr        linear least squares (normal equations / QR)
    solve_quadratic    real roots of a quadratic
    solve_cubic        real roots of a cubic

Exactly zero pivots raise SingularMatrixError. Pivots that are non-zero
but negligible relative to the largest input coefficient emit a
RuntimeWarning.
"""

from pymathpack.solvers._band import tridiagonal
from pymathpack.solvers._gauss import gauss_jordan, gauss_elimination
from pymathpack.solvers._lls import lls, lls_qr
from pymathpack.solvers._poly import solve_quadratic, solve_cubic

__all__ = [
    "tridiagonal",
    "gauss_jordan",
    "gauss_elimination",
    "lls",
    "lls_qr",
    "solve_quadratic",
    "solve_cubic",
]
