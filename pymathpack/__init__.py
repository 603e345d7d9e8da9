"""
PyMathPack: dense linear algebra and geometry primitives for Python.

Fixed- and variable-dimension vector/matrix value types, quaternions and
the direct solvers and factorizations needed for coordinate transforms,
rotation handling and least-squares fitting.

Submodules:
    core: Exceptions, validation, constants and tolerance tiers
    primitives: Vectors, matrices, quaternions and matrix procedures
    solvers: Tridiagonal, Gauss-Jordan, Gaussian elimination, least
        squares and polynomial roots
    factorizations: LU, Cholesky, symmetric eigen, QR, RQ and SVD
"""

__version__ = "0.1.0"

from pymathpack import core
from pymathpack import primitives
from pymathpack import solvers
from pymathpack import factorizations

__all__ = [
    "__version__",
    "core",
    "primitives",
    "solvers",
    "factorizations",
]
