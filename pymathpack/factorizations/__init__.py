"""
Dense matrix factorizations backed by LAPACK (scipy.linalg.lapack).

All public functions take and return row-major value types; the
column-major conversion happens inside the adapter layer.
"""

from pymathpack.factorizations.lu import (
    LUResult,
    lu_decompose,
    lu_back_substitute,
    lu_determinant,
)
from pymathpack.factorizations.cholesky import cholesky_decompose, cholesky_solve
from pymathpack.factorizations.eigen import EigenResult, eigenvalues
from pymathpack.factorizations.qr import QRResult, RQResult, qr_decompose, rq_decompose
from pymathpack.factorizations.svd import SVDResult, svd

__all__ = [
    # LU
    "LUResult",
    "lu_decompose",
    "lu_back_substitute",
    "lu_determinant",
    # Cholesky
    "cholesky_decompose",
    "cholesky_solve",
    # Eigen
    "EigenResult",
    "eigenvalues",
    # QR / RQ
    "QRResult",
    "RQResult",
    "qr_decompose",
    "rq_decompose",
    # SVD
    "SVDResult",
    "svd",
]
