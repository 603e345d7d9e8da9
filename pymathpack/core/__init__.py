"""
Core infrastructure for PyMathPack.

This module provides shared abstractions and utilities used by the value
types, the direct solvers and the factorization adapters.

Key components:
    protocols: VectorLike, MatrixLike structural interfaces
    exceptions: Exception hierarchy
    validation: Input validators
    constants: Numerical constants and display settings
    tolerances: Tolerance tiers for numerical comparison
"""

from pymathpack.core.protocols import VectorLike, MatrixLike
from pymathpack.core.exceptions import (
    MathPackError,
    ValidationError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    IllegalArgumentError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    DegenerateVectorError,
    ConvergenceFailureError,
)

__all__ = [
    # Protocols
    "VectorLike",
    "MatrixLike",
    # Exceptions
    "MathPackError",
    "ValidationError",
    "DimensionMismatchError",
    "IndexOutOfRangeError",
    "IllegalArgumentError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "DegenerateVectorError",
    "ConvergenceFailureError",
]
