"""
Exception hierarchy for PyMathPack.

All exceptions inherit from MathPackError to allow catching any
library-specific error. Numerical failures (singular systems, indefinite
matrices, degenerate vectors) derive from NumericalError; contract
violations at the API boundary (bad shapes, bad indices, malformed
arguments) derive from ValidationError.

Each exception keeps its diagnostics (shapes, indices, pivot position,
LAPACK routine and info code) as attributes next to the message.
"""


class MathPackError(Exception):
    """Base exception for all PyMathPack errors."""
    pass


class ValidationError(MathPackError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionMismatchError(ValidationError):
    """
    Operand dimensions are incorrect or inconsistent.

    Raised when vector/matrix shapes are incompatible for an arithmetic
    operation, a solver, or a factorization.

    Attributes:
        expected: Expected shape, if known
        actual: Actual shape, if known
    """

    def __init__(
        self,
        message: str,
        expected: tuple[int, ...] | None = None,
        actual: tuple[int, ...] | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class IndexOutOfRangeError(ValidationError, IndexError):
    """
    Element, row, column or diagonal index is out of range.

    This is a programmer error (a violated access contract), not a
    data-dependent condition. It is also an IndexError so that generic
    Python code treats it as such.

    Attributes:
        index: The offending index
        bound: Exclusive upper bound that was violated
    """

    def __init__(
        self,
        message: str,
        index: int | tuple[int, ...] | None = None,
        bound: int | tuple[int, ...] | None = None,
    ):
        super().__init__(message)
        self.index = index
        self.bound = bound


class IllegalArgumentError(ValidationError, ValueError):
    """
    Malformed argument passed to a routine.

    Raised for arguments that are structurally wrong for the routine
    (e.g. LAPACK reports a negative info code, or a polynomial has no
    non-zero coefficient).

    Attributes:
        routine: Name of the routine that rejected the argument
        info: LAPACK info code, if the rejection came from LAPACK
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        info: int | None = None,
    ):
        super().__init__(message)
        self.routine = routine
        self.info = info


class NumericalError(MathPackError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular.

    Raised when a solver or factorization requires invertibility but a
    pivot is exactly zero.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Elimination step at which the zero pivot was found
        routine: Name of the routine that detected the singularity
        info: LAPACK info code, if detected by LAPACK
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        routine: str | None = None,
        info: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.routine = routine
        self.info = info


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised when Cholesky factorization fails because a leading minor is
    not positive definite.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        minor_order: Order of the leading minor that is not positive definite
        routine: Name of the LAPACK routine
        info: LAPACK info code
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        minor_order: int | None = None,
        routine: str | None = None,
        info: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.minor_order = minor_order
        self.routine = routine
        self.info = info


class DegenerateVectorError(NumericalError):
    """
    Vector (or quaternion, or matrix row) cannot be normalized.

    Raised when the norm is below EPSILON. The receiver is left unmodified.

    Attributes:
        norm: The offending norm
    """

    def __init__(self, message: str, norm: float | None = None):
        super().__init__(message)
        self.norm = norm


class ConvergenceFailureError(MathPackError):
    """
    Iterative kernel inside a factorization failed to converge.

    Raised when LAPACK's eigenvalue or SVD iteration reports a positive
    info code.

    Attributes:
        routine: Name of the LAPACK routine
        info: LAPACK info code (number of elements that did not converge)
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        info: int | None = None,
    ):
        super().__init__(message)
        self.routine = routine
        self.info = info
