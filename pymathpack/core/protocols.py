"""
Core protocols for PyMathPack.

These define the structural interfaces the generic matrix procedures
(pymathpack.primitives.procedures) are typed against; at runtime the
procedures resolve their arguments to raw float64 views.
We use Protocol (structural typing) rather than ABC (nominal typing) so that
every vector/matrix value type of the package qualifies without sharing a
base class.

Design Principles:
    - Minimal contracts: shape plus a live row-major view of the storage
    - Value types own their storage; `array` never hands out a copy
"""

from typing import Protocol, runtime_checkable

import numpy as np
from numpy.typing import NDArray


@runtime_checkable
class VectorLike(Protocol):
    """
    Anything with a length and a 1-D float64 view of its components.

    Implemented by Vector2, Vector3, Vector4 and VectorN.
    """

    @property
    def size(self) -> int:
        """Number of components."""
        ...

    @property
    def array(self) -> NDArray[np.float64]:
        """
        Live 1-D view of the components.

        Writing through the view mutates the vector.
        """
        ...


@runtime_checkable
class MatrixLike(Protocol):
    """
    Anything with a row/column shape and a 2-D row-major float64 view.

    Implemented by Matrix3, Matrix4 and MatrixN; vectors qualify as n x 1
    columns.
    """

    @property
    def rows(self) -> int:
        """Number of rows."""
        ...

    @property
    def cols(self) -> int:
        """Number of columns."""
        ...

    @property
    def array(self) -> NDArray[np.float64]:
        """
        Live (rows, cols) C-ordered view of the elements.

        Writing through the view mutates the matrix.
        """
        ...
