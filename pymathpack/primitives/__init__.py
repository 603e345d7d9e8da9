"""
Vector, matrix and quaternion value types.

Fixed-size: Vector2, Vector3, Vector4, Matrix3, Matrix4.
Dynamic:    VectorN, MatrixN.
Rotation:   Quaternion, plus the matrix <-> quaternion conversions.

The generic procedures (get_diag, set_row, swap_cols, ...) work on any of
the matrix types and on 2-D float64 numpy arrays.
"""

from pymathpack.primitives.vectors import (
    Vector2,
    Vector3,
    Vector4,
    VectorN,
    Point2,
    Point3,
    Point4,
    PointN,
    VectorBase,
    normalized,
    dot,
    cross,
)
from pymathpack.primitives.matrices import (
    Matrix3,
    Matrix4,
    MatrixN,
    MatrixBase,
    det,
    inverse,
    outer_product,
    copy_matrix,
    matrix_multiply,
    euler_angles,
)
from pymathpack.primitives.quaternion import (
    Quaternion,
    matrix_to_quaternion,
    quaternion_to_matrix,
    distance,
    slerp,
    rotate,
)
from pymathpack.primitives.procedures import (
    get_diag,
    set_diag,
    get_row,
    set_row,
    get_col,
    set_col,
    swap_rows,
    swap_cols,
)

__all__ = [
    # Vectors
    "Vector2",
    "Vector3",
    "Vector4",
    "VectorN",
    "Point2",
    "Point3",
    "Point4",
    "PointN",
    "VectorBase",
    "normalized",
    "dot",
    "cross",
    # Matrices
    "Matrix3",
    "Matrix4",
    "MatrixN",
    "MatrixBase",
    "det",
    "inverse",
    "outer_product",
    "copy_matrix",
    "matrix_multiply",
    "euler_angles",
    # Quaternion
    "Quaternion",
    "matrix_to_quaternion",
    "quaternion_to_matrix",
    "distance",
    "slerp",
    "rotate",
    # Procedures
    "get_diag",
    "set_diag",
    "get_row",
    "set_row",
    "get_col",
    "set_col",
    "swap_rows",
    "swap_cols",
]
