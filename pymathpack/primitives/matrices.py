"""
Matrix value types.

Matrix3 and Matrix4 are fixed-size square matrices; MatrixN is the
resizable M x N generalization. Storage is a private, C-ordered (row-major)
float64 buffer owned by the instance. `A[k]` addresses the k-th element in
row-major order, `A[i, j]` the element at row i, column j; both are
bounds-checked.

Matrix * vector follows the usual column-vector convention; u * A treats u
as a row vector. Matrix3 * Vector2 and Matrix4 * Vector3 apply the matrix
to the homogeneous point (x, y, 1) / (x, y, z, 1) and return the leading
components (affine transform, no perspective divide).
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pymathpack.core.constants import EPSILON, format_component
from pymathpack.core.exceptions import (
    DegenerateVectorError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    SingularMatrixError,
    ValidationError,
)
from pymathpack.core.validation import (
    check_array,
    check_index,
    check_ndim,
    check_positive_dims,
    check_square,
)
from pymathpack.primitives.vectors import (
    Vector2,
    Vector3,
    Vector4,
    VectorBase,
    VectorN,
    _is_scalar,
    _resized,
)


def _block(data: NDArray[np.float64], rows: int, cols: int) -> NDArray[np.float64]:
    """Top-left rows x cols block of `data`, zero-padded where it is smaller."""
    out = np.zeros((rows, cols), dtype=np.float64)
    r = min(rows, data.shape[0])
    c = min(cols, data.shape[1])
    out[:r, :c] = data[:r, :c]
    return out


class MatrixBase:
    """
    Shared behaviour of every matrix type.

    Subclasses decide construction and whether the shape is fixed
    (`DIM`) or dynamic (`DIM is None`).
    """

    __slots__ = ('_data',)

    DIM: int | None = None

    # Fixed matrices act on homogeneous points one dimension smaller
    _HOMOGENEOUS: bool = False

    _data: NDArray[np.float64]

    @classmethod
    def _new(cls, data: NDArray[np.float64]):
        """Wrap an already-validated (rows, cols) float64 buffer without copying."""
        obj = cls.__new__(cls)
        obj._data = data
        return obj

    @classmethod
    def _from_components(cls, args: tuple, name: str) -> NDArray[np.float64]:
        dim = cls.DIM
        if len(args) == 0:
            return np.zeros((dim, dim), dtype=np.float64)
        if len(args) == 1 and not _is_scalar(args[0]):
            data = check_array(args[0], name)
            if data.size != dim * dim or data.ndim not in (1, 2) or \
                    (data.ndim == 2 and data.shape != (dim, dim)):
                raise DimensionMismatchError(
                    f"{name}: expected {dim * dim} elements or a {dim} x {dim} array, "
                    f"got shape {data.shape}",
                    expected=(dim, dim),
                    actual=data.shape,
                )
            return data.reshape(dim, dim).copy()
        if len(args) == dim * dim and all(_is_scalar(a) for a in args):
            return np.array(args, dtype=np.float64).reshape(dim, dim)
        raise DimensionMismatchError(
            f"{name}: expected 0, 1 (array) or {dim * dim} (component) arguments, "
            f"got {len(args)}",
            expected=(dim * dim,),
            actual=(len(args),),
        )

    # ------------------------------------------------------------------
    # Shape

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self._data.shape[1]

    @property
    def size(self) -> int:
        """Number of elements."""
        return self._data.size

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape

    @property
    def array(self) -> NDArray[np.float64]:
        """Live (rows, cols) row-major view of the elements."""
        return self._data

    def to_numpy(self) -> NDArray[np.float64]:
        """Detached (rows, cols) copy of the elements."""
        return self._data.copy()

    def __array__(self, dtype=None, copy=None):
        return np.array(self._data, dtype=dtype)

    # numpy operands on the left defer to the reflected operators
    __array_ufunc__ = None

    # ------------------------------------------------------------------
    # Norms and in-place methods

    def norm2(self) -> float:
        """Squared Frobenius norm."""
        return float(np.sum(self._data * self._data))

    def norm(self) -> float:
        """Frobenius norm."""
        return float(np.sqrt(self.norm2()))

    def transpose(self):
        """Transposed copy. The receiver is not modified."""
        return self._new(np.ascontiguousarray(self._data.T))

    def clear(self):
        """Set every element to zero. Returns self."""
        self._data[:] = 0.0
        return self

    def identity(self):
        """
        Overwrite with the identity matrix. Returns self.

        Raises:
            DimensionMismatchError: If the matrix is not square
        """
        check_square(self.rows, self.cols, type(self).__name__)
        self._data[:] = 0.0
        np.fill_diagonal(self._data, 1.0)
        return self

    def copy(self):
        """Deep copy."""
        return self._new(self._data.copy())

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    # ------------------------------------------------------------------
    # Element access

    def __getitem__(self, key: int | tuple[int, int]) -> float:
        if isinstance(key, tuple):
            i, j = self._check_key(key)
            return float(self._data[i, j])
        k = check_index(key, self.size, type(self).__name__)
        return float(self._data.flat[k])

    def __setitem__(self, key: int | tuple[int, int], value: float) -> None:
        if isinstance(key, tuple):
            i, j = self._check_key(key)
            self._data[i, j] = value
            return
        k = check_index(key, self.size, type(self).__name__)
        self._data.flat[k] = value

    def _check_key(self, key: tuple) -> tuple[int, int]:
        name = type(self).__name__
        if len(key) != 2:
            raise IndexOutOfRangeError(
                f"{name}: expected a (row, col) index, got {len(key)} indices",
                index=key,
            )
        i = check_index(key[0], self.rows, f"{name} row")
        j = check_index(key[1], self.cols, f"{name} col")
        return i, j

    # ------------------------------------------------------------------
    # Arithmetic

    def _operand(self, other: Any) -> NDArray[np.float64] | None:
        if not isinstance(other, MatrixBase):
            return None
        if other.shape != self.shape:
            raise DimensionMismatchError(
                f"{type(self).__name__}{self.shape} and "
                f"{type(other).__name__}{other.shape} differ in shape",
                expected=self.shape,
                actual=other.shape,
            )
        return other._data

    def _product_type(self, other: MatrixBase):
        if type(self) is type(other) and self.DIM is not None:
            return type(self)
        return MatrixN

    def _matmul(self, other: MatrixBase) -> MatrixBase:
        if self.cols != other.rows:
            raise DimensionMismatchError(
                f"cannot multiply {self.rows} x {self.cols} by {other.rows} x {other.cols}",
                expected=(self.cols, other.cols),
                actual=other.shape,
            )
        return self._product_type(other)._new(self._data @ other._data)

    def _vector_type(self, u: VectorBase):
        if self.DIM is None or type(u) is VectorN:
            return VectorN
        return type(u)

    def _postmultiply(self, u: VectorBase) -> VectorBase:
        """A * u with u a column vector."""
        n = u.size
        if n == self.cols:
            return self._vector_type(u)._new(self._data @ u._data)
        if self._HOMOGENEOUS and n == self.cols - 1 and type(u) is not VectorN:
            h = np.append(u._data, 1.0)
            return type(u)._new((self._data @ h)[:n])
        raise DimensionMismatchError(
            f"cannot multiply {self.rows} x {self.cols} {type(self).__name__} "
            f"by {type(u).__name__} of size {n}",
            expected=(self.cols,),
            actual=(n,),
        )

    def _premultiply(self, u: VectorBase) -> VectorBase:
        """u * A with u a row vector."""
        n = u.size
        if n == self.rows:
            return self._vector_type(u)._new(u._data @ self._data)
        if self._HOMOGENEOUS and n == self.rows - 1 and type(u) is not VectorN:
            h = np.append(u._data, 1.0)
            return type(u)._new((h @ self._data)[:n])
        raise DimensionMismatchError(
            f"cannot multiply {type(u).__name__} of size {n} "
            f"by {self.rows} x {self.cols} {type(self).__name__}",
            expected=(self.rows,),
            actual=(n,),
        )

    def __add__(self, other):
        o = self._operand(other)
        if o is None:
            return NotImplemented
        return self._new(self._data + o)

    def __sub__(self, other):
        o = self._operand(other)
        if o is None:
            return NotImplemented
        return self._new(self._data - o)

    def __neg__(self):
        return self._new(-self._data)

    def __mul__(self, other):
        if _is_scalar(other):
            return self._new(self._data * float(other))
        if isinstance(other, MatrixBase):
            return self._matmul(other)
        if isinstance(other, VectorBase):
            return self._postmultiply(other)
        return NotImplemented

    def __rmul__(self, other):
        if _is_scalar(other):
            return self._new(float(other) * self._data)
        if isinstance(other, VectorBase):
            return self._premultiply(other)
        return NotImplemented

    def __matmul__(self, other):
        if isinstance(other, MatrixBase):
            return self._matmul(other)
        if isinstance(other, VectorBase):
            return self._postmultiply(other)
        return NotImplemented

    def __rmatmul__(self, other):
        if isinstance(other, VectorBase):
            return self._premultiply(other)
        return NotImplemented

    def __truediv__(self, k):
        if not _is_scalar(k):
            return NotImplemented
        return self._new(self._data / float(k))

    def __iadd__(self, other):
        o = self._operand(other)
        if o is None:
            return NotImplemented
        self._data += o
        return self

    def __isub__(self, other):
        o = self._operand(other)
        if o is None:
            return NotImplemented
        self._data -= o
        return self

    def __imul__(self, other):
        if _is_scalar(other):
            self._data *= float(other)
            return self
        if isinstance(other, MatrixBase):
            product = self._matmul(other)
            if product.shape != self.shape:
                self._data = product._data
            else:
                self._data[:] = product._data
            return self
        return NotImplemented

    def __itruediv__(self, k):
        if not _is_scalar(k):
            return NotImplemented
        self._data /= float(k)
        return self

    def __eq__(self, other):
        if not isinstance(other, MatrixBase):
            return NotImplemented
        return type(self) is type(other) and np.array_equal(self._data, other._data)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    # ------------------------------------------------------------------
    # Explicit casts

    def to_matrix_n(self) -> MatrixN:
        """Cast to a dynamic matrix of the same shape."""
        return MatrixN._new(self._data.copy())

    # ------------------------------------------------------------------
    # Output

    def __repr__(self) -> str:
        body = ', '.join(repr(float(x)) for x in self._data.flat)
        return f"{type(self).__name__}({body})"

    def __str__(self) -> str:
        lines = (
            '[' + ' '.join(format_component(x) for x in row) + ']'
            for row in self._data
        )
        return '\n'.join(lines)


class Matrix3(MatrixBase):
    """
    3x3 matrix of doubles.

    Matrix3() is the zero matrix; Matrix3(a00, a01, ..., a22) sets the nine
    elements in row-major order; Matrix3(seq) copies a 9-element or 3x3
    array-like (including another matrix).
    """

    __slots__ = ()
    DIM = 3
    _HOMOGENEOUS = True

    def __init__(self, *args):
        self._data = self._from_components(args, 'Matrix3')

    def to_matrix4(self) -> Matrix4:
        """
        Cast to 4x4 with the homogeneous extension.

        The 3x3 block is copied to the top-left corner, the last row and
        column are zero except for element [3, 3] which is 1.
        """
        data = _block(self._data, 4, 4)
        data[3, 3] = 1.0
        return Matrix4._new(data)


class Matrix4(MatrixBase):
    """
    4x4 matrix of doubles.

    Matrix4() is the zero matrix; Matrix4(a00, ..., a33) sets the sixteen
    elements in row-major order; Matrix4(seq) copies a 16-element or 4x4
    array-like.
    """

    __slots__ = ()
    DIM = 4
    _HOMOGENEOUS = True

    def __init__(self, *args):
        self._data = self._from_components(args, 'Matrix4')

    def to_matrix3(self) -> Matrix3:
        """Cast to 3x3 by dropping the last row and column."""
        return Matrix3._new(self._data[:3, :3].copy())


class MatrixN(MatrixBase):
    """
    M x N matrix of doubles that may be resized dynamically.

    Construction:
        MatrixN()                     empty 0 x 0 matrix until resize/reserve
        MatrixN(rows, cols)           zero matrix
        MatrixN(seq)                  copy of a 2-D array-like (or a matrix)
        MatrixN(seq, rows, cols)      rows*cols elements in row-major order
        MatrixN(a00, ..., a22)        nine components -> 3x3
        MatrixN(a00, ..., a33)        sixteen components -> 4x4
    """

    __slots__ = ()

    def __init__(self, *args):
        n_args = len(args)
        if n_args == 0:
            self._data = np.zeros((0, 0), dtype=np.float64)
        elif n_args == 2 and all(
            isinstance(a, (int, np.integer)) and not isinstance(a, (bool, np.bool_))
            for a in args
        ):
            check_positive_dims(*args, name='MatrixN')
            self._data = np.zeros((int(args[0]), int(args[1])), dtype=np.float64)
        elif n_args == 1:
            data = check_array(args[0], 'MatrixN')
            check_ndim(data, 2, 'MatrixN')
            self._data = np.ascontiguousarray(data).copy()
        elif n_args == 3 and not _is_scalar(args[0]):
            rows, cols = args[1], args[2]
            check_positive_dims(rows, cols, name='MatrixN')
            data = check_array(args[0], 'MatrixN').ravel()
            if data.size != rows * cols:
                raise DimensionMismatchError(
                    f"MatrixN: expected {rows * cols} elements for a {rows} x {cols} "
                    f"matrix, got {data.size}",
                    expected=(rows, cols),
                    actual=(data.size,),
                )
            self._data = data.reshape(int(rows), int(cols)).copy()
        elif n_args in (9, 16) and all(_is_scalar(a) for a in args):
            dim = 3 if n_args == 9 else 4
            self._data = np.array(args, dtype=np.float64).reshape(dim, dim)
        else:
            raise ValidationError(
                f"MatrixN: cannot construct from {n_args} arguments"
            )

    @classmethod
    def from_rows(cls, *rows) -> MatrixN:
        """Build a matrix from equally sized row sequences or vectors."""
        return cls(np.vstack([np.asarray(r, dtype=np.float64) for r in rows]))

    def reserve(self, rows: int, cols: int) -> None:
        """Allocate zeroed rows x cols storage, discarding the contents."""
        check_positive_dims(rows, cols, name='MatrixN.reserve')
        if (rows, cols) != self.shape:
            self._data = np.zeros((int(rows), int(cols)), dtype=np.float64)
        else:
            self._data[:] = 0.0

    def resize(self, rows: int, cols: int) -> None:
        """Change the shape, keeping the overlapping top-left block and zero-filling."""
        check_positive_dims(rows, cols, name='MatrixN.resize')
        if (rows, cols) != self.shape:
            self._data = _block(self._data, int(rows), int(cols))

    def normalize_rows(self) -> None:
        """
        Scale every row to unit norm in place.

        Raises:
            DegenerateVectorError: If any row norm is below EPSILON. No row
                is modified in that case.
        """
        norms = np.sqrt(np.sum(self._data * self._data, axis=1))
        bad = np.flatnonzero(norms < EPSILON)
        if bad.size:
            raise DegenerateVectorError(
                f"MatrixN.normalize_rows: rows {bad.tolist()} have norm < {EPSILON:g}",
                norm=float(norms[bad[0]]),
            )
        self._data /= norms[:, np.newaxis]

    # ------------------------------------------------------------------
    # Explicit casts (linear elements, drop trailing / zero-pad)

    def to_vector2(self) -> Vector2:
        return Vector2._new(_resized(self._data.ravel(), 2))

    def to_vector3(self) -> Vector3:
        return Vector3._new(_resized(self._data.ravel(), 3))

    def to_vector4(self) -> Vector4:
        return Vector4._new(_resized(self._data.ravel(), 4))

    def to_vector_n(self) -> VectorN:
        return VectorN._new(self._data.ravel().copy())

    def to_matrix3(self) -> Matrix3:
        """Top-left 3x3 block, zero-padded (no homogeneous extension)."""
        return Matrix3._new(_block(self._data, 3, 3))

    def to_matrix4(self) -> Matrix4:
        """Top-left 4x4 block, zero-padded (no homogeneous extension)."""
        return Matrix4._new(_block(self._data, 4, 4))


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
# Miscellaneous matrix functions


def det(A: MatrixBase, *minor: int) -> float:
    """
    Determinant.

    det(A) is the full determinant: closed form up to 4x4, LU (with the
    row-swap parity) beyond. det(A, r1, r2, r3, c1, c2, c3) is the
    determinant of the 3x3 minor built from the given rows and columns.

    Raises:
        DimensionMismatchError: If A is not square
    """
    a = A._data
    if minor:
        if len(minor) != 6:
            raise ValidationError(
                f"det: expected 6 minor indices (r1, r2, r3, c1, c2, c3), got {len(minor)}"
            )
        r = [check_index(i, A.rows, 'det row') for i in minor[:3]]
        c = [check_index(j, A.cols, 'det col') for j in minor[3:]]
        return _det3(a[np.ix_(r, c)])

    check_square(A.rows, A.cols, 'det')
    n = A.rows
    if n == 1:
        return float(a[0, 0])
    if n == 2:
        return float(a[0, 0] * a[1, 1] - a[0, 1] * a[1, 0])
    if n == 3:
        return _det3(a)
    if n == 4:
        return _det4(a)
    from pymathpack.factorizations.lu import lu_determinant
    return lu_determinant(A)


def _det3(a: NDArray[np.float64]) -> float:
    return float(
        a[0, 0] * (a[1, 1] * a[2, 2] - a[1, 2] * a[2, 1])
        - a[0, 1] * (a[1, 0] * a[2, 2] - a[1, 2] * a[2, 0])
        + a[0, 2] * (a[1, 0] * a[2, 1] - a[1, 1] * a[2, 0])
    )


def _det4(a: NDArray[np.float64]) -> float:
    # Laplace expansion along the first row
    total = 0.0
    for j in range(4):
        cols = [c for c in range(4) if c != j]
        total += (-1.0) ** j * a[0, j] * _det3(a[np.ix_([1, 2, 3], cols)])
    return float(total)


def _adjugate(a: NDArray[np.float64]) -> NDArray[np.float64]:
    n = a.shape[0]
    cof = np.empty_like(a)
    for i in range(n):
        for j in range(n):
            rows = [r for r in range(n) if r != i]
            cols = [c for c in range(n) if c != j]
            sub = a[np.ix_(rows, cols)]
            m = _det3(sub) if n == 4 else float(sub[0, 0] * sub[1, 1] - sub[0, 1] * sub[1, 0])
            cof[i, j] = (-1.0) ** (i + j) * m
    return cof.T


def inverse(A: MatrixBase) -> MatrixBase:
    """
    Matrix inverse.

    Matrix3/Matrix4 (and 3x3/4x4 MatrixN) use the closed-form adjugate;
    larger MatrixN use Gauss-Jordan elimination on a copy.

    Raises:
        DimensionMismatchError: If A is not square
        SingularMatrixError: If A is singular
    """
    check_square(A.rows, A.cols, 'inverse')
    n = A.rows
    if n in (3, 4):
        d = det(A)
        if d == 0.0:
            raise SingularMatrixError(
                f"inverse: {n} x {n} matrix has zero determinant",
                matrix_name='A',
            )
        return A._new(_adjugate(A._data) / d)
    from pymathpack.solvers import gauss_jordan
    work = A.copy()
    gauss_jordan(work, MatrixN(n, 1))
    return work


def outer_product(u: VectorBase, v: VectorBase) -> MatrixBase:
    """
    Outer product u v^T.

    Two Vector3 give a Matrix3, two Vector4 a Matrix4; anything else gives
    a u.size x v.size MatrixN.
    """
    data = np.outer(u._data, v._data)
    if type(u) is type(v) is Vector3:
        return Matrix3._new(data)
    if type(u) is type(v) is Vector4:
        return Matrix4._new(data)
    return MatrixN._new(data)


def copy_matrix(
    A: MatrixBase, x1: int, y1: int, w: int, h: int,
    B: MatrixBase, x2: int, y2: int,
) -> None:
    """
    Copy the w x h block of A whose top-left corner is column x1, row y1
    into B at column x2, row y2.

    Raises:
        IndexOutOfRangeError: If either block does not fit its matrix
    """
    check_positive_dims(w, h, name='copy_matrix')
    for (x, y, M, label) in ((x1, y1, A, 'source'), (x2, y2, B, 'target')):
        if x < 0 or y < 0 or x + w > M.cols or y + h > M.rows:
            raise IndexOutOfRangeError(
                f"copy_matrix: {label} block {w} x {h} at (x={x}, y={y}) exceeds "
                f"{M.rows} x {M.cols} matrix",
                index=(y, x),
                bound=M.shape,
            )
    B._data[y2:y2 + h, x2:x2 + w] = A._data[y1:y1 + h, x1:x1 + w]


def matrix_multiply(A: MatrixBase, B: MatrixBase, C: MatrixBase) -> MatrixBase:
    """
    Write A * B into C.

    A MatrixN C is resized to fit; a fixed-size C must already have the
    product's shape.

    Returns:
        C
    """
    product = A._matmul(B)
    if isinstance(C, MatrixN):
        C._data = product._data
    else:
        if C.shape != product.shape:
            raise DimensionMismatchError(
                f"matrix_multiply: product is {product.shape}, output is {C.shape}",
                expected=product.shape,
                actual=C.shape,
            )
        C._data[:] = product._data
    return C


def euler_angles(A: MatrixBase) -> tuple[float, float, float]:
    """
    Euler angles (phi, theta, psi) of a rotation matrix.

    The rotation block is interpreted as Rz(psi) * Ry(theta) * Rx(phi):
    phi about x, theta about y, psi about z, in radians. At gimbal lock
    (|theta| = pi/2) psi is reported as 0 and the whole yaw goes to phi.
    """
    if A.rows < 3 or A.cols < 3:
        raise DimensionMismatchError(
            f"euler_angles: expected at least 3 x 3, got {A.rows} x {A.cols}",
            expected=(3, 3),
            actual=A.shape,
        )
    r = A._data
    sin_theta = float(np.clip(-r[2, 0], -1.0, 1.0))
    theta = float(np.arcsin(sin_theta))
    if abs(sin_theta) < 1.0 - 1e-12:
        phi = float(np.arctan2(r[2, 1], r[2, 2]))
        psi = float(np.arctan2(r[1, 0], r[0, 0]))
    else:
        phi = float(np.arctan2(sin_theta * r[0, 1], r[1, 1]))
        psi = 0.0
    return phi, theta, psi
