"""
Vector value types.

Vector2, Vector3 and Vector4 are fixed-size vectors; VectorN is the
resizable, heap-owned generalization. All four store their components in a
private float64 numpy buffer that they own exclusively: copies are deep,
arithmetic returns new instances, and only the named in-place methods
(normalize, clear, resize, reserve) and augmented assignment mutate.

Casts between arities are explicit named methods. Reducing drops trailing
components; expanding zero-pads.
"""

from __future__ import annotations

import numbers
from typing import Any, Iterator

import numpy as np
from numpy.typing import NDArray

from pymathpack.core.constants import EPSILON, format_component
from pymathpack.core.exceptions import (
    DegenerateVectorError,
    DimensionMismatchError,
    ValidationError,
)
from pymathpack.core.validation import (
    check_array,
    check_index,
    check_positive_dims,
    check_size,
)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, numbers.Real)


def _resized(data: NDArray[np.float64], size: int) -> NDArray[np.float64]:
    """Copy `data` into a new buffer of `size`, truncating or zero-padding."""
    out = np.zeros(size, dtype=np.float64)
    k = min(size, data.shape[0])
    out[:k] = data[:k]
    return out


class VectorBase:
    """
    Shared behaviour of every vector type.

    Subclasses only decide how they are constructed and whether their size
    is fixed (`DIM`) or dynamic (`DIM is None`).
    """

    __slots__ = ('_data',)

    DIM: int | None = None

    _data: NDArray[np.float64]

    @classmethod
    def _new(cls, data: NDArray[np.float64]):
        """Wrap an already-validated float64 buffer without copying it."""
        obj = cls.__new__(cls)
        obj._data = data
        return obj

    @classmethod
    def _from_components(cls, args: tuple, name: str) -> NDArray[np.float64]:
        size = cls.DIM
        if len(args) == 0:
            return np.zeros(size, dtype=np.float64)
        if len(args) == 1 and not _is_scalar(args[0]):
            data = check_array(args[0], name).ravel()
            check_size(data, size, name)
            return data.copy()
        if len(args) == size and all(_is_scalar(a) for a in args):
            return np.array(args, dtype=np.float64)
        raise DimensionMismatchError(
            f"{name}: expected 0, 1 (array) or {size} (component) arguments, got {len(args)}",
            expected=(size,),
            actual=(len(args),),
        )

    # ------------------------------------------------------------------
    # Shape

    @property
    def size(self) -> int:
        """Number of elements."""
        return self._data.shape[0]

    @property
    def rows(self) -> int:
        """Number of rows (= size)."""
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        """Number of columns (= 1)."""
        return 1

    @property
    def array(self) -> NDArray[np.float64]:
        """Live 1-D view of the components."""
        return self._data

    def to_numpy(self) -> NDArray[np.float64]:
        """Detached copy of the components."""
        return self._data.copy()

    def __array__(self, dtype=None, copy=None):
        return np.array(self._data, dtype=dtype)

    # numpy operands on the left defer to the reflected operators
    __array_ufunc__ = None

    def __len__(self) -> int:
        return self._data.shape[0]

    def __iter__(self) -> Iterator[float]:
        return (float(x) for x in self._data)

    # ------------------------------------------------------------------
    # Norms and in-place methods

    def norm2(self) -> float:
        """Squared Euclidean norm."""
        return float(self._data @ self._data)

    def norm(self) -> float:
        """Euclidean norm."""
        return float(np.sqrt(self.norm2()))

    def normalize(self):
        """
        Scale to unit norm in place.

        Returns:
            self

        Raises:
            DegenerateVectorError: If the norm is below EPSILON. The vector
                is left unmodified.
        """
        n = self.norm()
        if n < EPSILON:
            raise DegenerateVectorError(
                f"{type(self).__name__}: cannot normalize, norm {n:g} < {EPSILON:g}",
                norm=n,
            )
        self._data /= n
        return self

    def clear(self):
        """Set every component to zero. Returns self."""
        self._data[:] = 0.0
        return self

    def copy(self):
        """Deep copy."""
        return self._new(self._data.copy())

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def transpose(self):
        """Row vector (1 x size MatrixN). The receiver is not modified."""
        from pymathpack.primitives.matrices import MatrixN
        return MatrixN._new(self._data.reshape(1, -1).copy())

    # ------------------------------------------------------------------
    # Element access (always bounds-checked, no negative wrap-around)

    def __getitem__(self, i: int) -> float:
        i = check_index(i, self.size, type(self).__name__)
        return float(self._data[i])

    def __setitem__(self, i: int, value: float) -> None:
        i = check_index(i, self.size, type(self).__name__)
        self._data[i] = value

    # ------------------------------------------------------------------
    # Arithmetic

    def _operand(self, other: Any) -> NDArray[np.float64] | None:
        if not isinstance(other, VectorBase):
            return None
        if other.size != self.size:
            raise DimensionMismatchError(
                f"{type(self).__name__}({self.size}) and "
                f"{type(other).__name__}({other.size}) differ in size",
                expected=(self.size,),
                actual=(other.size,),
            )
        return other._data

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

    def __mul__(self, k):
        # vector * matrix is resolved by the matrix's __rmul__
        if not _is_scalar(k):
            return NotImplemented
        return self._new(self._data * float(k))

    def __rmul__(self, k):
        if not _is_scalar(k):
            return NotImplemented
        return self._new(float(k) * self._data)

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

    def __imul__(self, k):
        if not _is_scalar(k):
            return NotImplemented
        self._data *= float(k)
        return self

    def __itruediv__(self, k):
        if not _is_scalar(k):
            return NotImplemented
        self._data /= float(k)
        return self

    def __eq__(self, other):
        if not isinstance(other, VectorBase):
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

    def to_vector2(self) -> Vector2:
        """Cast to Vector2 (drop trailing / zero-pad)."""
        return Vector2._new(_resized(self._data, 2))

    def to_vector3(self) -> Vector3:
        """Cast to Vector3 (drop trailing / zero-pad)."""
        return Vector3._new(_resized(self._data, 3))

    def to_vector4(self) -> Vector4:
        """Cast to Vector4 (drop trailing / zero-pad)."""
        return Vector4._new(_resized(self._data, 4))

    def to_vector_n(self) -> VectorN:
        """Cast to a dynamic vector of the same size."""
        return VectorN._new(self._data.copy())

    def to_matrix_n(self):
        """Cast to a size x 1 column MatrixN."""
        from pymathpack.primitives.matrices import MatrixN
        return MatrixN._new(self._data.reshape(-1, 1).copy())

    # ------------------------------------------------------------------
    # Output

    def __repr__(self) -> str:
        body = ', '.join(repr(float(x)) for x in self._data)
        return f"{type(self).__name__}({body})"

    def __str__(self) -> str:
        return '[' + ' '.join(format_component(x) for x in self._data) + ']'


class Vector2(VectorBase):
    """
    2D vector of doubles.

    Vector2() is the zero vector; Vector2(x, y) sets the components;
    Vector2(seq) copies any 2-element array-like (including another vector).
    """

    __slots__ = ()
    DIM = 2

    def __init__(self, *args):
        self._data = self._from_components(args, 'Vector2')


class Vector3(VectorBase):
    """
    3D vector of doubles.

    Vector3() is the zero vector; Vector3(x, y, z) sets the components;
    Vector3(seq) copies any 3-element array-like (including another vector).
    """

    __slots__ = ()
    DIM = 3

    def __init__(self, *args):
        self._data = self._from_components(args, 'Vector3')


class Vector4(VectorBase):
    """
    4D vector of doubles.

    Vector4() is the zero vector; Vector4(x, y, z, w) sets the components;
    Vector4(seq) copies any 4-element array-like (including another vector).
    """

    __slots__ = ()
    DIM = 4

    def __init__(self, *args):
        self._data = self._from_components(args, 'Vector4')


class VectorN(VectorBase):
    """
    N-dimensional vector of doubles that may be resized.

    Construction:
        VectorN()              empty vector, size 0 until resize/reserve
        VectorN(n)             n zeros (n must be a positive int)
        VectorN(seq)           copy of any 1-D array-like
        VectorN(x, y[, z[, w]]) 2, 3 or 4 components
    """

    __slots__ = ()

    def __init__(self, *args):
        if len(args) == 0:
            self._data = np.zeros(0, dtype=np.float64)
        elif len(args) == 1 and isinstance(args[0], (int, np.integer)) \
                and not isinstance(args[0], (bool, np.bool_)):
            check_positive_dims(args[0], name='VectorN')
            self._data = np.zeros(int(args[0]), dtype=np.float64)
        elif len(args) == 1:
            data = check_array(args[0], 'VectorN')
            if data.ndim > 1 and min(data.shape) != 1:
                raise DimensionMismatchError(
                    f"VectorN: expected 1-D data, got shape {data.shape}",
                    actual=data.shape,
                )
            self._data = data.ravel().copy()
        elif 2 <= len(args) <= 4 and all(_is_scalar(a) for a in args):
            self._data = np.array(args, dtype=np.float64)
        else:
            raise ValidationError(
                f"VectorN: cannot construct from {len(args)} arguments"
            )

    def reserve(self, n: int) -> None:
        """Allocate zeroed storage for n elements, discarding the contents."""
        check_positive_dims(n, name='VectorN.reserve')
        if n != self.size:
            self._data = np.zeros(int(n), dtype=np.float64)
        else:
            self._data[:] = 0.0

    def resize(self, n: int) -> None:
        """Change the size to n, keeping the leading elements and zero-filling."""
        check_positive_dims(n, name='VectorN.resize')
        if n != self.size:
            self._data = _resized(self._data, int(n))


Point2 = Vector2
Point3 = Vector3
Point4 = Vector4
PointN = VectorN


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
# Miscellaneous vector functions


def normalized(u: VectorBase) -> VectorBase:
    """Return a unit-norm copy of u (u itself is untouched)."""
    return u.copy().normalize()


def dot(u: VectorBase, v: VectorBase) -> float:
    """Dot product of two vectors of the same size."""
    return float(u._data @ u._operand(v))


def cross(u: VectorBase, v: VectorBase, w: VectorBase | None = None) -> VectorBase:
    """
    Cross product.

    With two arguments, the 3-D cross product u x v (both of size 3).
    With three arguments, the 4-D ternary cross product: the vector
    orthogonal to u, v and w (all of size 4), whose i-th component is the
    signed cofactor of column i in the 3x4 matrix [u; v; w].

    The result has the type of u when u is a fixed vector, VectorN otherwise.
    """
    if w is None:
        if u.size != 3 or v.size != 3:
            raise DimensionMismatchError(
                f"cross: expected two 3-vectors, got sizes {u.size} and {v.size}",
                expected=(3, 3),
                actual=(u.size, v.size),
            )
        data = np.cross(u._data, v._data)
    else:
        if not (u.size == v.size == w.size == 4):
            raise DimensionMismatchError(
                f"cross: expected three 4-vectors, got sizes "
                f"{u.size}, {v.size} and {w.size}",
                expected=(4, 4, 4),
                actual=(u.size, v.size, w.size),
            )
        m = np.vstack([u._data, v._data, w._data])
        data = np.empty(4, dtype=np.float64)
        for i in range(4):
            minor = np.delete(m, i, axis=1)
            data[i] = (-1.0) ** i * np.linalg.det(minor)
    if type(u) is VectorN:
        return VectorN._new(data)
    return type(u)._new(data)
