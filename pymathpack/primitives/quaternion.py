"""
Quaternion value type and rotation conversions.

A quaternion q = ix + jy + kz + w has three imaginary components (x, y, z)
carrying the rotation axis and one real component w carrying the rotation
angle. Callers should not interpret the raw components; use axis(),
angle() and the matrix conversions instead.

Properties:
    i^2 = j^2 = k^2 = -1
    ij = -ji = k,  jk = -kj = i,  ki = -ik = j
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from pymathpack.core.constants import EPSILON, EPSILON2, format_component
from pymathpack.core.exceptions import (
    DegenerateVectorError,
    DimensionMismatchError,
    ValidationError,
)
from pymathpack.core.validation import check_array, check_index, check_size
from pymathpack.primitives.matrices import (
    Matrix3,
    Matrix4,
    MatrixBase,
    MatrixN,
    euler_angles,
)
from pymathpack.primitives.vectors import Vector3, VectorBase, _is_scalar


class Quaternion:
    """
    Rotation quaternion stored as (x, y, z, w).

    Construction:
        Quaternion()                 identity rotation (0, 0, 0, 1)
        Quaternion(x, y, z, w)       components
        Quaternion(seq)              4-element array-like, or another Quaternion
        Quaternion(axis, angle)      rotation of `angle` radians about Vector3 `axis`
        Quaternion(R)                from a Matrix3/Matrix4 rotation
        Quaternion(u, v)             shortest-arc rotation taking Vector3 u onto v
    """

    __slots__ = ('_data',)

    _data: NDArray[np.float64]

    def __init__(self, *args):
        n_args = len(args)
        if n_args == 0:
            self._data = np.array([0.0, 0.0, 0.0, 1.0])
        elif n_args == 4 and all(_is_scalar(a) for a in args):
            self._data = np.array(args, dtype=np.float64)
        elif n_args == 1 and isinstance(args[0], MatrixBase):
            self._data = matrix_to_quaternion(args[0])._data
        elif n_args == 1:
            data = check_array(args[0], 'Quaternion').ravel()
            check_size(data, 4, 'Quaternion')
            self._data = data.copy()
        elif n_args == 2 and isinstance(args[0], VectorBase) and _is_scalar(args[1]):
            self._data = _from_axis_angle(args[0], float(args[1]))
        elif n_args == 2 and isinstance(args[0], VectorBase) and isinstance(args[1], VectorBase):
            self._data = _from_two_vectors(args[0], args[1])
        else:
            raise ValidationError(
                f"Quaternion: cannot construct from {n_args} arguments"
            )

    @classmethod
    def _new(cls, data: NDArray[np.float64]) -> Quaternion:
        obj = cls.__new__(cls)
        obj._data = data
        return obj

    @property
    def array(self) -> NDArray[np.float64]:
        """Live view of (x, y, z, w)."""
        return self._data

    def to_numpy(self) -> NDArray[np.float64]:
        return self._data.copy()

    def __array__(self, dtype=None, copy=None):
        return np.array(self._data, dtype=dtype)

    # numpy operands on the left defer to the reflected operators
    __array_ufunc__ = None

    # ------------------------------------------------------------------

    def norm2(self) -> float:
        return float(self._data @ self._data)

    def norm(self) -> float:
        return float(np.sqrt(self.norm2()))

    def normalize(self) -> Quaternion:
        """
        Scale to unit norm in place.

        Raises:
            DegenerateVectorError: If the norm is below EPSILON (unmodified)
        """
        n = self.norm()
        if n < EPSILON:
            raise DegenerateVectorError(
                f"Quaternion: cannot normalize, norm {n:g} < {EPSILON:g}",
                norm=n,
            )
        self._data /= n
        return self

    def conjugate(self) -> Quaternion:
        x, y, z, w = self._data
        return Quaternion._new(np.array([-x, -y, -z, w]))

    def inverse(self) -> Quaternion:
        """q^-1 = conjugate(q) / |q|^2."""
        n2 = self.norm2()
        if n2 < EPSILON2:
            raise DegenerateVectorError(
                f"Quaternion: cannot invert, squared norm {n2:g}",
                norm=float(np.sqrt(n2)),
            )
        return Quaternion._new(self.conjugate()._data / n2)

    def axis(self) -> Vector3:
        """
        Unit rotation axis.

        For (near) identity rotations the axis is undefined; the x axis is
        returned.
        """
        v = self._data[:3]
        n = float(np.sqrt(v @ v))
        if n < EPSILON2:
            return Vector3(1.0, 0.0, 0.0)
        return Vector3._new(v / n)

    def angle(self) -> float:
        """Rotation angle in radians, in [0, 2*pi]."""
        n = self.norm()
        if n < EPSILON2:
            return 0.0
        return float(2.0 * np.arccos(np.clip(self._data[3] / n, -1.0, 1.0)))

    def euler_angles(self) -> tuple[float, float, float]:
        """Euler angles (phi, theta, psi) of the rotation; see matrices.euler_angles."""
        return euler_angles(self.to_matrix3())

    def clear(self) -> Quaternion:
        self._data[:] = 0.0
        return self

    def identity(self) -> Quaternion:
        self._data[:] = (0.0, 0.0, 0.0, 1.0)
        return self

    def copy(self) -> Quaternion:
        return Quaternion._new(self._data.copy())

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def __getitem__(self, i: int) -> float:
        return float(self._data[check_index(i, 4, 'Quaternion')])

    def __setitem__(self, i: int, value: float) -> None:
        self._data[check_index(i, 4, 'Quaternion')] = value

    def __len__(self) -> int:
        return 4

    # ------------------------------------------------------------------
    # Arithmetic

    def __add__(self, other: Any):
        if not isinstance(other, Quaternion):
            return NotImplemented
        return Quaternion._new(self._data + other._data)

    def __sub__(self, other: Any):
        if not isinstance(other, Quaternion):
            return NotImplemented
        return Quaternion._new(self._data - other._data)

    def __neg__(self):
        return Quaternion._new(-self._data)

    def __mul__(self, other: Any):
        if isinstance(other, Quaternion):
            return Quaternion._new(_hamilton(self._data, other._data))
        if _is_scalar(other):
            return Quaternion._new(self._data * float(other))
        return NotImplemented

    def __rmul__(self, other: Any):
        if _is_scalar(other):
            return Quaternion._new(float(other) * self._data)
        return NotImplemented

    def __truediv__(self, k: Any):
        if not _is_scalar(k):
            return NotImplemented
        return Quaternion._new(self._data / float(k))

    def __iadd__(self, other: Any):
        if not isinstance(other, Quaternion):
            return NotImplemented
        self._data += other._data
        return self

    def __isub__(self, other: Any):
        if not isinstance(other, Quaternion):
            return NotImplemented
        self._data -= other._data
        return self

    def __imul__(self, other: Any):
        if isinstance(other, Quaternion):
            self._data[:] = _hamilton(self._data, other._data)
            return self
        if _is_scalar(other):
            self._data *= float(other)
            return self
        return NotImplemented

    def __itruediv__(self, k: Any):
        if not _is_scalar(k):
            return NotImplemented
        self._data /= float(k)
        return self

    def __eq__(self, other: Any):
        if not isinstance(other, Quaternion):
            return NotImplemented
        return np.array_equal(self._data, other._data)

    def __ne__(self, other: Any):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    # ------------------------------------------------------------------
    # Casts

    def to_matrix3(self) -> Matrix3:
        return quaternion_to_matrix(self, Matrix3())

    def to_matrix4(self) -> Matrix4:
        return quaternion_to_matrix(self, Matrix4())

    def to_matrix_n(self) -> MatrixN:
        """4x4 dynamic rotation matrix (homogeneous)."""
        return quaternion_to_matrix(self, MatrixN(4, 4))

    def __repr__(self) -> str:
        x, y, z, w = (float(c) for c in self._data)
        return f"Quaternion({x!r}, {y!r}, {z!r}, {w!r})"

    def __str__(self) -> str:
        return '[' + ' '.join(format_component(c) for c in self._data) + ']'


def _hamilton(q: NDArray[np.float64], r: NDArray[np.float64]) -> NDArray[np.float64]:
    qv, qw = q[:3], q[3]
    rv, rw = r[:3], r[3]
    out = np.empty(4, dtype=np.float64)
    out[:3] = qw * rv + rw * qv + np.cross(qv, rv)
    out[3] = qw * rw - qv @ rv
    return out


def _from_axis_angle(axis: VectorBase, angle: float) -> NDArray[np.float64]:
    if axis.size != 3:
        raise DimensionMismatchError(
            f"Quaternion: axis must have 3 components, got {axis.size}",
            expected=(3,),
            actual=(axis.size,),
        )
    u = axis.to_vector3().normalize()
    half = 0.5 * angle
    out = np.empty(4, dtype=np.float64)
    out[:3] = u.array * np.sin(half)
    out[3] = np.cos(half)
    return out


def _from_two_vectors(u: VectorBase, v: VectorBase) -> NDArray[np.float64]:
    a = u.to_vector3().normalize().array
    b = v.to_vector3().normalize().array
    d = float(a @ b)
    if d >= 1.0 - EPSILON2:
        return np.array([0.0, 0.0, 0.0, 1.0])
    if d <= -1.0 + EPSILON2:
        # Half turn about any axis orthogonal to a
        ortho = np.cross(a, [1.0, 0.0, 0.0])
        if ortho @ ortho < EPSILON:
            ortho = np.cross(a, [0.0, 1.0, 0.0])
        ortho /= np.sqrt(ortho @ ortho)
        return np.array([ortho[0], ortho[1], ortho[2], 0.0])
    out = np.empty(4, dtype=np.float64)
    out[:3] = np.cross(a, b)
    out[3] = 1.0 + d
    return out / np.sqrt(out @ out)


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
# Rotation matrix conversions


def matrix_to_quaternion(A: MatrixBase, q: Quaternion | None = None) -> Quaternion:
    """
    Construct a quaternion from a rotation matrix.

    A is a 3x3 rotation matrix or a matrix whose top-left 3x3 block is one.
    Four candidate bases are formed from the diagonal:

        rr = 1 + a00 + a11 + a22     (4 w^2)
        xx = 1 + a00 - a11 - a22     (4 x^2)
        yy = 1 - a00 + a11 - a22     (4 y^2)
        zz = 1 - a00 - a11 + a22     (4 z^2)

    The largest one (ties: rr, then xx, yy, zz) is the divisor, so the
    division never happens by a near-zero quantity. The remaining
    components come from off-diagonal differences (for w) and sums.

    Returns:
        q (filled in), or a new Quaternion when q is None
    """
    if A.rows < 3 or A.cols < 3:
        raise DimensionMismatchError(
            f"matrix_to_quaternion: expected at least 3 x 3, got {A.rows} x {A.cols}",
            expected=(3, 3),
            actual=A.shape,
        )
    a = A.array
    d0, d1, d2 = a[0, 0], a[1, 1], a[2, 2]
    rr = 1.0 + d0 + d1 + d2
    xx = 1.0 + d0 - d1 - d2
    yy = 1.0 - d0 + d1 - d2
    zz = 1.0 - d0 - d1 + d2

    largest = rr
    if xx > largest:
        largest = xx
    if yy > largest:
        largest = yy
    if zz > largest:
        largest = zz

    if rr == largest:
        r4 = np.sqrt(rr * 4.0)
        x = (a[2, 1] - a[1, 2]) / r4
        y = (a[0, 2] - a[2, 0]) / r4
        z = (a[1, 0] - a[0, 1]) / r4
        w = r4 / 4.0
    elif xx == largest:
        x4 = np.sqrt(xx * 4.0)
        x = x4 / 4.0
        y = (a[1, 0] + a[0, 1]) / x4
        z = (a[2, 0] + a[0, 2]) / x4
        w = (a[2, 1] - a[1, 2]) / x4
    elif yy == largest:
        y4 = np.sqrt(yy * 4.0)
        x = (a[1, 0] + a[0, 1]) / y4
        y = y4 / 4.0
        z = (a[2, 1] + a[1, 2]) / y4
        w = (a[0, 2] - a[2, 0]) / y4
    else:
        z4 = np.sqrt(zz * 4.0)
        x = (a[2, 0] + a[0, 2]) / z4
        y = (a[2, 1] + a[1, 2]) / z4
        z = z4 / 4.0
        w = (a[1, 0] - a[0, 1]) / z4

    if q is None:
        q = Quaternion.__new__(Quaternion)
        q._data = np.empty(4, dtype=np.float64)
    q._data[:] = (x, y, z, w)
    return q


def quaternion_to_matrix(r: Quaternion, R: MatrixBase) -> MatrixBase:
    """
    Write the rotation matrix of quaternion r into R.

    The quaternion is normalized first (r itself is not modified). With
    q = (x, y, z, w) the rotation block is

        [ 1-2y^2-2z^2   2xy-2wz       2xz+2wy     ]
        [ 2xy+2wz       1-2x^2-2z^2   2yz-2wx     ]
        [ 2xz-2wy       2yz+2wx       1-2x^2-2y^2 ]

    evaluated without trigonometric calls. When R has at least 4 rows and
    4 columns, the last row and column form the homogeneous extension.

    Returns:
        R

    Raises:
        DegenerateVectorError: If r has (near) zero norm
        DimensionMismatchError: If R is smaller than 3 x 3
    """
    if R.rows < 3 or R.cols < 3:
        raise DimensionMismatchError(
            f"quaternion_to_matrix: output must be at least 3 x 3, got {R.rows} x {R.cols}",
            expected=(3, 3),
            actual=R.shape,
        )
    q = r.copy().normalize()
    x, y, z, w = q._data
    m = R.array
    m[0, 0] = w * w + x * x - y * y - z * z
    m[1, 0] = 2 * x * y + 2 * w * z
    m[2, 0] = 2 * x * z - 2 * w * y
    m[0, 1] = 2 * x * y - 2 * w * z
    m[1, 1] = w * w - x * x + y * y - z * z
    m[2, 1] = 2 * y * z + 2 * w * x
    m[0, 2] = 2 * x * z + 2 * w * y
    m[1, 2] = 2 * y * z - 2 * w * x
    m[2, 2] = w * w - x * x - y * y + z * z
    if R.rows > 3 and R.cols > 3:
        m[0:3, 3] = 0.0
        m[3, 0:3] = 0.0
        m[3, 3] = w * w + x * x + y * y + z * z
    return R


# ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
# Miscellaneous quaternion functions


def distance(q: Quaternion, r: Quaternion) -> float:
    """Euclidean distance between q and r as 4-vectors."""
    d = q._data - r._data
    return float(np.sqrt(d @ d))


def slerp(q: Quaternion, r: Quaternion, t: float) -> Quaternion:
    """
    Spherical linear interpolation from q (t=0) to r (t=1).

    Both inputs are normalized copies; the shorter arc is taken by flipping
    r when q . r < 0. Nearly parallel inputs fall back to normalized linear
    interpolation.
    """
    a = q.copy().normalize()._data
    b = r.copy().normalize()._data
    cos_omega = float(a @ b)
    if cos_omega < 0.0:
        b = -b
        cos_omega = -cos_omega
    cos_omega = min(cos_omega, 1.0)

    if 1.0 - cos_omega < EPSILON:
        out = (1.0 - t) * a + t * b
        return Quaternion._new(out / np.sqrt(out @ out))

    omega = np.arccos(cos_omega)
    sin_omega = np.sin(omega)
    s0 = np.sin((1.0 - t) * omega) / sin_omega
    s1 = np.sin(t * omega) / sin_omega
    return Quaternion._new(s0 * a + s1 * b)


def rotate(u: VectorBase, q: Quaternion) -> Vector3:
    """Rotate the 3-vector u by quaternion q (returns a new Vector3)."""
    if u.size != 3:
        raise DimensionMismatchError(
            f"rotate: expected a 3-vector, got size {u.size}",
            expected=(3,),
            actual=(u.size,),
        )
    R = q.to_matrix3()
    return Vector3._new(R.array @ u.array)
