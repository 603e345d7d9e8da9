"""
Tests for the quaternion type and rotation conversions.

Validates:
    - Construction (identity default, components, axis/angle, matrix, two vectors)
    - Hamilton product, conjugate, inverse, norms
    - axis()/angle() recovery up to the q == -q ambiguity
    - matrix_to_quaternion branch selection, including the rr/xx tie
    - quaternion_to_matrix normalization and homogeneous extension
    - Round trip matrix -> quaternion -> matrix
    - distance, slerp, rotate
"""

import numpy as np
import pytest

from pymathpack.core.exceptions import (
    DegenerateVectorError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    ValidationError,
)
from pymathpack.core.tolerances import ROTATION
from pymathpack.primitives.matrices import Matrix3, Matrix4, MatrixN
from pymathpack.primitives.quaternion import (
    Quaternion,
    distance,
    matrix_to_quaternion,
    quaternion_to_matrix,
    rotate,
    slerp,
)
from pymathpack.primitives.vectors import Vector3


def _assert_same_rotation(q, r):
    """q and -q describe the same rotation."""
    a, b = q.to_numpy(), r.to_numpy()
    if a @ b < 0:
        b = -b
    np.testing.assert_allclose(a, b, rtol=ROTATION.rtol, atol=ROTATION.atol)


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_default_is_identity(self):
        q = Quaternion()
        np.testing.assert_array_equal(q.array, [0, 0, 0, 1])
        np.testing.assert_array_equal(q.to_matrix3().array, np.eye(3))

    def test_components(self):
        q = Quaternion(1, 2, 3, 4)
        assert (q[0], q[1], q[2], q[3]) == (1.0, 2.0, 3.0, 4.0)

    def test_from_array(self):
        q = Quaternion(np.array([0.0, 0.0, 1.0, 0.0]))
        assert q[2] == 1.0

    def test_from_array_wrong_size(self):
        with pytest.raises(DimensionMismatchError):
            Quaternion([1.0, 2.0, 3.0])

    def test_bad_arguments(self):
        with pytest.raises(ValidationError):
            Quaternion(1.0, 2.0)

    def test_axis_angle(self):
        q = Quaternion(Vector3(0, 0, 2), np.pi / 2)
        np.testing.assert_allclose(q.array, [0, 0, np.sqrt(0.5), np.sqrt(0.5)])

    def test_axis_must_be_3d(self):
        from pymathpack.primitives.vectors import Vector4
        with pytest.raises(DimensionMismatchError):
            Quaternion(Vector4(1, 0, 0, 0), 0.5)

    def test_from_matrix(self, rotation_matrix):
        q = Quaternion(Matrix3(rotation_matrix))
        assert q.norm() == pytest.approx(1.0)
        np.testing.assert_allclose(q.to_matrix3().array, rotation_matrix, atol=1e-12)

    def test_from_two_vectors(self):
        q = Quaternion(Vector3(1, 0, 0), Vector3(0, 2, 0))
        np.testing.assert_allclose(q.array, [0, 0, np.sqrt(0.5), np.sqrt(0.5)], atol=1e-15)

    def test_from_parallel_vectors_is_identity(self):
        q = Quaternion(Vector3(1, 1, 0), Vector3(2, 2, 0))
        np.testing.assert_array_equal(q.array, [0, 0, 0, 1])

    def test_from_opposite_vectors_is_half_turn(self):
        u = Vector3(1, 0, 0)
        q = Quaternion(u, Vector3(-1, 0, 0))
        assert q.angle() == pytest.approx(np.pi)
        np.testing.assert_allclose(rotate(u, q).array, [-1, 0, 0], atol=1e-12)


# ═══════════════════════════════════════════════════════════════════════
# Algebra
# ═══════════════════════════════════════════════════════════════════════


class TestAlgebra:

    def test_ij_equals_k(self):
        i, j = Quaternion(1, 0, 0, 0), Quaternion(0, 1, 0, 0)
        assert i * j == Quaternion(0, 0, 1, 0)
        assert j * i == Quaternion(0, 0, -1, 0)

    def test_i_squared(self):
        i = Quaternion(1, 0, 0, 0)
        assert i * i == Quaternion(0, 0, 0, -1)

    def test_product_composes_rotations(self, rng):
        q = Quaternion(Vector3(rng.standard_normal(3)), 0.4)
        r = Quaternion(Vector3(rng.standard_normal(3)), -1.3)
        lhs = (q * r).to_matrix3().array
        rhs = q.to_matrix3().array @ r.to_matrix3().array
        np.testing.assert_allclose(lhs, rhs, atol=1e-12)

    def test_scalar_ops(self):
        q = Quaternion(1, 2, 3, 4)
        assert 2 * q == Quaternion(2, 4, 6, 8)
        assert q / 2 == Quaternion(0.5, 1, 1.5, 2)
        assert q + q - q == q
        assert -q == Quaternion(-1, -2, -3, -4)

    def test_augmented(self):
        q = Quaternion(0, 0, 0, 1)
        ref = q
        q *= Quaternion(1, 0, 0, 0)
        q += Quaternion(0, 0, 0, 1)
        q *= 2
        q /= 2
        q -= Quaternion(0, 0, 0, 1)
        assert q is ref
        assert q == Quaternion(1, 0, 0, 0)

    def test_conjugate_and_inverse(self):
        q = Quaternion(1, 2, 3, 4)
        assert q.conjugate() == Quaternion(-1, -2, -3, 4)
        np.testing.assert_allclose((q * q.inverse()).array, [0, 0, 0, 1], atol=1e-15)

    def test_inverse_of_zero(self):
        with pytest.raises(DegenerateVectorError):
            Quaternion(0, 0, 0, 0).inverse()

    def test_norms(self):
        q = Quaternion(1, 1, 1, 1)
        assert q.norm2() == 4.0
        assert q.norm() == 2.0
        q.normalize()
        np.testing.assert_allclose(q.array, 0.5)

    def test_normalize_degenerate(self):
        q = Quaternion(0, 0, 0, 0)
        with pytest.raises(DegenerateVectorError):
            q.normalize()

    def test_clear_and_identity(self):
        q = Quaternion(1, 2, 3, 4)
        q.clear()
        assert q.norm() == 0.0
        q.identity()
        assert q == Quaternion()

    def test_index_out_of_range(self):
        with pytest.raises(IndexOutOfRangeError):
            Quaternion()[4]

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Quaternion())

    def test_repr(self):
        assert repr(Quaternion()) == "Quaternion(0.0, 0.0, 0.0, 1.0)"
        assert "1.000000" in str(Quaternion())


# ═══════════════════════════════════════════════════════════════════════
# Axis / angle recovery
# ═══════════════════════════════════════════════════════════════════════


class TestAxisAngle:

    def test_recover_axis_and_angle(self):
        axis = np.array([1.0, -2.0, 0.5])
        axis /= np.linalg.norm(axis)
        q = Quaternion(Vector3(axis), 1.2)
        np.testing.assert_allclose(q.axis().array, axis, atol=1e-12)
        assert q.angle() == pytest.approx(1.2)

    def test_negated_quaternion_same_rotation(self, rotation_matrix):
        q = Quaternion(Matrix3(rotation_matrix))
        np.testing.assert_allclose(
            (-q).to_matrix3().array, q.to_matrix3().array, atol=1e-15,
        )

    def test_identity_axis_defaults_to_x(self):
        assert Quaternion().axis() == Vector3(1, 0, 0)
        assert Quaternion().angle() == 0.0

    def test_euler_angles(self):
        q = Quaternion(Vector3(0, 0, 1), 0.3)
        np.testing.assert_allclose(q.euler_angles(), (0.0, 0.0, 0.3), atol=1e-12)


# ═══════════════════════════════════════════════════════════════════════
# Matrix conversions
# ═══════════════════════════════════════════════════════════════════════


class TestMatrixConversion:

    def test_round_trip(self, rotation_matrix):
        R = Matrix3(rotation_matrix)
        back = quaternion_to_matrix(matrix_to_quaternion(R), Matrix3())
        np.testing.assert_allclose(
            back.array, rotation_matrix, rtol=ROTATION.rtol, atol=ROTATION.atol,
        )

    @pytest.mark.parametrize("axis, angle", [
        ((1, 0, 0), np.pi),
        ((0, 1, 0), np.pi),
        ((0, 0, 1), np.pi),
        ((1, 1, 1), 2.5),
        ((0, 0, 1), 1e-8),
    ])
    def test_round_trip_every_branch(self, axis, angle):
        q = Quaternion(Vector3(*axis), angle)
        _assert_same_rotation(matrix_to_quaternion(q.to_matrix3()), q)

    def test_half_turn_about_x_uses_xx_branch(self):
        R = Matrix3(1, 0, 0, 0, -1, 0, 0, 0, -1)
        q = matrix_to_quaternion(R)
        np.testing.assert_allclose(q.array, [1, 0, 0, 0])

    def test_tie_resolved_in_favour_of_trace(self):
        # Quarter turn about x: rr == xx == 2, rr wins so w = sqrt(8) / 4
        R = Matrix3(1, 0, 0, 0, 0, -1, 0, 1, 0)
        q = matrix_to_quaternion(R)
        assert q[3] == np.sqrt(8.0) / 4.0
        np.testing.assert_allclose(q.array, [np.sqrt(0.5), 0, 0, np.sqrt(0.5)])

    def test_from_matrix4_block(self, rotation_matrix):
        R4 = Matrix3(rotation_matrix).to_matrix4()
        R4[0, 3] = 10.0
        _assert_same_rotation(
            matrix_to_quaternion(R4), matrix_to_quaternion(Matrix3(rotation_matrix)),
        )

    def test_fills_given_quaternion(self):
        q = Quaternion(9, 9, 9, 9)
        result = matrix_to_quaternion(Matrix3(np.eye(3)), q)
        assert result is q
        assert q == Quaternion()

    def test_too_small_matrix(self):
        with pytest.raises(DimensionMismatchError):
            matrix_to_quaternion(MatrixN(2, 2))

    def test_normalizes_first(self):
        q = Quaternion(Vector3(0, 1, 0), 0.8)
        R = quaternion_to_matrix(q * 5.0, Matrix3())
        np.testing.assert_allclose(R.array, q.to_matrix3().array, atol=1e-15)
        np.testing.assert_allclose(R.array @ R.array.T, np.eye(3), atol=1e-15)

    def test_input_not_modified(self):
        q = Quaternion(0, 0, 0, 3)
        quaternion_to_matrix(q, Matrix3())
        assert q[3] == 3.0

    def test_homogeneous_extension(self, rotation_matrix):
        R4 = Matrix4(np.ones(16))
        quaternion_to_matrix(Quaternion(Matrix3(rotation_matrix)), R4)
        np.testing.assert_allclose(R4.array[:3, :3], rotation_matrix, atol=1e-12)
        np.testing.assert_array_equal(R4.array[3, :3], 0.0)
        np.testing.assert_array_equal(R4.array[:3, 3], 0.0)
        assert R4[3, 3] == pytest.approx(1.0)

    def test_to_matrix_n_is_4x4(self):
        assert Quaternion().to_matrix_n().shape == (4, 4)

    def test_degenerate_quaternion(self):
        with pytest.raises(DegenerateVectorError):
            quaternion_to_matrix(Quaternion(0, 0, 0, 0), Matrix3())

    def test_output_too_small(self):
        with pytest.raises(DimensionMismatchError):
            quaternion_to_matrix(Quaternion(), MatrixN(2, 2))


# ═══════════════════════════════════════════════════════════════════════
# distance / slerp / rotate
# ═══════════════════════════════════════════════════════════════════════


class TestFunctions:

    def test_distance(self):
        assert distance(Quaternion(1, 0, 0, 0), Quaternion(0, 0, 0, 1)) == pytest.approx(np.sqrt(2))
        q = Quaternion(1, 2, 3, 4)
        assert distance(q, q) == 0.0

    def test_slerp_endpoints(self):
        q = Quaternion(Vector3(0, 0, 1), 0.2)
        r = Quaternion(Vector3(0, 1, 0), 1.0)
        _assert_same_rotation(slerp(q, r, 0.0), q)
        _assert_same_rotation(slerp(q, r, 1.0), r)

    def test_slerp_midpoint(self):
        q = Quaternion()
        r = Quaternion(Vector3(0, 0, 1), np.pi / 2)
        _assert_same_rotation(slerp(q, r, 0.5), Quaternion(Vector3(0, 0, 1), np.pi / 4))

    def test_slerp_takes_shorter_arc(self):
        q = Quaternion()
        r = -Quaternion(Vector3(1, 0, 0), 0.5)
        mid = slerp(q, r, 0.5)
        assert mid.angle() == pytest.approx(0.25)

    def test_slerp_nearly_parallel(self):
        q = Quaternion(Vector3(0, 0, 1), 0.1)
        r = Quaternion(Vector3(0, 0, 1), 0.1 + 1e-9)
        assert slerp(q, r, 0.5).norm() == pytest.approx(1.0)

    def test_rotate(self):
        q = Quaternion(Vector3(0, 0, 1), np.pi / 2)
        v = rotate(Vector3(1, 0, 0), q)
        assert isinstance(v, Vector3)
        np.testing.assert_allclose(v.array, [0, 1, 0], atol=1e-15)

    def test_rotate_requires_3_vector(self):
        from pymathpack.primitives.vectors import Vector2
        with pytest.raises(DimensionMismatchError):
            rotate(Vector2(1, 0), Quaternion())


# ═══════════════════════════════════════════════════════════════════════
# numpy operands
# ═══════════════════════════════════════════════════════════════════════


class TestNumpyOperands:

    def test_numpy_scalar_on_the_left(self):
        q = np.float64(2.0) * Quaternion(1, 2, 3, 4)
        assert type(q) is Quaternion
        assert q == Quaternion(2, 4, 6, 8)

    def test_numpy_array_on_the_left(self):
        with pytest.raises(TypeError):
            np.ones(4) * Quaternion()

    def test_identity_returns_self(self):
        q = Quaternion(1, 2, 3, 4)
        assert q.identity() is q
        assert q == Quaternion()
