"""
Tests for the vector value types.

Validates:
    - Construction (zero, components, array-like, VectorN sizes)
    - Norms, normalize (including the degenerate case), clear
    - Bounds-checked indexing without negative wrap-around
    - Arithmetic and size mismatches
    - Exact equality, deep copies, explicit casts
    - dot, cross (3-D and 4-D ternary), normalized
"""

import copy

import numpy as np
import pytest

from pymathpack.core.exceptions import (
    DegenerateVectorError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    ValidationError,
)
from pymathpack.primitives.matrices import MatrixN
from pymathpack.primitives.vectors import (
    Point3,
    Vector2,
    Vector3,
    Vector4,
    VectorN,
    cross,
    dot,
    normalized,
)


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_default_is_zero(self):
        v = Vector3()
        assert v.size == 3
        np.testing.assert_array_equal(v.array, [0.0, 0.0, 0.0])

    def test_components(self):
        v = Vector4(1, 2, 3, 4)
        np.testing.assert_array_equal(v.array, [1.0, 2.0, 3.0, 4.0])
        assert v.array.dtype == np.float64

    def test_from_array_like(self):
        v = Vector2([5.0, 6.0])
        assert (v[0], v[1]) == (5.0, 6.0)

    def test_copy_constructor_is_deep(self):
        u = Vector3(1, 2, 3)
        v = Vector3(u)
        v[0] = 10.0
        assert u[0] == 1.0

    def test_wrong_component_count(self):
        with pytest.raises(DimensionMismatchError):
            Vector3(1, 2)

    def test_wrong_array_size(self):
        with pytest.raises(DimensionMismatchError, match="expected 3 elements"):
            Vector3([1.0, 2.0, 3.0, 4.0])

    def test_point_alias(self):
        assert Point3 is Vector3

    def test_vector_n_empty(self):
        assert VectorN().size == 0

    def test_vector_n_zeros(self):
        v = VectorN(5)
        assert v.size == 5
        assert v.norm() == 0.0

    def test_vector_n_rejects_zero_size(self):
        with pytest.raises(DimensionMismatchError):
            VectorN(0)

    def test_vector_n_from_sequence(self):
        v = VectorN([1.0, 2.0, 3.0, 4.0, 5.0])
        assert v.size == 5
        assert v[4] == 5.0

    def test_vector_n_from_column(self):
        v = VectorN(np.ones((4, 1)))
        assert v.size == 4

    def test_vector_n_rejects_matrix_data(self):
        with pytest.raises(DimensionMismatchError):
            VectorN(np.ones((2, 3)))

    def test_vector_n_components(self):
        v = VectorN(1.0, 2.0, 3.0)
        assert v.size == 3

    def test_vector_n_rejects_many_scalars(self):
        with pytest.raises(ValidationError):
            VectorN(1.0, 2.0, 3.0, 4.0, 5.0)


# ═══════════════════════════════════════════════════════════════════════
# Norms and in-place methods
# ═══════════════════════════════════════════════════════════════════════


class TestNorms:

    def test_norm_and_norm2(self):
        v = Vector3(3, 4, 0)
        assert v.norm2() == 25.0
        assert v.norm() == 5.0

    def test_normalize_in_place(self):
        v = Vector2(3, 4)
        result = v.normalize()
        assert result is v
        np.testing.assert_allclose(v.array, [0.6, 0.8])

    def test_normalize_degenerate_leaves_vector_unchanged(self):
        v = Vector3(1e-9, 0, 0)
        with pytest.raises(DegenerateVectorError) as info:
            v.normalize()
        assert v[0] == 1e-9
        assert info.value.norm == pytest.approx(1e-9)

    def test_normalize_zero(self):
        with pytest.raises(DegenerateVectorError, match="cannot normalize"):
            VectorN(4).normalize()

    def test_clear(self):
        v = Vector4(1, 2, 3, 4)
        v.clear()
        assert v.norm() == 0.0

    def test_normalized_returns_copy(self):
        u = Vector3(0, 0, 2)
        v = normalized(u)
        assert u[2] == 2.0
        assert v == Vector3(0, 0, 1)


# ═══════════════════════════════════════════════════════════════════════
# Indexing
# ═══════════════════════════════════════════════════════════════════════


class TestIndexing:

    def test_get_and_set(self):
        v = Vector3()
        v[1] = 7.5
        assert v[1] == 7.5

    @pytest.mark.parametrize("index", [3, -1, 100])
    def test_out_of_range(self, index):
        v = Vector3(1, 2, 3)
        with pytest.raises(IndexOutOfRangeError):
            v[index]

    def test_out_of_range_is_index_error(self):
        with pytest.raises(IndexError):
            VectorN(2)[2] = 1.0

    def test_iteration_and_len(self):
        v = Vector4(1, 2, 3, 4)
        assert len(v) == 4
        assert list(v) == [1.0, 2.0, 3.0, 4.0]

    def test_array_is_live_view(self):
        v = Vector3(1, 2, 3)
        v.array[0] = 9.0
        assert v[0] == 9.0

    def test_to_numpy_is_detached(self):
        v = Vector3(1, 2, 3)
        a = v.to_numpy()
        a[0] = 9.0
        assert v[0] == 1.0


# ═══════════════════════════════════════════════════════════════════════
# Arithmetic
# ═══════════════════════════════════════════════════════════════════════


class TestArithmetic:

    def test_add_sub(self):
        u = Vector3(1, 2, 3)
        v = Vector3(4, 5, 6)
        assert u + v == Vector3(5, 7, 9)
        assert v - u == Vector3(3, 3, 3)

    def test_results_are_new_instances(self):
        u = Vector2(1, 1)
        w = u + Vector2(1, 1)
        assert w is not u
        assert u == Vector2(1, 1)

    def test_scalar_ops(self):
        u = Vector2(1, -2)
        assert u * 2 == Vector2(2, -4)
        assert 3 * u == Vector2(3, -6)
        assert u / 2 == Vector2(0.5, -1)
        assert -u == Vector2(-1, 2)

    def test_augmented(self):
        u = VectorN(1.0, 2.0)
        ref = u
        u += VectorN(1.0, 1.0)
        u *= 2
        u -= VectorN(1.0, 1.0)
        u /= 3
        assert u is ref
        np.testing.assert_allclose(u.array, [1.0, 5.0 / 3.0])

    def test_size_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="differ in size"):
            VectorN(3) + VectorN(4)

    def test_vector_times_vector_unsupported(self):
        with pytest.raises(TypeError):
            Vector3(1, 2, 3) * Vector3(1, 2, 3)


# ═══════════════════════════════════════════════════════════════════════
# Equality, copies and casts
# ═══════════════════════════════════════════════════════════════════════


class TestEqualityAndCasts:

    def test_exact_equality(self):
        assert Vector3(1, 2, 3) == Vector3(1, 2, 3)
        assert Vector3(1, 2, 3) != Vector3(1, 2, 3 + 1e-15)

    def test_different_types_not_equal(self):
        assert Vector3(1, 2, 3) != VectorN(1.0, 2.0, 3.0)

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Vector2())

    def test_copy_and_deepcopy(self):
        u = VectorN(1.0, 2.0, 3.0)
        for v in (u.copy(), copy.copy(u), copy.deepcopy(u)):
            v[0] = 0.0
            assert u[0] == 1.0

    def test_reduce_drops_trailing(self):
        assert Vector4(1, 2, 3, 4).to_vector2() == Vector2(1, 2)

    def test_expand_zero_pads(self):
        assert Vector2(1, 2).to_vector4() == Vector4(1, 2, 0, 0)

    def test_to_vector_n(self):
        v = Vector3(1, 2, 3).to_vector_n()
        assert isinstance(v, VectorN)
        assert v.size == 3

    def test_transpose_is_row_matrix(self):
        t = Vector3(1, 2, 3).transpose()
        assert isinstance(t, MatrixN)
        assert t.shape == (1, 3)

    def test_to_matrix_n_is_column(self):
        assert Vector3(1, 2, 3).to_matrix_n().shape == (3, 1)

    def test_vector_n_resize_keeps_leading(self):
        v = VectorN(1.0, 2.0, 3.0)
        v.resize(5)
        np.testing.assert_array_equal(v.array, [1, 2, 3, 0, 0])
        v.resize(2)
        np.testing.assert_array_equal(v.array, [1, 2])

    def test_vector_n_reserve_zeroes(self):
        v = VectorN(1.0, 2.0)
        v.reserve(2)
        np.testing.assert_array_equal(v.array, [0, 0])
        v.reserve(4)
        assert v.size == 4

    def test_repr_and_str(self):
        v = Vector2(1, 2)
        assert repr(v) == "Vector2(1.0, 2.0)"
        assert "1.000000" in str(v)


# ═══════════════════════════════════════════════════════════════════════
# dot / cross
# ═══════════════════════════════════════════════════════════════════════


class TestProducts:

    def test_dot(self):
        assert dot(Vector3(1, 2, 3), Vector3(4, 5, 6)) == 32.0

    def test_dot_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            dot(Vector3(), Vector4())

    def test_cross_3d(self):
        assert cross(Vector3(1, 0, 0), Vector3(0, 1, 0)) == Vector3(0, 0, 1)

    def test_cross_vector_n(self):
        w = cross(VectorN(0.0, 1.0, 0.0), VectorN(0.0, 0.0, 1.0))
        assert isinstance(w, VectorN)
        np.testing.assert_array_equal(w.array, [1, 0, 0])

    def test_cross_4d_orthogonal_to_inputs(self, rng):
        u, v, w = (Vector4(rng.standard_normal(4)) for _ in range(3))
        c = cross(u, v, w)
        for x in (u, v, w):
            assert dot(c, x) == pytest.approx(0.0, abs=1e-12)

    def test_cross_4d_basis(self):
        e1, e2, e3 = Vector4(1, 0, 0, 0), Vector4(0, 1, 0, 0), Vector4(0, 0, 1, 0)
        c = cross(e1, e2, e3)
        assert abs(c[3]) == 1.0
        np.testing.assert_array_equal(c.array[:3], [0, 0, 0])


# ═══════════════════════════════════════════════════════════════════════
# numpy operands
# ═══════════════════════════════════════════════════════════════════════


class TestNumpyOperands:

    def test_numpy_scalar_on_the_left(self):
        v = np.sqrt(4.0) * Vector3(1, 2, 3)
        assert type(v) is Vector3
        assert v == Vector3(2, 4, 6)

    def test_numpy_scalar_on_the_left_dynamic(self):
        v = np.float64(0.5) * VectorN([2.0, 4.0])
        assert type(v) is VectorN
        np.testing.assert_array_equal(v.array, [1.0, 2.0])

    def test_numpy_scalar_result_stays_usable(self):
        u = Vector3(3, 0, 4)
        v = np.max(u.array) * u
        v.normalize()
        assert v.norm() == pytest.approx(1.0)

    def test_numpy_array_on_the_left(self):
        with pytest.raises(TypeError):
            np.ones(3) * Vector3(1, 2, 3)
        with pytest.raises(TypeError):
            np.ones(3) + Vector3(1, 2, 3)
