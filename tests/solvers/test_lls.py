"""
Tests for linear least squares (normal equations and QR path).
"""

import numpy as np
import pytest

from pymathpack.core.exceptions import DimensionMismatchError, SingularMatrixError
from pymathpack.primitives.matrices import MatrixN
from pymathpack.primitives.vectors import VectorN
from pymathpack.solvers import lls, lls_qr


@pytest.fixture
def line_fit_data(rng):
    """Noisy samples of y = 2 + 0.5 t, design matrix [1, t]."""
    t = np.linspace(0.0, 10.0, 40)
    D = np.column_stack([np.ones_like(t), t])
    y = 2.0 + 0.5 * t + rng.standard_normal(t.size) * 0.01
    return D, y


class TestNormalEquations:

    def test_matches_numpy_lstsq(self, line_fit_data):
        D, y = line_fit_data
        X = lls(MatrixN(D), VectorN(y))
        expected = np.linalg.lstsq(D, y, rcond=None)[0]
        assert isinstance(X, VectorN)
        np.testing.assert_allclose(X.array, expected, rtol=1e-9)

    def test_recovers_coefficients(self, line_fit_data):
        D, y = line_fit_data
        X = lls(MatrixN(D), VectorN(y))
        np.testing.assert_allclose(X.array, [2.0, 0.5], atol=0.02)

    def test_exact_square_system(self):
        D = MatrixN([[2.0, 0.0], [0.0, 4.0]])
        X = lls(D, VectorN([2.0, 2.0]))
        np.testing.assert_allclose(X.array, [1.0, 0.5])

    def test_multiple_rhs(self, line_fit_data):
        D, y = line_fit_data
        B = np.column_stack([y, 2 * y])
        X = lls(MatrixN(D), MatrixN(B))
        assert X.shape == (2, 2)
        np.testing.assert_allclose(X.array[:, 1], 2 * X.array[:, 0], rtol=1e-9)

    def test_explicit_output(self, line_fit_data):
        D, y = line_fit_data
        X = VectorN(2)
        assert lls(MatrixN(D), VectorN(y), X) is X

    def test_inputs_not_modified(self, line_fit_data):
        D, y = line_fit_data
        Dm, ym = MatrixN(D), VectorN(y)
        lls(Dm, ym)
        np.testing.assert_array_equal(Dm.array, D)
        np.testing.assert_array_equal(ym.array, y)

    def test_rank_deficient(self):
        D = MatrixN([[1.0, 2.0], [2.0, 4.0], [3.0, 6.0]])
        with pytest.raises(SingularMatrixError):
            lls(D, VectorN([1.0, 2.0, 3.0]))

    def test_row_mismatch(self):
        with pytest.raises(DimensionMismatchError, match="D has 3 rows"):
            lls(MatrixN(3, 2), VectorN(4))


class TestQRPath:

    def test_agrees_with_normal_equations(self, line_fit_data):
        D, y = line_fit_data
        X1 = lls(MatrixN(D), VectorN(y))
        X2 = lls_qr(MatrixN(D), VectorN(y))
        np.testing.assert_allclose(X2.array, X1.array, rtol=1e-9)

    def test_ill_conditioned_polynomial_fit(self):
        # Vandermonde design: the QR path keeps more digits than D^T D
        t = np.linspace(0.0, 1.0, 30)
        D = np.vander(t, 8, increasing=True)
        coef = np.arange(1.0, 9.0)
        X = lls_qr(MatrixN(D), VectorN(D @ coef))
        np.testing.assert_allclose(X.array, coef, rtol=1e-6)

    def test_matrix_rhs(self, line_fit_data):
        D, y = line_fit_data
        X = lls_qr(MatrixN(D), MatrixN(np.column_stack([y, -y])))
        assert isinstance(X, MatrixN)
        np.testing.assert_allclose(X.array[:, 1], -X.array[:, 0], rtol=1e-12)

    def test_rank_deficient(self):
        D = MatrixN([[1.0, 0.0], [2.0, 0.0], [3.0, 0.0]])
        with pytest.raises(SingularMatrixError, match="rank deficient"):
            lls_qr(D, VectorN([1.0, 2.0, 3.0]))

    def test_underdetermined(self):
        with pytest.raises(DimensionMismatchError, match="rows >= cols"):
            lls_qr(MatrixN(2, 3), VectorN(2))
