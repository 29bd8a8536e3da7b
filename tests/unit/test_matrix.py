"""
Тесты для Matrix и MatrixBuilder

Проверяет:
1. Дисциплину builder'а (форма, полнота, типы, защитная копия)
2. Доступ к ячейкам, строкам и столбцам
3. Арифметику и транспонирование
4. Миноры, след, определитель (разложение Лапласа), adjugate, inverse
5. Структурные предикаты
6. Нормы
7. Матрицы над комплексными кольцами
"""

from decimal import Decimal

import pytest

from numkernel.errors import InvalidArgument, InvalidState, PreconditionViolation
from numkernel.linear import (
    DECIMAL_RING,
    INTEGER_RING,
    Matrix,
    identity_matrix,
    matrix_of,
    vector_of,
)
from numkernel.number import REAL_COMPLEX_RING, SIMPLE_COMPLEX_RING, RealComplexNumber, SimpleComplexNumber


@pytest.fixture
def m2() -> Matrix[int]:
    return matrix_of(INTEGER_RING, [[1, 2], [3, 4]])


@pytest.fixture
def m2x3() -> Matrix[int]:
    return matrix_of(INTEGER_RING, [[1, 2, 3], [4, 5, 6]])


def dec(rows) -> Matrix[Decimal]:
    return matrix_of(DECIMAL_RING, [[Decimal(str(element)) for element in row] for row in rows])


# =============================================================================
# BUILDER
# =============================================================================


class TestMatrixBuilder:
    """Тесты для MatrixBuilder"""

    def test_build_complete(self) -> None:
        matrix = Matrix.builder(INTEGER_RING, 1, 2).put(1, 1, 5).put(1, 2, 6).build()
        assert matrix.row_size == 1
        assert matrix.column_size == 2
        assert matrix.element(1, 2) == 6

    @pytest.mark.parametrize("row_size, column_size", [(0, 1), (1, 0), (-1, 2)])
    def test_non_positive_dimensions_rejected(self, row_size: int, column_size: int) -> None:
        with pytest.raises(InvalidArgument):
            Matrix.builder(INTEGER_RING, row_size, column_size)

    @pytest.mark.parametrize("row_index, column_index", [(0, 1), (3, 1), (1, 0), (1, 3)])
    def test_put_outside_shape_rejected(self, row_index: int, column_index: int) -> None:
        with pytest.raises(InvalidArgument, match="expected (row|column)_index in"):
            Matrix.builder(INTEGER_RING, 2, 2).put(row_index, column_index, 1)

    def test_put_none_rejected(self) -> None:
        with pytest.raises(PreconditionViolation, match="value must not be None"):
            Matrix.builder(INTEGER_RING, 2, 2).put(1, 1, None)

    def test_put_wrong_element_type_rejected(self) -> None:
        with pytest.raises(InvalidArgument, match="expected element of integer ring"):
            Matrix.builder(INTEGER_RING, 2, 2).put(1, 1, Decimal(1))
        with pytest.raises(InvalidArgument):
            Matrix.builder(INTEGER_RING, 2, 2).put(1, 1, True)

    def test_incomplete_build_rejected(self) -> None:
        builder = Matrix.builder(INTEGER_RING, 2, 2).put(1, 1, 1).put(2, 2, 1)
        with pytest.raises(InvalidState, match="unset"):
            builder.build()

    def test_put_all_fills_only_unset(self) -> None:
        matrix = Matrix.builder(INTEGER_RING, 2, 2).put(1, 2, 7).put_all(0).build()
        assert matrix == matrix_of(INTEGER_RING, [[0, 7], [0, 0]])

    def test_element_of_builder(self) -> None:
        builder = Matrix.builder(INTEGER_RING, 2, 2).put(2, 1, 9)
        assert builder.element(2, 1) == 9
        assert builder.element(1, 1) is None

    def test_built_matrix_independent_of_builder(self) -> None:
        builder = Matrix.builder(INTEGER_RING, 1, 1).put(1, 1, 1)
        matrix = builder.build()
        builder.put(1, 1, 2)
        assert matrix.element(1, 1) == 1
        assert builder.build().element(1, 1) == 2


class TestMatrixConstructor:
    """Тесты прямого вызова конструктора Matrix"""

    def test_rows_are_copied(self) -> None:
        rows = [[1, 2], [3, 4]]
        matrix = Matrix(INTEGER_RING, rows)
        rows[0][0] = 99
        assert matrix.element(1, 1) == 1
        assert matrix == matrix_of(INTEGER_RING, [[1, 2], [3, 4]])

    def test_ragged_rows_rejected(self) -> None:
        with pytest.raises(InvalidArgument, match="expected rows of equal length 2 but actual 1"):
            Matrix(INTEGER_RING, [[1, 2], [3]])

    def test_empty_rows_rejected(self) -> None:
        with pytest.raises(InvalidArgument, match="expected row_size > 0 but actual 0"):
            Matrix(INTEGER_RING, [])
        with pytest.raises(InvalidArgument, match="expected column_size > 0 but actual 0"):
            Matrix(INTEGER_RING, [[]])

    def test_foreign_element_rejected(self) -> None:
        with pytest.raises(InvalidArgument, match="expected element of integer ring"):
            Matrix(INTEGER_RING, [[1, Decimal("2.5")]])

    def test_none_element_rejected(self) -> None:
        with pytest.raises(PreconditionViolation):
            Matrix(INTEGER_RING, [[1, None]])


# =============================================================================
# ДОСТУП
# =============================================================================


class TestAccessors:
    """Тесты доступа"""

    def test_sizes(self, m2: Matrix[int], m2x3: Matrix[int]) -> None:
        assert m2.size == 4
        assert (m2x3.row_size, m2x3.column_size, m2x3.size) == (2, 3, 6)
        assert list(m2x3.row_indexes()) == [1, 2]
        assert list(m2x3.column_indexes()) == [1, 2, 3]
        assert m2.ring is INTEGER_RING

    def test_element_out_of_range(self, m2: Matrix[int]) -> None:
        with pytest.raises(InvalidArgument, match=r"expected row_index in \[1, 2\] but actual 3"):
            m2.element(3, 1)

    def test_rows_and_columns(self, m2x3: Matrix[int]) -> None:
        assert m2x3.row(2) == {1: 4, 2: 5, 3: 6}
        assert m2x3.column(3) == {1: 3, 2: 6}
        assert m2x3.rows() == {1: {1: 1, 2: 2, 3: 3}, 2: {1: 4, 2: 5, 3: 6}}
        assert m2x3.columns()[1] == {1: 1, 2: 4}

    def test_row_is_a_copy(self, m2: Matrix[int]) -> None:
        row = m2.row(1)
        row[1] = 100
        assert m2.element(1, 1) == 1

    def test_cells_and_elements(self, m2: Matrix[int]) -> None:
        assert m2.cells() == ((1, 1, 1), (1, 2, 2), (2, 1, 3), (2, 2, 4))
        assert m2.elements() == (1, 2, 3, 4)

    def test_str(self, m2: Matrix[int]) -> None:
        assert str(m2) == "[1, 2; 3, 4]"


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestArithmetic:
    """Тесты арифметики"""

    def test_add_subtract(self, m2: Matrix[int]) -> None:
        other = matrix_of(INTEGER_RING, [[4, 3], [2, 1]])
        assert m2.add(other) == matrix_of(INTEGER_RING, [[5, 5], [5, 5]])
        assert m2 - other == matrix_of(INTEGER_RING, [[-3, -1], [1, 3]])

    def test_add_shape_mismatch_rejected(self, m2: Matrix[int], m2x3: Matrix[int]) -> None:
        with pytest.raises(InvalidArgument, match="expected equal column sizes"):
            m2 + m2x3

    def test_ring_mismatch_rejected(self, m2: Matrix[int]) -> None:
        decimal_matrix = matrix_of(DECIMAL_RING, [[Decimal(1), Decimal(2)], [Decimal(3), Decimal(4)]])
        with pytest.raises(InvalidArgument, match="expected operand over integer ring but actual decimal ring"):
            m2 + decimal_matrix
        with pytest.raises(InvalidArgument, match="expected operand over integer ring"):
            m2 - decimal_matrix
        with pytest.raises(InvalidArgument, match="expected operand over integer ring"):
            m2 @ decimal_matrix
        with pytest.raises(InvalidArgument, match="expected operand over integer ring"):
            m2.multiply_vector(vector_of(DECIMAL_RING, [Decimal(1), Decimal(1)]))

    def test_multiply(self, m2: Matrix[int]) -> None:
        other = matrix_of(INTEGER_RING, [[5, 6], [7, 8]])
        assert m2.multiply(other) == matrix_of(INTEGER_RING, [[19, 22], [43, 50]])
        assert m2 @ other == m2.multiply(other)

    def test_multiply_rectangular(self, m2: Matrix[int], m2x3: Matrix[int]) -> None:
        product = m2 @ m2x3
        assert (product.row_size, product.column_size) == (2, 3)
        assert product.row(1) == {1: 9, 2: 12, 3: 15}

    def test_multiply_mismatch_rejected(self, m2: Matrix[int], m2x3: Matrix[int]) -> None:
        with pytest.raises(InvalidArgument, match="expected column_size == factor.row_size but actual 3 != 2"):
            m2x3.multiply(m2)

    def test_multiply_vector(self, m2: Matrix[int]) -> None:
        assert m2.multiply_vector(vector_of(INTEGER_RING, [1, 1])) == vector_of(INTEGER_RING, [3, 7])
        assert m2 @ vector_of(INTEGER_RING, [1, 0]) == vector_of(INTEGER_RING, [1, 3])

    def test_multiply_vector_mismatch_rejected(self, m2: Matrix[int]) -> None:
        with pytest.raises(InvalidArgument, match="expected column_size == vector.size"):
            m2.multiply_vector(vector_of(INTEGER_RING, [1, 2, 3]))

    def test_scalar_multiply_and_negate(self, m2: Matrix[int]) -> None:
        assert m2.scalar_multiply(2) == matrix_of(INTEGER_RING, [[2, 4], [6, 8]])
        assert -m2 == matrix_of(INTEGER_RING, [[-1, -2], [-3, -4]])

    def test_transpose(self, m2x3: Matrix[int]) -> None:
        transposed = m2x3.transpose()
        assert transposed == matrix_of(INTEGER_RING, [[1, 4], [2, 5], [3, 6]])
        assert transposed.transpose() == m2x3


# =============================================================================
# МИНОРЫ, СЛЕД, ОПРЕДЕЛИТЕЛЬ, ОБРАТНАЯ
# =============================================================================


class TestDeterminant:
    """Тесты миноров, следа и определителя"""

    def test_minor_reindexes(self) -> None:
        matrix = matrix_of(INTEGER_RING, [[1, 2, 3], [4, 5, 6], [7, 8, 9]])
        assert matrix.minor(2, 2) == matrix_of(INTEGER_RING, [[1, 3], [7, 9]])
        assert matrix.minor(1, 3) == matrix_of(INTEGER_RING, [[4, 5], [7, 8]])
        assert matrix.minor(3, 1) == matrix_of(INTEGER_RING, [[2, 3], [5, 6]])

    def test_minor_out_of_range_rejected(self, m2: Matrix[int]) -> None:
        with pytest.raises(InvalidArgument):
            m2.minor(3, 1)

    def test_minor_of_single_row_rejected(self) -> None:
        with pytest.raises(InvalidState):
            matrix_of(INTEGER_RING, [[1, 2, 3]]).minor(1, 1)

    def test_trace(self) -> None:
        assert matrix_of(INTEGER_RING, [[1, 2, 3], [4, 5, 6], [7, 8, 9]]).trace() == 15

    def test_det_one_by_one(self) -> None:
        assert matrix_of(INTEGER_RING, [[-7]]).det() == -7

    def test_det_two_by_two(self) -> None:
        a, b, c, d = 3, 8, 4, 6
        assert matrix_of(INTEGER_RING, [[a, b], [c, d]]).det() == a * d - b * c

    def test_det_three_by_three(self) -> None:
        assert matrix_of(INTEGER_RING, [[6, 1, 1], [4, -2, 5], [2, 8, 7]]).determinant() == -306

    def test_det_four_by_four(self) -> None:
        matrix = matrix_of(INTEGER_RING, [[1, 0, 2, -1], [3, 0, 0, 5], [2, 1, 4, -3], [1, 0, 5, 0]])
        assert matrix.determinant() == 30

    def test_det_triangular_is_diagonal_product(self) -> None:
        matrix = matrix_of(INTEGER_RING, [[1, 2, 3, 4], [0, 5, 6, 7], [0, 0, 8, 9], [0, 0, 0, 10]])
        assert matrix.determinant() == 400

    def test_det_decimal(self) -> None:
        assert dec([["0.5", "1.5"], ["2", "4"]]).det() == Decimal("-1")

    def test_non_square_example(self, m2x3: Matrix[int]) -> None:
        assert not m2x3.square()
        with pytest.raises(InvalidState, match="expected square matrix but actual 2 x 3"):
            m2x3.det()
        with pytest.raises(InvalidState):
            m2x3.trace()

    def test_invertible(self, m2: Matrix[int], m2x3: Matrix[int]) -> None:
        assert m2.invertible()
        assert not matrix_of(INTEGER_RING, [[1, 2], [2, 4]]).invertible()
        assert not m2x3.invertible()


class TestInverse:
    """Тесты adjugate / inverse"""

    def test_adjugate(self) -> None:
        matrix = matrix_of(INTEGER_RING, [[4, 7], [2, 6]])
        assert matrix.adjugate() == matrix_of(INTEGER_RING, [[6, -7], [-2, 4]])

    def test_adjugate_times_matrix_is_det_identity(self) -> None:
        matrix = matrix_of(INTEGER_RING, [[6, 1, 1], [4, -2, 5], [2, 8, 7]])
        expected = identity_matrix(INTEGER_RING, 3).scalar_multiply(matrix.det())
        assert matrix @ matrix.adjugate() == expected

    def test_inverse_decimal(self) -> None:
        matrix = dec([[4, 7], [2, 6]])
        inverse = matrix.inverse()
        assert inverse == dec([["0.6", "-0.7"], ["-0.2", "0.4"]])
        assert matrix @ inverse == identity_matrix(DECIMAL_RING, 2)

    def test_inverse_one_by_one(self) -> None:
        assert dec([[4]]).inverse() == dec([["0.25"]])

    def test_inverse_of_singular_rejected(self) -> None:
        with pytest.raises(InvalidState, match="expected invertible matrix"):
            dec([[1, 2], [2, 4]]).inverse()

    def test_inverse_without_division_rejected(self, m2: Matrix[int]) -> None:
        with pytest.raises(InvalidState, match="expected ring with division"):
            m2.inverse()


# =============================================================================
# СТРУКТУРНЫЕ ПРЕДИКАТЫ
# =============================================================================


class TestPredicates:
    """Тесты структурных предикатов"""

    def test_identity_example(self) -> None:
        identity = identity_matrix(INTEGER_RING, 2)
        assert identity.diagonal()
        assert identity.det() == 1
        assert identity.symmetric()
        assert not identity.skew_symmetric()
        assert identity.identity()

    def test_triangular(self) -> None:
        upper = matrix_of(INTEGER_RING, [[1, 2], [0, 3]])
        lower = matrix_of(INTEGER_RING, [[1, 0], [2, 3]])
        assert upper.upper_triangular() and not upper.lower_triangular()
        assert lower.lower_triangular() and not lower.upper_triangular()
        assert upper.triangular() and lower.triangular()
        assert not upper.diagonal()

    def test_diagonal_iff_upper_and_lower(self, m2: Matrix[int]) -> None:
        for matrix in [m2, matrix_of(INTEGER_RING, [[2, 0], [0, 3]]), matrix_of(INTEGER_RING, [[1, 0], [5, 1]])]:
            assert matrix.diagonal() == (matrix.upper_triangular() and matrix.lower_triangular())

    def test_symmetric_iff_equal_to_transpose(self, m2: Matrix[int]) -> None:
        symmetric = matrix_of(INTEGER_RING, [[1, 2], [2, 1]])
        assert symmetric.symmetric() and symmetric == symmetric.transpose()
        assert not m2.symmetric() and m2 != m2.transpose()

    def test_skew_symmetric(self) -> None:
        assert matrix_of(INTEGER_RING, [[0, 2], [-2, 0]]).skew_symmetric()
        assert not matrix_of(INTEGER_RING, [[1, 2], [-2, 0]]).skew_symmetric()

    def test_identity_requires_ones(self) -> None:
        assert not matrix_of(INTEGER_RING, [[2, 0], [0, 1]]).identity()

    def test_non_square_predicates_false(self, m2x3: Matrix[int]) -> None:
        assert not m2x3.upper_triangular()
        assert not m2x3.lower_triangular()
        assert not m2x3.triangular()
        assert not m2x3.diagonal()
        assert not m2x3.symmetric()
        assert not m2x3.skew_symmetric()
        assert not m2x3.identity()


# =============================================================================
# НОРМЫ
# =============================================================================


class TestNorms:
    """Тесты норм"""

    @pytest.fixture
    def signed(self) -> Matrix[int]:
        return matrix_of(INTEGER_RING, [[1, -2], [-3, 4]])

    def test_integer_norms(self, signed: Matrix[int]) -> None:
        assert signed.max_abs_row_sum_norm() == 7
        assert signed.max_abs_column_sum_norm() == 6
        assert signed.max_norm() == 4
        assert signed.frobenius_norm_pow2() == 30

    def test_frobenius_norm(self, signed: Matrix[int]) -> None:
        assert abs(signed.frobenius_norm() - Decimal("5.477225575051661")) < Decimal("1E-14")

    def test_decimal_norms(self) -> None:
        matrix = dec([["-1.5", "0.5"], ["2", "-0.25"]])
        assert matrix.max_abs_row_sum_norm() == Decimal("2.25")
        assert matrix.max_abs_column_sum_norm() == Decimal("3.5")
        assert matrix.max_norm() == Decimal(2)
        assert matrix.frobenius_norm_pow2() == Decimal("6.5625")


# =============================================================================
# КОМПЛЕКСНЫЕ КОЛЬЦА
# =============================================================================


class TestComplexRings:
    """Матрицы над SimpleComplexNumber и RealComplexNumber"""

    def test_simple_complex_determinant(self) -> None:
        i = SimpleComplexNumber(0, 1)
        one = SimpleComplexNumber(1, 0)
        matrix = matrix_of(SIMPLE_COMPLEX_RING, [[i, one], [one, i]])
        assert matrix.det() == SimpleComplexNumber(-2, 0)
        assert matrix.invertible()
        assert str(matrix) == "[0 + 1i, 1 + 0i; 1 + 0i, 0 + 1i]"

    def test_simple_complex_inverse_rejected(self) -> None:
        one = SimpleComplexNumber(1, 0)
        with pytest.raises(InvalidState, match="expected ring with division"):
            matrix_of(SIMPLE_COMPLEX_RING, [[one]]).inverse()

    def test_simple_complex_max_norm(self) -> None:
        matrix = matrix_of(SIMPLE_COMPLEX_RING, [[SimpleComplexNumber(3, 4), SimpleComplexNumber(1, 0)]])
        assert abs(matrix.max_norm() - 5) <= Decimal("1E-10")
        assert matrix.frobenius_norm_pow2() == 26

    def test_real_complex_inverse(self) -> None:
        i = RealComplexNumber.of(0, 1)
        one = RealComplexNumber.of(1, 0)
        matrix = matrix_of(REAL_COMPLEX_RING, [[i, one], [one, i]])
        inverse = matrix.inverse()
        half = RealComplexNumber.of("0.5", 0)
        minus_half_i = RealComplexNumber.of(0, "-0.5")
        assert inverse == matrix_of(REAL_COMPLEX_RING, [[minus_half_i, half], [half, minus_half_i]])
        assert matrix @ inverse == identity_matrix(REAL_COMPLEX_RING, 2)

    def test_wrong_complex_type_rejected(self) -> None:
        with pytest.raises(InvalidArgument):
            Matrix.builder(REAL_COMPLEX_RING, 1, 1).put(1, 1, SimpleComplexNumber(1, 0))
