"""
Matrix: плотная матрица над кольцом Ring

Ключи ячеек (row, column) начинаются с 1 и покрывают весь прямоугольник
[1, row_size] × [1, column_size]. Матрица строится через
MatrixBuilder: build() отказывает, пока хотя бы одна ячейка не заполнена.
Конструктор копирует таблицу в неизменяемый кортеж строк и проверяет
прямоугольность и тип каждого элемента.

Определитель: разложение Лапласа по первой строке

    det(A) = Σ_k (−1)^(k+1) · a[1,k] · det(minor(1, k))

Сложность экспоненциальная по размеру матрицы. Для матриц, которые
встречаются в ядре (2×2 представления комплексных чисел, небольшие
системы), этого достаточно.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Каждая ячейка объявленной формы заполнена
2. Матрица неизменяема и не зависит от builder'а после build()
3. det / trace определены только для квадратных матриц (иначе InvalidState)
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from decimal import Decimal
from typing import Any, Generic, TypeVar, Union

from numkernel.contracts import check_argument, check_state, require_non_null, validate_in_range
from numkernel.linear.rings import Ring, check_same_ring, exact_sum
from numkernel.linear.vector import _UNSET, Vector
from numkernel.math.math_context import DEFAULT_MATH_CONTEXT, MathContext
from numkernel.math.square_root import DEFAULT_SQUARE_ROOT_CONTEXT, SquareRootContext, sqrt

logger = logging.getLogger(__name__)

E = TypeVar("E")


# =============================================================================
# BUILDER
# =============================================================================


class MatrixBuilder(Generic[E]):
    """
    Двухфазное построение Matrix.

    Все ячейки формы объявляются незаполненными при создании.
    Не потокобезопасен.
    """

    def __init__(self, ring: Ring[E], row_size: int, column_size: int) -> None:
        require_non_null(ring, "ring")
        require_non_null(row_size, "row_size")
        require_non_null(column_size, "column_size")
        check_argument(row_size > 0, "expected row_size > 0 but actual {}", row_size)
        check_argument(column_size > 0, "expected column_size > 0 but actual {}", column_size)
        self._ring = ring
        self._row_size = row_size
        self._column_size = column_size
        self._staged: dict[tuple[int, int], Any] = {
            (row_index, column_index): _UNSET
            for row_index in range(1, row_size + 1)
            for column_index in range(1, column_size + 1)
        }

    @property
    def ring(self) -> Ring[E]:
        return self._ring

    @property
    def row_size(self) -> int:
        return self._row_size

    @property
    def column_size(self) -> int:
        return self._column_size

    def put(self, row_index: int, column_index: int, value: E) -> "MatrixBuilder[E]":
        """
        Записать value в ячейку (row_index, column_index).

        Raises:
            PreconditionViolation: Если индекс или value is None
            InvalidArgument: Если ячейка вне формы или value не элемент кольца
        """
        require_non_null(row_index, "row_index")
        require_non_null(column_index, "column_index")
        require_non_null(value, "value")
        self._check_key(row_index, column_index)
        self._check_element(value)
        self._staged[(row_index, column_index)] = value
        return self

    def put_all(self, value: E) -> "MatrixBuilder[E]":
        """Заполнить value все ещё незаполненные ячейки."""
        require_non_null(value, "value")
        self._check_element(value)
        for key, staged in self._staged.items():
            if staged is _UNSET:
                self._staged[key] = value
        return self

    def element(self, row_index: int, column_index: int) -> E | None:
        require_non_null(row_index, "row_index")
        require_non_null(column_index, "column_index")
        self._check_key(row_index, column_index)
        staged = self._staged[(row_index, column_index)]
        return None if staged is _UNSET else staged

    def build(self) -> "Matrix[E]":
        """
        Raises:
            InvalidState: Если хотя бы одна ячейка не заполнена
        """
        missing = [key for key, staged in self._staged.items() if staged is _UNSET]
        check_state(not missing, "expected all elements set but cells {} are unset", missing)
        rows = tuple(
            tuple(
                self._staged[(row_index, column_index)]
                for column_index in range(1, self._column_size + 1)
            )
            for row_index in range(1, self._row_size + 1)
        )
        return Matrix(self._ring, rows)

    def _check_key(self, row_index: int, column_index: int) -> None:
        validate_in_range(row_index, "row_index", 1, self.row_size)
        validate_in_range(column_index, "column_index", 1, self.column_size)

    def _check_element(self, value: Any) -> None:
        check_argument(
            self._ring.accepts(value),
            "expected element of {} ring but actual {!r}",
            self._ring,
            value,
        )


# =============================================================================
# MATRIX
# =============================================================================


class Matrix(Generic[E]):
    """Неизменяемая плотная матрица."""

    __slots__ = ("_ring", "_rows")

    def __init__(self, ring: Ring[E], rows: Iterable[Iterable[E]]) -> None:
        """
        Raises:
            PreconditionViolation: Если ring, rows или элемент None
            InvalidArgument: Если таблица пустая, рваная или содержит чужой элемент
        """
        require_non_null(ring, "ring")
        require_non_null(rows, "rows")
        table = tuple(tuple(row) for row in rows)
        check_argument(len(table) > 0, "expected row_size > 0 but actual {}", len(table))
        column_size = len(table[0])
        check_argument(column_size > 0, "expected column_size > 0 but actual {}", column_size)
        for row in table:
            check_argument(
                len(row) == column_size,
                "expected rows of equal length {} but actual {}",
                column_size,
                len(row),
            )
            for element in row:
                require_non_null(element, "element")
                check_argument(
                    ring.accepts(element), "expected element of {} ring but actual {!r}", ring, element
                )
        self._ring = ring
        self._rows = table

    @classmethod
    def builder(cls, ring: Ring[E], row_size: int, column_size: int) -> MatrixBuilder[E]:
        return MatrixBuilder(ring, row_size, column_size)

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    @property
    def ring(self) -> Ring[E]:
        return self._ring

    @property
    def row_size(self) -> int:
        return len(self._rows)

    @property
    def column_size(self) -> int:
        return len(self._rows[0])

    @property
    def size(self) -> int:
        """Число ячеек row_size · column_size."""
        return self.row_size * self.column_size

    def row_indexes(self) -> range:
        return range(1, self.row_size + 1)

    def column_indexes(self) -> range:
        return range(1, self.column_size + 1)

    def element(self, row_index: int, column_index: int) -> E:
        """
        Raises:
            InvalidArgument: Если ячейка вне формы
        """
        require_non_null(row_index, "row_index")
        require_non_null(column_index, "column_index")
        self._check_row_index(row_index)
        self._check_column_index(column_index)
        return self._rows[row_index - 1][column_index - 1]

    def row(self, row_index: int) -> dict[int, E]:
        """Копия строки {column_index: element}."""
        require_non_null(row_index, "row_index")
        self._check_row_index(row_index)
        return dict(zip(self.column_indexes(), self._rows[row_index - 1]))

    def column(self, column_index: int) -> dict[int, E]:
        """Копия столбца {row_index: element}."""
        require_non_null(column_index, "column_index")
        self._check_column_index(column_index)
        return {
            row_index: row[column_index - 1] for row_index, row in zip(self.row_indexes(), self._rows)
        }

    def rows(self) -> dict[int, dict[int, E]]:
        return {row_index: self.row(row_index) for row_index in self.row_indexes()}

    def columns(self) -> dict[int, dict[int, E]]:
        return {column_index: self.column(column_index) for column_index in self.column_indexes()}

    def cells(self) -> tuple[tuple[int, int, E], ...]:
        """Ячейки (row_index, column_index, element) построчно."""
        return tuple(
            (row_index, column_index, element)
            for row_index, row in zip(self.row_indexes(), self._rows)
            for column_index, element in zip(self.column_indexes(), row)
        )

    def elements(self) -> tuple[E, ...]:
        """Элементы построчно."""
        return tuple(element for row in self._rows for element in row)

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, summand: "Matrix[E]") -> "Matrix[E]":
        self._check_same_shape(summand, "summand")
        return self._map_pairs(summand, self._ring.add)

    def subtract(self, subtrahend: "Matrix[E]") -> "Matrix[E]":
        self._check_same_shape(subtrahend, "subtrahend")
        return self._map_pairs(subtrahend, self._ring.subtract)

    def multiply(self, factor: "Matrix[E]") -> "Matrix[E]":
        """
        Произведение матриц: ячейка (i, j): скалярное произведение
        строки i и столбца j.

        Raises:
            InvalidArgument: Если column_size != factor.row_size
        """
        require_non_null(factor, "factor")
        check_same_ring(self._ring, factor._ring)
        check_argument(
            self.column_size == factor.row_size,
            "expected column_size == factor.row_size but actual {} != {}",
            self.column_size,
            factor.row_size,
        )
        factor_columns = [tuple(row[j] for row in factor._rows) for j in range(factor.column_size)]
        builder = Matrix.builder(self._ring, self.row_size, factor.column_size)
        for row_index, row in zip(self.row_indexes(), self._rows):
            for column_index, column in zip(factor.column_indexes(), factor_columns):
                builder.put(row_index, column_index, self._multiply_row_with_column(row, column))
        return builder.build()

    def multiply_vector(self, vector: Vector[E]) -> Vector[E]:
        """
        Raises:
            InvalidArgument: Если column_size != vector.size
        """
        require_non_null(vector, "vector")
        check_same_ring(self._ring, vector.ring)
        check_argument(
            self.column_size == vector.size,
            "expected column_size == vector.size but actual {} != {}",
            self.column_size,
            vector.size,
        )
        builder = Vector.builder(self._ring, self.row_size)
        for row_index, row in zip(self.row_indexes(), self._rows):
            builder.put(row_index, self._multiply_row_with_column(row, vector.elements()))
        return builder.build()

    def scalar_multiply(self, scalar: E) -> "Matrix[E]":
        require_non_null(scalar, "scalar")
        check_argument(
            self._ring.accepts(scalar), "expected element of {} ring but actual {!r}", self._ring, scalar
        )
        return self._map(lambda element: self._ring.multiply(scalar, element))

    def negate(self) -> "Matrix[E]":
        return self.scalar_multiply(self._ring.negate(self._ring.one))

    def transpose(self) -> "Matrix[E]":
        builder = Matrix.builder(self._ring, self.column_size, self.row_size)
        for row_index, column_index, element in self.cells():
            builder.put(column_index, row_index, element)
        return builder.build()

    # -------------------------------------------------------------------------
    # Миноры, след, определитель, обратная
    # -------------------------------------------------------------------------

    def minor(self, row_index: int, column_index: int) -> "Matrix[E]":
        """
        Матрица без строки row_index и столбца column_index.

        Оставшиеся строки и столбцы перенумеровываются подряд с 1.

        Raises:
            InvalidArgument: Если индекс вне формы
            InvalidState: Если row_size == 1 или column_size == 1
        """
        require_non_null(row_index, "row_index")
        require_non_null(column_index, "column_index")
        self._check_row_index(row_index)
        self._check_column_index(column_index)
        check_state(
            self.row_size > 1 and self.column_size > 1,
            "expected row_size > 1 and column_size > 1 but actual {} x {}",
            self.row_size,
            self.column_size,
        )
        builder = Matrix.builder(self._ring, self.row_size - 1, self.column_size - 1)
        for old_row, old_column, element in self.cells():
            if old_row == row_index or old_column == column_index:
                continue
            new_row = old_row - 1 if old_row > row_index else old_row
            new_column = old_column - 1 if old_column > column_index else old_column
            builder.put(new_row, new_column, element)
        return builder.build()

    def trace(self) -> E:
        """
        Raises:
            InvalidState: Если матрица не квадратная
        """
        self._check_square()
        return self._ring.sum(self._rows[i][i] for i in range(self.row_size))

    def determinant(self) -> E:
        """
        Определитель разложением Лапласа по первой строке.

        Raises:
            InvalidState: Если матрица не квадратная

        Examples:
            >>> from numkernel.linear.factories import matrix_of
            >>> from numkernel.linear.rings import INTEGER_RING
            >>> matrix_of(INTEGER_RING, [[1, 2], [3, 4]]).determinant()
            -2
        """
        self._check_square()
        if self.row_size == 1:
            return self._rows[0][0]

        total = self._ring.zero
        for column_index, element in zip(self.column_indexes(), self._rows[0]):
            term = self._ring.multiply(element, self.minor(1, column_index).determinant())
            # (−1)^(1+k): плюс для нечётных k
            if column_index % 2 == 1:
                total = self._ring.add(total, term)
            else:
                total = self._ring.subtract(total, term)
        return total

    def det(self) -> E:
        return self.determinant()

    def invertible(self) -> bool:
        """Квадратная и det != zero."""
        return self.square() and self.determinant() != self._ring.zero

    def adjugate(self) -> "Matrix[E]":
        """
        Присоединённая матрица: adj[i, j] = (−1)^(i+j) · det(minor(j, i)).

        Raises:
            InvalidState: Если матрица не квадратная
        """
        self._check_square()
        if self.row_size == 1:
            return Matrix.builder(self._ring, 1, 1).put(1, 1, self._ring.one).build()

        builder = Matrix.builder(self._ring, self.row_size, self.column_size)
        for row_index in self.row_indexes():
            for column_index in self.column_indexes():
                cofactor = self.minor(column_index, row_index).determinant()
                if (row_index + column_index) % 2 == 1:
                    cofactor = self._ring.negate(cofactor)
                builder.put(row_index, column_index, cofactor)
        return builder.build()

    def inverse(self, math_context: MathContext = DEFAULT_MATH_CONTEXT) -> "Matrix[E]":
        """
        Обратная матрица adjugate / det, каждая ячейка делится в math_context.

        Raises:
            InvalidState: Если кольцо без деления или матрица не обратима
        """
        require_non_null(math_context, "math_context")
        check_state(
            self._ring.has_division, "expected ring with division but actual {}", self._ring
        )
        self._check_square()
        determinant = self.determinant()
        check_state(
            determinant != self._ring.zero, "expected invertible matrix but actual det = {}", determinant
        )
        logger.debug("Inverse of %s x %s matrix, det=%s", self.row_size, self.column_size, determinant)
        divide = self._ring.divide
        return self.adjugate()._map(lambda element: divide(element, determinant, math_context))

    # -------------------------------------------------------------------------
    # Структурные предикаты
    # -------------------------------------------------------------------------

    def square(self) -> bool:
        return self.row_size == self.column_size

    def upper_triangular(self) -> bool:
        """Квадратная и все ячейки ниже диагонали равны zero."""
        if not self.square():
            return False
        zero = self._ring.zero
        return all(
            element == zero
            for row_index, column_index, element in self.cells()
            if row_index > column_index
        )

    def lower_triangular(self) -> bool:
        """Квадратная и все ячейки выше диагонали равны zero."""
        if not self.square():
            return False
        zero = self._ring.zero
        return all(
            element == zero
            for row_index, column_index, element in self.cells()
            if row_index < column_index
        )

    def triangular(self) -> bool:
        return self.upper_triangular() or self.lower_triangular()

    def diagonal(self) -> bool:
        return self.upper_triangular() and self.lower_triangular()

    def identity(self) -> bool:
        if not self.diagonal():
            return False
        one = self._ring.one
        return all(self._rows[i][i] == one for i in range(self.row_size))

    def symmetric(self) -> bool:
        return self.square() and self == self.transpose()

    def skew_symmetric(self) -> bool:
        return self.square() and self == self.transpose().negate()

    # -------------------------------------------------------------------------
    # Нормы
    # -------------------------------------------------------------------------

    def max_abs_row_sum_norm(
        self, square_root_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT
    ) -> Any:
        """max_i Σ_j |a[i, j]|"""
        require_non_null(square_root_context, "square_root_context")
        magnitude = self._ring.magnitude
        return max(
            exact_sum(magnitude(element, square_root_context) for element in row)
            for row in self._rows
        )

    def max_abs_column_sum_norm(
        self, square_root_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT
    ) -> Any:
        """max_j Σ_i |a[i, j]|"""
        return self.transpose().max_abs_row_sum_norm(square_root_context)

    def max_norm(self, square_root_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT) -> Any:
        """max |a[i, j]|"""
        require_non_null(square_root_context, "square_root_context")
        return max(
            self._ring.magnitude(element, square_root_context) for element in self.elements()
        )

    def frobenius_norm_pow2(self) -> Any:
        """Σ |a[i, j]|² (точно)"""
        return exact_sum(self._ring.abs_pow2(element) for element in self.elements())

    def frobenius_norm(
        self, square_root_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT
    ) -> Decimal:
        require_non_null(square_root_context, "square_root_context")
        return sqrt(self.frobenius_norm_pow2(), square_root_context)

    # -------------------------------------------------------------------------
    # Внутреннее
    # -------------------------------------------------------------------------

    def _multiply_row_with_column(self, row: tuple[E, ...], column: tuple[E, ...]) -> E:
        return self._ring.sum(self._ring.multiply(a, b) for a, b in zip(row, column))

    def _map(self, operation: Callable[[E], E]) -> "Matrix[E]":
        builder = Matrix.builder(self._ring, self.row_size, self.column_size)
        for row_index, column_index, element in self.cells():
            builder.put(row_index, column_index, operation(element))
        return builder.build()

    def _map_pairs(self, other: "Matrix[E]", operation: Callable[[E, E], E]) -> "Matrix[E]":
        builder = Matrix.builder(self._ring, self.row_size, self.column_size)
        for row_index, column_index, element in self.cells():
            builder.put(
                row_index,
                column_index,
                operation(element, other._rows[row_index - 1][column_index - 1]),
            )
        return builder.build()

    def _check_same_shape(self, other: "Matrix[E]", name: str) -> None:
        require_non_null(other, name)
        check_same_ring(self._ring, other._ring)
        check_argument(
            self.row_size == other.row_size,
            "expected equal row sizes but actual {} != {}",
            self.row_size,
            other.row_size,
        )
        check_argument(
            self.column_size == other.column_size,
            "expected equal column sizes but actual {} != {}",
            self.column_size,
            other.column_size,
        )

    def _check_square(self) -> None:
        check_state(
            self.square(),
            "expected square matrix but actual {} x {}",
            self.row_size,
            self.column_size,
        )

    def _check_row_index(self, row_index: int) -> None:
        validate_in_range(row_index, "row_index", 1, self.row_size)

    def _check_column_index(self, column_index: int) -> None:
        validate_in_range(column_index, "column_index", 1, self.column_size)

    # -------------------------------------------------------------------------
    # Протокол Python
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "Matrix[E]":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "Matrix[E]":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> "Matrix[E]":
        return self.negate()

    def __matmul__(self, other: object) -> Union["Matrix[E]", Vector[E]]:
        if isinstance(other, Matrix):
            return self.multiply(other)
        if isinstance(other, Vector):
            return self.multiply_vector(other)
        return NotImplemented

    def __iter__(self) -> Iterator[tuple[E, ...]]:
        return iter(self._rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._ring == other._ring and self._rows == other._rows

    def __hash__(self) -> int:
        return hash((self._ring.name, self._rows))

    def __str__(self) -> str:
        return "[" + "; ".join(", ".join(str(element) for element in row) for row in self._rows) + "]"

    def __repr__(self) -> str:
        return f"Matrix(ring={self._ring.name}, rows={self})"
