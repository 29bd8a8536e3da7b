"""
Фабрики стандартных матриц и векторов
"""

from collections.abc import Iterable, Sequence
from typing import TypeVar

from numkernel.contracts import check_argument, require_non_null
from numkernel.linear.matrix import Matrix
from numkernel.linear.rings import Ring
from numkernel.linear.vector import Vector

E = TypeVar("E")


def zero_matrix(ring: Ring[E], row_size: int, column_size: int) -> Matrix[E]:
    """Матрица row_size × column_size из ring.zero."""
    require_non_null(ring, "ring")
    return Matrix.builder(ring, row_size, column_size).put_all(ring.zero).build()


def identity_matrix(ring: Ring[E], size: int) -> Matrix[E]:
    """Единичная матрица size × size."""
    require_non_null(ring, "ring")
    builder = Matrix.builder(ring, size, size)
    for index in range(1, size + 1):
        builder.put(index, index, ring.one)
    return builder.put_all(ring.zero).build()


def zero_vector(ring: Ring[E], size: int) -> Vector[E]:
    require_non_null(ring, "ring")
    return Vector.builder(ring, size).put_all(ring.zero).build()


def matrix_of(ring: Ring[E], rows: Sequence[Sequence[E]]) -> Matrix[E]:
    """
    Матрица из последовательности строк.

    Raises:
        InvalidArgument: Если rows пуст или строки разной длины

    Examples:
        >>> from numkernel.linear.rings import INTEGER_RING
        >>> str(matrix_of(INTEGER_RING, [[1, 2], [3, 4]]))
        '[1, 2; 3, 4]'
    """
    require_non_null(ring, "ring")
    require_non_null(rows, "rows")
    check_argument(len(rows) > 0, "expected at least one row but actual {}", len(rows))
    column_size = len(rows[0])
    for row in rows:
        check_argument(
            len(row) == column_size,
            "expected rows of equal length {} but actual {}",
            column_size,
            len(row),
        )
    builder = Matrix.builder(ring, len(rows), column_size)
    for row_index, row in enumerate(rows, start=1):
        for column_index, element in enumerate(row, start=1):
            builder.put(row_index, column_index, element)
    return builder.build()


def vector_of(ring: Ring[E], elements: Iterable[E]) -> Vector[E]:
    """Вектор из элементов по порядку."""
    require_non_null(ring, "ring")
    require_non_null(elements, "elements")
    staged = list(elements)
    builder = Vector.builder(ring, len(staged))
    for element in staged:
        builder.put_next(element)
    return builder.build()
