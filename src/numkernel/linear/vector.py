"""
Vector: плотный вектор над кольцом Ring

Индексы начинаются с 1. Вектор строится через VectorBuilder:
builder заранее объявляет все индексы незаполненными, build() проверяет,
что заполнен каждый. Конструктор копирует значения в неизменяемый кортеж
и проверяет тип каждого элемента.

Модули элементов (taxicab_norm, max_norm, euclidean_norm) берутся через
ring.magnitude; для комплексных колец это вызов решателя sqrt.
"""

from collections.abc import Iterable, Iterator
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from numkernel.contracts import check_argument, check_state, require_non_null, validate_in_range
from numkernel.linear.rings import Ring, check_same_ring, exact_sum
from numkernel.math.square_root import DEFAULT_SQUARE_ROOT_CONTEXT, SquareRootContext, sqrt

if TYPE_CHECKING:
    from numkernel.linear.matrix import Matrix

E = TypeVar("E")

# Маркер незаполненной ячейки builder'а
_UNSET: Any = object()


# =============================================================================
# BUILDER
# =============================================================================


class VectorBuilder(Generic[E]):
    """
    Двухфазное построение Vector.

    Не потокобезопасен: один владелец заполняет и один раз вызывает build().
    """

    def __init__(self, ring: Ring[E], size: int) -> None:
        require_non_null(ring, "ring")
        require_non_null(size, "size")
        check_argument(size > 0, "expected size > 0 but actual {}", size)
        self._ring = ring
        self._size = size
        self._staged: dict[int, Any] = dict.fromkeys(range(1, size + 1), _UNSET)

    @property
    def ring(self) -> Ring[E]:
        return self._ring

    @property
    def size(self) -> int:
        return self._size

    def put(self, index: int, value: E) -> "VectorBuilder[E]":
        """
        Записать value по индексу.

        Raises:
            PreconditionViolation: Если index или value is None
            InvalidArgument: Если index вне [1, size] или value не элемент кольца
        """
        require_non_null(index, "index")
        require_non_null(value, "value")
        self._check_index(index)
        self._check_element(value)
        self._staged[index] = value
        return self

    def put_next(self, value: E) -> "VectorBuilder[E]":
        """Записать value в наименьший незаполненный индекс."""
        require_non_null(value, "value")
        unset = [index for index, staged in self._staged.items() if staged is _UNSET]
        check_state(bool(unset), "expected unset index but builder of size {} is full", self._size)
        return self.put(unset[0], value)

    def put_all(self, value: E) -> "VectorBuilder[E]":
        """Заполнить value все ещё незаполненные индексы."""
        require_non_null(value, "value")
        self._check_element(value)
        for index, staged in self._staged.items():
            if staged is _UNSET:
                self._staged[index] = value
        return self

    def element(self, index: int) -> E | None:
        require_non_null(index, "index")
        self._check_index(index)
        staged = self._staged[index]
        return None if staged is _UNSET else staged

    def build(self) -> "Vector[E]":
        """
        Raises:
            InvalidState: Если хотя бы один индекс не заполнен
        """
        missing = [index for index, staged in self._staged.items() if staged is _UNSET]
        check_state(not missing, "expected all elements set but indexes {} are unset", missing)
        return Vector(self._ring, tuple(self._staged[index] for index in range(1, self._size + 1)))

    def _check_index(self, index: int) -> None:
        validate_in_range(index, "index", 1, self._size)

    def _check_element(self, value: Any) -> None:
        check_argument(
            self._ring.accepts(value),
            "expected element of {} ring but actual {!r}",
            self._ring,
            value,
        )


# =============================================================================
# VECTOR
# =============================================================================


class Vector(Generic[E]):
    """Неизменяемый плотный вектор."""

    __slots__ = ("_ring", "_elements")

    def __init__(self, ring: Ring[E], elements: Iterable[E]) -> None:
        """
        Raises:
            PreconditionViolation: Если ring, elements или элемент None
            InvalidArgument: Если элементов нет или элемент не из кольца
        """
        require_non_null(ring, "ring")
        require_non_null(elements, "elements")
        values = tuple(elements)
        check_argument(len(values) > 0, "expected size > 0 but actual {}", len(values))
        for element in values:
            require_non_null(element, "element")
            check_argument(
                ring.accepts(element), "expected element of {} ring but actual {!r}", ring, element
            )
        self._ring = ring
        self._elements = values

    @classmethod
    def builder(cls, ring: Ring[E], size: int) -> VectorBuilder[E]:
        return VectorBuilder(ring, size)

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    @property
    def ring(self) -> Ring[E]:
        return self._ring

    @property
    def size(self) -> int:
        return len(self._elements)

    def element(self, index: int) -> E:
        require_non_null(index, "index")
        validate_in_range(index, "index", 1, self.size)
        return self._elements[index - 1]

    def elements(self) -> tuple[E, ...]:
        return self._elements

    def indexes(self) -> range:
        return range(1, self.size + 1)

    def entries(self) -> dict[int, E]:
        """Копия {index: element}."""
        return dict(zip(self.indexes(), self._elements))

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(self, summand: "Vector[E]") -> "Vector[E]":
        self._check_same_size(summand, "summand")
        return self._map_pairs(summand, self._ring.add)

    def subtract(self, subtrahend: "Vector[E]") -> "Vector[E]":
        self._check_same_size(subtrahend, "subtrahend")
        return self._map_pairs(subtrahend, self._ring.subtract)

    def scalar_multiply(self, scalar: E) -> "Vector[E]":
        require_non_null(scalar, "scalar")
        check_argument(
            self._ring.accepts(scalar), "expected element of {} ring but actual {!r}", self._ring, scalar
        )
        builder = Vector.builder(self._ring, self.size)
        for index, element in zip(self.indexes(), self._elements):
            builder.put(index, self._ring.multiply(scalar, element))
        return builder.build()

    def negate(self) -> "Vector[E]":
        return self.scalar_multiply(self._ring.negate(self._ring.one))

    def dot_product(self, other: "Vector[E]") -> E:
        """Σ aᵢ·bᵢ (без комплексного сопряжения)."""
        self._check_same_size(other, "other")
        return self._ring.sum(
            self._ring.multiply(a, b) for a, b in zip(self._elements, other._elements)
        )

    def dyadic_product(self, other: "Vector[E]") -> "Matrix[E]":
        """Внешнее произведение: матрица size × other.size с ячейками aᵢ·bⱼ."""
        from numkernel.linear.matrix import Matrix

        require_non_null(other, "other")
        check_same_ring(self._ring, other._ring)
        builder = Matrix.builder(self._ring, self.size, other.size)
        for row_index, a in zip(self.indexes(), self._elements):
            for column_index, b in zip(other.indexes(), other._elements):
                builder.put(row_index, column_index, self._ring.multiply(a, b))
        return builder.build()

    def orthogonal_to(self, other: "Vector[E]") -> bool:
        return self.dot_product(other) == self._ring.zero

    # -------------------------------------------------------------------------
    # Нормы и расстояния
    # -------------------------------------------------------------------------

    def taxicab_norm(self, square_root_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT) -> Any:
        """Σ |aᵢ|"""
        return exact_sum(self._magnitudes(square_root_context))

    def euclidean_norm_pow2(self) -> Any:
        """Σ |aᵢ|² (точно)"""
        return exact_sum(self._ring.abs_pow2(element) for element in self._elements)

    def euclidean_norm(
        self, square_root_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT
    ) -> Decimal:
        require_non_null(square_root_context, "square_root_context")
        return sqrt(self.euclidean_norm_pow2(), square_root_context)

    def max_norm(self, square_root_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT) -> Any:
        """max |aᵢ|"""
        return max(self._magnitudes(square_root_context))

    def taxicab_distance(
        self, other: "Vector[E]", square_root_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT
    ) -> Any:
        return self.subtract(other).taxicab_norm(square_root_context)

    def euclidean_distance_pow2(self, other: "Vector[E]") -> Any:
        return self.subtract(other).euclidean_norm_pow2()

    def euclidean_distance(
        self, other: "Vector[E]", square_root_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT
    ) -> Decimal:
        return self.subtract(other).euclidean_norm(square_root_context)

    def max_distance(
        self, other: "Vector[E]", square_root_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT
    ) -> Any:
        return self.subtract(other).max_norm(square_root_context)

    # -------------------------------------------------------------------------
    # Внутреннее
    # -------------------------------------------------------------------------

    def _magnitudes(self, square_root_context: SquareRootContext) -> list[Any]:
        require_non_null(square_root_context, "square_root_context")
        return [self._ring.magnitude(element, square_root_context) for element in self._elements]

    def _check_same_size(self, other: "Vector[E]", name: str) -> None:
        require_non_null(other, name)
        check_same_ring(self._ring, other._ring)
        check_argument(
            self.size == other.size, "expected equal sizes but actual {} != {}", self.size, other.size
        )

    def _map_pairs(self, other: "Vector[E]", operation: Any) -> "Vector[E]":
        builder = Vector.builder(self._ring, self.size)
        for index, a, b in zip(self.indexes(), self._elements, other._elements):
            builder.put(index, operation(a, b))
        return builder.build()

    # -------------------------------------------------------------------------
    # Протокол Python
    # -------------------------------------------------------------------------

    def __add__(self, other: object) -> "Vector[E]":
        if not isinstance(other, Vector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "Vector[E]":
        if not isinstance(other, Vector):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> "Vector[E]":
        return self.negate()

    def __len__(self) -> int:
        return self.size

    def __iter__(self) -> Iterator[E]:
        return iter(self._elements)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return self._ring == other._ring and self._elements == other._elements

    def __hash__(self) -> int:
        return hash((self._ring.name, self._elements))

    def __str__(self) -> str:
        return "(" + ", ".join(str(element) for element in self._elements) + ")"

    def __repr__(self) -> str:
        return f"Vector(ring={self._ring.name}, elements={self})"
