"""
Rings: описание области значений элементов матриц и векторов

Matrix и Vector обобщены по типу элемента. Всё, что им нужно знать об
элементах, собрано в дескрипторе Ring:

- zero / one: аддитивная и мультипликативная единицы
- add / subtract / multiply / negate: точная арифметика
- abs_pow2: квадрат модуля (точный)
- magnitude: модуль (для комплексных чисел через решатель sqrt)
- divide: деление с MathContext (только для колец с делением)

Кольца комплексных чисел объявлены рядом с самими типами
(numkernel.number.simple_complex, numkernel.number.real_complex).
"""

import operator
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Final, Generic, TypeVar

from numkernel.contracts import check_argument
from numkernel.math.math_context import EXACT_CONTEXT, MathContext
from numkernel.math.square_root import SquareRootContext

E = TypeVar("E")


# =============================================================================
# RING DESCRIPTOR
# =============================================================================


@dataclass(frozen=True)
class Ring(Generic[E]):
    """Арифметика и единицы одного типа элементов."""

    name: str
    element_type: type
    zero: E
    one: E
    add: Callable[[E, E], E]
    subtract: Callable[[E, E], E]
    multiply: Callable[[E, E], E]
    negate: Callable[[E], E]
    abs_pow2: Callable[[E], Any]
    magnitude: Callable[[E, SquareRootContext], Any]
    divide: Callable[[E, E, MathContext], E] | None = None

    def accepts(self, value: Any) -> bool:
        """Проверка, что value является элементом кольца."""
        return isinstance(value, self.element_type) and not isinstance(value, bool)

    def sum(self, values: Iterable[E]) -> E:
        """Сумма элементов, начиная с zero."""
        total = self.zero
        for value in values:
            total = self.add(total, value)
        return total

    @property
    def has_division(self) -> bool:
        return self.divide is not None

    def __str__(self) -> str:
        return self.name


# =============================================================================
# INTEGER / DECIMAL RINGS
# =============================================================================


INTEGER_RING: Final[Ring[int]] = Ring(
    name="integer",
    element_type=int,
    zero=0,
    one=1,
    add=operator.add,
    subtract=operator.sub,
    multiply=operator.mul,
    negate=operator.neg,
    abs_pow2=lambda element: element * element,
    magnitude=lambda element, _context: abs(element),
)

DECIMAL_RING: Final[Ring[Decimal]] = Ring(
    name="decimal",
    element_type=Decimal,
    zero=Decimal(0),
    one=Decimal(1),
    add=EXACT_CONTEXT.add,
    subtract=EXACT_CONTEXT.subtract,
    multiply=EXACT_CONTEXT.multiply,
    negate=Decimal.copy_negate,
    abs_pow2=lambda element: EXACT_CONTEXT.multiply(element, element),
    magnitude=lambda element, _context: element.copy_abs(),
    divide=lambda dividend, divisor, math_context: math_context.decimal_context().divide(
        dividend, divisor
    ),
)


# =============================================================================
# HELPERS
# =============================================================================


def check_same_ring(ring: Ring[Any], other: Ring[Any]) -> None:
    """
    Raises:
        InvalidArgument: Если операнды заданы над разными кольцами
    """
    check_argument(ring == other, "expected operand over {} ring but actual {} ring", ring, other)


def exact_sum(values: Iterable[Any]) -> Any:
    """
    Точная сумма модулей и квадратов модулей.

    Сумма int остаётся int. Если встречается Decimal, сложение идёт
    в EXACT_CONTEXT и результат: Decimal.
    """
    total: Any = 0
    for value in values:
        if isinstance(total, Decimal) or isinstance(value, Decimal):
            total = EXACT_CONTEXT.add(total, value)
        else:
            total += value
    return total
