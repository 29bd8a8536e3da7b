"""
Square Root: итеративный решатель Heron's method

Модуль вычисляет квадратные корни над Decimal и int:
- sqrt: Heron's (Newton's) method для f(x) = x² − n с настраиваемыми
  границами точности и числа итераций (SquareRootContext)
- perfect_square / sqrt_of_perfect_square: точный корень целого числа

Seed выбирается по научной записи входа n = c · 10^e (e чётное, 1 <= c < 100):
    seed = 6 · 10^(e/2)   если c >= 10
    seed = 2 · 10^(e/2)   иначе
Seed того же порядка, что и корень, поэтому итерации сходятся быстро и
предшественник никогда не близок к нулю.

Итерация:
    successor = (predecessor² + n) / (2 · predecessor)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. value < 0 → InvalidArgument
2. Остановка при |successor − predecessor| <= abort_criterion
   ИЛИ при iterations > max_iterations
3. Исчерпание max_iterations НЕ сигнализируется: возвращается лучшее
   приближение (пишется только DEBUG-запись)
4. sqrt(0) = 0 без итераций
"""

import logging
import math
from dataclasses import dataclass
from decimal import Context, Decimal
from typing import Final

from pydantic import BaseModel, Field

from numkernel.contracts import check_argument, require_non_null, validate_non_negative
from numkernel.errors import PreconditionViolation
from numkernel.math.math_context import MathContext, RoundingMode
from numkernel.math.numerical_safeguards import compare_with_tolerance

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ ПО УМОЛЧАНИЮ
# =============================================================================

DEFAULT_ABORT_CRITERION: Final[Decimal] = Decimal("1E-10")
DEFAULT_MAX_ITERATIONS: Final[int] = 10
DEFAULT_INITIAL_SCALE: Final[int] = 10
DEFAULT_SQUARE_ROOT_PRECISION: Final[int] = 128

_ONE_HUNDRED: Final[Decimal] = Decimal(100)
_TEN: Final[Decimal] = Decimal(10)


# =============================================================================
# SQUARE ROOT CONTEXT
# =============================================================================


class SquareRootContext(BaseModel):
    """
    Конфигурация решателя.

    Immutable модель (frozen=True). Значения вне области определения
    отклоняются pydantic при создании (ValidationError).
    """

    abort_criterion: Decimal = Field(
        default=DEFAULT_ABORT_CRITERION,
        gt=0,
        lt=1,
        description="Порог |successor − predecessor| для остановки, 0 < x < 1",
    )
    max_iterations: int = Field(
        default=DEFAULT_MAX_ITERATIONS, gt=0, description="Максимум итераций"
    )
    initial_scale: int = Field(
        default=DEFAULT_INITIAL_SCALE,
        ge=0,
        description="Число дробных цифр, до которого квантуется вход",
    )
    math_context: MathContext = Field(
        default_factory=lambda: MathContext(
            precision=DEFAULT_SQUARE_ROOT_PRECISION, rounding=RoundingMode.HALF_UP
        ),
        description="Точность и округление итераций",
    )

    model_config = {"frozen": True}  # Immutable


DEFAULT_SQUARE_ROOT_CONTEXT: Final[SquareRootContext] = SquareRootContext()


# =============================================================================
# SCIENTIFIC NOTATION
# =============================================================================


@dataclass(frozen=True)
class ScientificNotation:
    """Запись coefficient · 10^exponent."""

    coefficient: Decimal
    exponent: int

    def as_string(self) -> str:
        """
        Читаемая форма.

        Examples:
            >>> ScientificNotation(Decimal("2.5"), 4).as_string()
            '2.5 * 10**4'
            >>> ScientificNotation(Decimal("2.5"), -2).as_string()
            '2.5 * 10**(-2)'
        """
        coefficient = format(self.coefficient, "f")
        if self.coefficient.is_zero():
            return "0"
        if self.exponent < 0:
            return f"{coefficient} * 10**({self.exponent})"
        if self.exponent == 0:
            return coefficient
        if self.exponent == 1:
            return f"{coefficient} * 10"
        return f"{coefficient} * 10**{self.exponent}"


def scientific_notation_for_sqrt(
    value: Decimal, context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT
) -> ScientificNotation:
    """
    Разложение value = c · 10^e с чётным e и 1 <= c < 100 (для value > 0).

    Деление и умножение на 100 выполняются в контексте решателя.
    Для value == 0 возвращается (0, 0).

    Raises:
        InvalidArgument: Если value < 0
    """
    require_non_null(value, "value")
    require_non_null(context, "context")
    validate_non_negative(value, "value")

    decimal_context = context.math_context.decimal_context()
    coefficient = Decimal(value)
    exponent = 0
    if coefficient.is_zero():
        return ScientificNotation(coefficient, exponent)

    while coefficient >= _ONE_HUNDRED:
        coefficient = decimal_context.divide(coefficient, _ONE_HUNDRED)
        exponent += 2
    while coefficient < 1:
        coefficient = decimal_context.multiply(coefficient, _ONE_HUNDRED)
        exponent -= 2

    notation = ScientificNotation(coefficient, exponent)
    logger.debug("scientific notation of %s is %s", value, notation.as_string())
    return notation


# =============================================================================
# HERON'S METHOD
# =============================================================================


def sqrt(
    value: int | Decimal, context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT
) -> Decimal:
    """
    Приближённый квадратный корень.

    Args:
        value: Неотрицательное int или Decimal
        context: Конфигурация решателя (default: DEFAULT_SQUARE_ROOT_CONTEXT)

    Returns:
        Приближение √value. Если max_iterations исчерпан раньше сходимости,
        возвращается последнее приближение без ошибки.

    Raises:
        PreconditionViolation: Если value или context is None, либо value не int/Decimal
        InvalidArgument: Если value < 0

    Examples:
        >>> sqrt(Decimal(0))
        Decimal('0')
    """
    require_non_null(value, "value")
    require_non_null(context, "context")
    if isinstance(value, bool) or not isinstance(value, (int, Decimal)):
        raise PreconditionViolation(f"value must be int or Decimal, got {type(value).__name__}")
    check_argument(value >= 0, "expected value >= 0 but actual {}", value)

    decimal = Decimal(value)
    if decimal.is_zero():
        return Decimal(0)
    return _herons_method(decimal, context)


def _herons_method(decimal: Decimal, context: SquareRootContext) -> Decimal:
    abort_criterion = context.abort_criterion
    logger.debug("calculating square root of %s with abort criterion %s", decimal, abort_criterion)

    decimal_context = context.math_context.decimal_context()
    scaled = _scale(decimal, context)

    predecessor = _seed(scaled, context)
    logger.debug("seed value = %s", predecessor)

    successor = _successor(predecessor, scaled, decimal_context)
    iterations = 1
    while (
        compare_with_tolerance(successor, predecessor, abort_criterion) != 0
        and iterations <= context.max_iterations
    ):
        predecessor = successor
        successor = _successor(predecessor, scaled, decimal_context)
        iterations += 1

    if compare_with_tolerance(successor, predecessor, abort_criterion) != 0:
        logger.debug(
            "iteration budget of %s exhausted before |successor - predecessor| <= %s",
            context.max_iterations,
            abort_criterion,
        )
    logger.debug("terminated after %s iterations", iterations)
    logger.debug("sqrt(%s) = %s", decimal, successor)
    return successor


def _scale(decimal: Decimal, context: SquareRootContext) -> Decimal:
    """Квантование до initial_scale дробных цифр режимом округления контекста."""
    exponent = Decimal(1).scaleb(-context.initial_scale)
    # Точности должно хватить на все целые цифры плюс initial_scale дробных
    precision = max(
        context.math_context.precision, decimal.adjusted() + context.initial_scale + 2
    )
    quantize_context = Context(prec=precision, rounding=context.math_context.rounding.value)
    scaled = decimal.quantize(exponent, context=quantize_context)
    # Вход меньше 10^-initial_scale не должен обнуляться
    return scaled if not scaled.is_zero() else decimal


def _seed(decimal: Decimal, context: SquareRootContext) -> Decimal:
    notation = scientific_notation_for_sqrt(decimal, context)
    factor = 6 if notation.coefficient >= _TEN else 2
    return Decimal(factor).scaleb(notation.exponent // 2)


def _successor(predecessor: Decimal, decimal: Decimal, decimal_context: Context) -> Decimal:
    divisor = decimal_context.multiply(2, predecessor)
    numerator = decimal_context.add(decimal_context.power(predecessor, 2), decimal)
    successor = decimal_context.divide(numerator, divisor)
    logger.debug(
        "predecessor = %s, successor = %s, |successor - predecessor| = %s",
        predecessor,
        successor,
        decimal_context.subtract(successor, predecessor).copy_abs(),
    )
    return successor


# =============================================================================
# PERFECT SQUARES
# =============================================================================


def perfect_square(integer: int) -> bool:
    """
    Проверка, что integer = k² для целого k.

    Суммирует последовательные нечётные числа 1 + 3 + 5 + ... пока сумма
    меньше integer: сумма первых k нечётных равна k². O(√n).

    Raises:
        PreconditionViolation: Если integer is None
        InvalidArgument: Если integer < 0

    Examples:
        >>> perfect_square(49)
        True
        >>> perfect_square(50)
        False
    """
    require_non_null(integer, "integer")
    check_argument(integer >= 0, "expected integer >= 0 but actual {}", integer)

    total = 0
    odd = 1
    while total < integer:
        total += odd
        odd += 2
    return total == integer


def sqrt_of_perfect_square(integer: int) -> int:
    """
    Точный корень полного квадрата.

    Raises:
        PreconditionViolation: Если integer is None
        InvalidArgument: Если integer < 0 или не является полным квадратом

    Examples:
        >>> sqrt_of_perfect_square(144)
        12
    """
    require_non_null(integer, "integer")
    check_argument(integer >= 0, "expected integer >= 0 but actual {}", integer)
    check_argument(perfect_square(integer), "expected perfect square but actual {}", integer)
    return math.isqrt(integer)
