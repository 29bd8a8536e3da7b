"""
Trigonometry: тригонометрия произвольной точности над Decimal

Функции pi, atan, sin, cos вычисляются на точности
math_context.precision + GUARD_DIGITS и округляются до math_context на выходе.

Алгоритмы:
- pi: ряд из документации модуля decimal (сходимость ~0.6 цифры на член)
- atan: свёртка |x| > 1 через ±π/2 − atan(1/x), затем двукратное
  уполовинивание угла x / (1 + √(1 + x²)) и ряд Тейлора
- sin, cos: приведение аргумента по модулю 2π и ряд Тейлора

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Глобальный decimal-контекст потока не читается и не изменяется
2. Результат округлён ровно один раз, режимом из math_context
"""

from decimal import ROUND_HALF_EVEN, Context, Decimal, localcontext
from functools import lru_cache
from typing import Final

from numkernel.contracts import require_non_null
from numkernel.math.math_context import MathContext

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Дополнительные цифры для промежуточных вычислений
GUARD_DIGITS: Final[int] = 10

# Число уполовиниваний угла перед рядом atan: |x| <= tan(π/16) ≈ 0.199
ATAN_HALVINGS: Final[int] = 2


def _working_context(precision: int) -> Context:
    return Context(prec=precision, rounding=ROUND_HALF_EVEN)


# =============================================================================
# PI
# =============================================================================


@lru_cache(maxsize=32)
def _pi_at(precision: int) -> Decimal:
    """π с precision значащими цифрами (кэшируется по точности)."""
    with localcontext(_working_context(precision + 2)):
        three = Decimal(3)
        lasts, t, s, n, na, d, da = 0, three, 3, 1, 0, 0, 24
        while s != lasts:
            lasts = s
            n, na = n + na, na + 8
            d, da = d + da, da + 32
            t = (t * n) / d
            s += t
    return _working_context(precision).plus(s)


def pi(math_context: MathContext) -> Decimal:
    """
    Число π с точностью math_context.

    Examples:
        >>> str(pi(MathContext(precision=10)))
        '3.141592654'
    """
    require_non_null(math_context, "math_context")
    return math_context.round(_pi_at(math_context.precision + GUARD_DIGITS))


# =============================================================================
# ARCTANGENT
# =============================================================================


def atan(x: Decimal, math_context: MathContext) -> Decimal:
    """
    Арктангенс x в радианах, результат в (-π/2, π/2).

    Args:
        x: Аргумент
        math_context: Точность и округление результата

    Returns:
        atan(x), округлённый до math_context

    Raises:
        PreconditionViolation: Если x или math_context is None
    """
    require_non_null(x, "x")
    require_non_null(math_context, "math_context")
    working_precision = math_context.precision + GUARD_DIGITS
    with localcontext(_working_context(working_precision)):
        result = _atan(Decimal(x), working_precision)
    return math_context.round(result)


def _atan(x: Decimal, working_precision: int) -> Decimal:
    # Вызывается внутри localcontext с working_precision
    if x.is_zero():
        return Decimal(0)

    if x.copy_abs() > 1:
        half_pi = _pi_at(working_precision) / 2
        folded = _atan(1 / x, working_precision)
        return half_pi - folded if x > 0 else -half_pi - folded

    for _ in range(ATAN_HALVINGS):
        x = x / (1 + (1 + x * x).sqrt())

    x_squared = x * x
    term = x
    total = x
    lasts = Decimal(0)
    n = 1
    while total != lasts:
        lasts = total
        term *= -x_squared
        n += 2
        total += term / n

    return total * (2**ATAN_HALVINGS)


# =============================================================================
# SINE / COSINE
# =============================================================================


def _reduce_angle(x: Decimal, working_precision: int) -> Decimal:
    """Приведение угла в [-π, π]."""
    two_pi = 2 * _pi_at(working_precision + GUARD_DIGITS)
    turns = (x / two_pi).to_integral_value(rounding=ROUND_HALF_EVEN)
    if turns.is_zero():
        return x
    return x - turns * two_pi


def cos(x: Decimal, math_context: MathContext) -> Decimal:
    """
    Косинус x (радианы).

    Examples:
        >>> cos(Decimal(0), MathContext(precision=5))
        Decimal('1')
    """
    require_non_null(x, "x")
    require_non_null(math_context, "math_context")
    working_precision = math_context.precision + GUARD_DIGITS
    with localcontext(_working_context(working_precision)):
        x = _reduce_angle(Decimal(x), working_precision)
        i, lasts, total, fact, num, sign = 0, 0, Decimal(1), 1, Decimal(1), 1
        while total != lasts:
            lasts = total
            i += 2
            fact *= i * (i - 1)
            num *= x * x
            sign *= -1
            total += num / fact * sign
    return math_context.round(total)


def sin(x: Decimal, math_context: MathContext) -> Decimal:
    """
    Синус x (радианы).

    Examples:
        >>> sin(Decimal(0), MathContext(precision=5))
        Decimal('0')
    """
    require_non_null(x, "x")
    require_non_null(math_context, "math_context")
    working_precision = math_context.precision + GUARD_DIGITS
    with localcontext(_working_context(working_precision)):
        x = _reduce_angle(Decimal(x), working_precision)
        i, lasts, total, fact, num, sign = 1, 0, x, 1, x, 1
        while total != lasts:
            lasts = total
            i += 2
            fact *= i * (i - 1)
            num *= x * x
            sign *= -1
            total += num / fact * sign
    return math_context.round(total)
