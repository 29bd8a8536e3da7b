"""
Numerical Safeguards: сравнения Decimal с толерантностью

Точная арифметика (int, Decimal без контекста) сравнивается через ==.
Приближённые результаты (sqrt, тригонометрия, деление) сравниваются только
через функции этого модуля с явно заданной толерантностью.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Толерантность всегда строго положительная
2. Сравнение симметрично: is_close(a, b) == is_close(b, a)
3. Все операции детерминированы и не зависят от глобального decimal-контекста
"""

from decimal import Decimal
from typing import Final

from numkernel.contracts import require_non_null, validate_positive
from numkernel.math.math_context import EXACT_CONTEXT

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Толерантность по умолчанию для сравнения приближённых результатов
EPS_DECIMAL_COMPARE: Final[Decimal] = Decimal("1E-10")


# =============================================================================
# EPSILON-СРАВНЕНИЯ DECIMAL
# =============================================================================


def is_close(a: Decimal, b: Decimal, tolerance: Decimal = EPS_DECIMAL_COMPARE) -> bool:
    """
    Абсолютное сравнение: |a - b| <= tolerance.

    Разность вычисляется точно (без округления контекстом).

    Examples:
        >>> is_close(Decimal("1.00000000001"), Decimal("1"))
        True
        >>> is_close(Decimal("1.1"), Decimal("1"))
        False
    """
    return compare_with_tolerance(a, b, tolerance) == 0


def compare_with_tolerance(
    a: Decimal,
    b: Decimal,
    tolerance: Decimal = EPS_DECIMAL_COMPARE,
) -> int:
    """
    Сравнение двух Decimal с учётом толерантности.

    Args:
        a: Первое значение
        b: Второе значение
        tolerance: Абсолютная толерантность (> 0)

    Returns:
        -1 если a < b (с учётом tolerance)
         0 если |a - b| <= tolerance
        +1 если a > b (с учётом tolerance)

    Raises:
        PreconditionViolation: Если один из аргументов None
        InvalidArgument: Если tolerance <= 0
    """
    require_non_null(a, "a")
    require_non_null(b, "b")
    validate_positive(tolerance, "tolerance")

    diff = EXACT_CONTEXT.subtract(Decimal(a), Decimal(b))

    if diff.copy_abs() <= tolerance:
        return 0
    elif diff < 0:
        return -1
    else:
        return 1
