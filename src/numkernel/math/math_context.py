"""
MathContext: точность и режим округления для Decimal-вычислений

Immutable Pydantic модель: число значащих цифр + режим округления.
Все приближённые операции ядра (деление комплексных чисел, тригонометрия,
итерации Heron's method) получают MathContext явно и никогда не читают
глобальный decimal-контекст потока.
"""

from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_05UP,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Context,
    Decimal,
)
from enum import Enum
from typing import Final

from pydantic import BaseModel, Field

# =============================================================================
# ENUMS
# =============================================================================


class RoundingMode(str, Enum):
    """Режим округления (значения совпадают с константами модуля decimal)"""

    UP = ROUND_UP
    DOWN = ROUND_DOWN
    CEILING = ROUND_CEILING
    FLOOR = ROUND_FLOOR
    HALF_UP = ROUND_HALF_UP
    HALF_DOWN = ROUND_HALF_DOWN
    HALF_EVEN = ROUND_HALF_EVEN
    ZERO_FIVE_UP = ROUND_05UP


# =============================================================================
# MATH CONTEXT MODEL
# =============================================================================


class MathContext(BaseModel):
    """
    Точность (значащие цифры) и режим округления.

    Immutable модель (frozen=True): производные контексты создаются через
    model_copy(update=...).
    """

    precision: int = Field(..., gt=0, description="Число значащих цифр")
    rounding: RoundingMode = Field(
        default=RoundingMode.HALF_UP, description="Режим округления"
    )

    model_config = {"frozen": True}  # Immutable

    def decimal_context(self) -> Context:
        """
        Новый decimal.Context с этой точностью и округлением.

        Каждый вызов возвращает свежий объект, поэтому флаги одного
        вычисления не влияют на другое.
        """
        return Context(prec=self.precision, rounding=self.rounding.value)

    def round(self, value: Decimal) -> Decimal:
        """Округление value до precision значащих цифр."""
        return self.decimal_context().plus(value)

    def __str__(self) -> str:
        return f"precision={self.precision} rounding={self.rounding.name}"


# =============================================================================
# КОНТЕКСТЫ ПО УМОЛЧАНИЮ
# =============================================================================

# Деление комплексных чисел (34 цифры, как IEEE 754 decimal128)
DEFAULT_MATH_CONTEXT: Final[MathContext] = MathContext(precision=34)

# Контекст без округления: сложение, вычитание и умножение в нём точны.
# Деление в нём запрещено (неограниченная точность для бесконечных дробей).
EXACT_CONTEXT: Final[Context] = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)

# Argument / polar form
DEFAULT_TRIGONOMETRIC_PRECISION: Final[int] = 100
DEFAULT_TRIGONOMETRIC_CONTEXT: Final[MathContext] = MathContext(
    precision=DEFAULT_TRIGONOMETRIC_PRECISION
)
