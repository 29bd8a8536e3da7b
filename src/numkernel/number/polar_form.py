"""
PolarForm: полярное представление комплексного числа

(radial, angular): модуль и угол в радианах. Обратное преобразование
radial·cos(angular) + radial·sin(angular)·i вычисляется на точности
math_context.precision + GUARD_DIGITS и округляется один раз.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from numkernel.contracts import require_non_null
from numkernel.errors import PreconditionViolation
from numkernel.math.math_context import DEFAULT_TRIGONOMETRIC_CONTEXT, MathContext
from numkernel.math.trigonometry import GUARD_DIGITS, cos, sin

if TYPE_CHECKING:
    from numkernel.number.real_complex import RealComplexNumber


@dataclass(frozen=True)
class PolarForm:
    """Модуль и угол комплексного числа."""

    radial: Decimal
    angular: Decimal

    def __post_init__(self) -> None:
        for name in ("radial", "angular"):
            value = getattr(self, name)
            require_non_null(value, name)
            if not isinstance(value, Decimal):
                raise PreconditionViolation(f"{name} must be Decimal, got {type(value).__name__}")

    def complex_number(
        self, math_context: MathContext = DEFAULT_TRIGONOMETRIC_CONTEXT
    ) -> "RealComplexNumber":
        """
        Декартово представление radial·(cos φ + i·sin φ).

        Examples:
            >>> PolarForm(Decimal(2), Decimal(0)).complex_number().real
            Decimal('2')
        """
        from numkernel.number.real_complex import RealComplexNumber

        require_non_null(math_context, "math_context")
        working = math_context.model_copy(
            update={"precision": math_context.precision + GUARD_DIGITS}
        )
        context = working.decimal_context()
        real = context.multiply(self.radial, cos(self.angular, working))
        imaginary = context.multiply(self.radial, sin(self.angular, working))
        return RealComplexNumber(math_context.round(real), math_context.round(imaginary))

    def __str__(self) -> str:
        return f"{self.radial},{self.angular}"
