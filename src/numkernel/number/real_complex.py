"""
RealComplexNumber: комплексное число с Decimal-координатами

Immutable value object (real, imaginary) над Decimal.

Арифметика без MathContext точна (сложение, вычитание, умножение выполняются
в EXACT_CONTEXT). Варианты с math_context округляют каждую операцию.
Деление всегда округляет: числители вычисляются точно, затем одно деление
в контексте.

Argument (угол) с учётом квадранта:
    real > 0:             atan(im / re)
    real < 0, im >= 0:    atan(im / re) + π
    real < 0, im < 0:     atan(im / re) − π
    real == 0:            ±π/2 по знаку im
    ноль:                 InvalidState

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Обе части всегда Decimal (не None)
2. pow(0) возвращает константу ONE, pow(1): сам объект
3. abs(): единственная точка, где точная арифметика становится приближённой
   (через решатель sqrt)
"""

from dataclasses import dataclass
from decimal import Context, Decimal
from typing import TYPE_CHECKING, Any, Final

from numkernel.contracts import check_argument, check_state, require_non_null
from numkernel.errors import PreconditionViolation
from numkernel.linear.matrix import Matrix
from numkernel.linear.rings import DECIMAL_RING, Ring
from numkernel.math.math_context import (
    DEFAULT_MATH_CONTEXT,
    DEFAULT_TRIGONOMETRIC_CONTEXT,
    EXACT_CONTEXT,
    MathContext,
    RoundingMode,
)
from numkernel.math.numerical_safeguards import EPS_DECIMAL_COMPARE, is_close
from numkernel.math.square_root import DEFAULT_SQUARE_ROOT_CONTEXT, SquareRootContext, sqrt
from numkernel.math.trigonometry import GUARD_DIGITS, atan, pi
from numkernel.number.polar_form import PolarForm

if TYPE_CHECKING:
    from numkernel.number.simple_complex import SimpleComplexNumber


def _to_decimal(value: Any, name: str) -> Decimal:
    require_non_null(value, name)
    if isinstance(value, bool):
        raise PreconditionViolation(f"{name} must be a number, got bool")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # Как BigDecimal.valueOf(double): кратчайшее десятичное представление
        return Decimal(repr(value))
    if isinstance(value, (int, str)):
        return Decimal(value)
    raise PreconditionViolation(f"{name} must be int, float, str or Decimal, got {type(value).__name__}")


def _guarded(math_context: MathContext) -> MathContext:
    return math_context.model_copy(update={"precision": math_context.precision + GUARD_DIGITS})


# =============================================================================
# REAL COMPLEX NUMBER
# =============================================================================


@dataclass(frozen=True)
class RealComplexNumber:
    """Комплексное число real + imaginary·i над Decimal."""

    real: Decimal
    imaginary: Decimal

    def __post_init__(self) -> None:
        for name in ("real", "imaginary"):
            value = getattr(self, name)
            require_non_null(value, name)
            if not isinstance(value, Decimal):
                raise PreconditionViolation(
                    f"{name} must be Decimal, got {type(value).__name__} (use RealComplexNumber.of)"
                )

    @classmethod
    def of(cls, real: Any, imaginary: Any) -> "RealComplexNumber":
        """
        Создание из int, float, str или Decimal.

        Examples:
            >>> str(RealComplexNumber.of(1, "2.5"))
            '1 + 2.5i'
        """
        return cls(_to_decimal(real, "real"), _to_decimal(imaginary, "imaginary"))

    @classmethod
    def from_simple(cls, simple: "SimpleComplexNumber") -> "RealComplexNumber":
        """Точное преобразование из целочисленного комплексного числа."""
        require_non_null(simple, "simple")
        return cls(Decimal(simple.real), Decimal(simple.imaginary))

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def add(
        self, summand: "RealComplexNumber", math_context: MathContext | None = None
    ) -> "RealComplexNumber":
        require_non_null(summand, "summand")
        context = _context(math_context)
        return RealComplexNumber(
            context.add(self.real, summand.real),
            context.add(self.imaginary, summand.imaginary),
        )

    def subtract(
        self, subtrahend: "RealComplexNumber", math_context: MathContext | None = None
    ) -> "RealComplexNumber":
        require_non_null(subtrahend, "subtrahend")
        context = _context(math_context)
        return RealComplexNumber(
            context.subtract(self.real, subtrahend.real),
            context.subtract(self.imaginary, subtrahend.imaginary),
        )

    def multiply(
        self, factor: "RealComplexNumber", math_context: MathContext | None = None
    ) -> "RealComplexNumber":
        """(a + bi)(c + di) = (ac − bd) + (ad + bc)i"""
        require_non_null(factor, "factor")
        context = _context(math_context)
        new_real = context.subtract(
            context.multiply(self.real, factor.real),
            context.multiply(self.imaginary, factor.imaginary),
        )
        new_imaginary = context.add(
            context.multiply(self.real, factor.imaginary),
            context.multiply(self.imaginary, factor.real),
        )
        return RealComplexNumber(new_real, new_imaginary)

    def divide(
        self, divisor: "RealComplexNumber", math_context: MathContext = DEFAULT_MATH_CONTEXT
    ) -> "RealComplexNumber":
        """
        Деление с округлением до math_context.

        (a + bi) / (c + di) = ((ac + bd) + (bc − ad)i) / (c² + d²)

        Raises:
            PreconditionViolation: Если divisor или math_context is None
            InvalidArgument: Если divisor == 0 (divisor not invertible)
        """
        require_non_null(divisor, "divisor")
        require_non_null(math_context, "math_context")
        real_numerator, imaginary_numerator, denominator = self._quotient_parts(divisor)
        context = math_context.decimal_context()
        return RealComplexNumber(
            context.divide(real_numerator, denominator),
            context.divide(imaginary_numerator, denominator),
        )

    def divide_to_scale(
        self,
        divisor: "RealComplexNumber",
        scale: int,
        rounding: RoundingMode = RoundingMode.HALF_UP,
    ) -> "RealComplexNumber":
        """
        Деление с округлением обеих частей до scale дробных цифр.

        Raises:
            InvalidArgument: Если divisor == 0 или scale < 0
        """
        require_non_null(divisor, "divisor")
        require_non_null(scale, "scale")
        check_argument(scale >= 0, "expected scale >= 0 but actual {}", scale)
        real_numerator, imaginary_numerator, denominator = self._quotient_parts(divisor)
        return RealComplexNumber(
            _divide_to_scale(real_numerator, denominator, scale, rounding),
            _divide_to_scale(imaginary_numerator, denominator, scale, rounding),
        )

    def _quotient_parts(self, divisor: "RealComplexNumber") -> tuple[Decimal, Decimal, Decimal]:
        check_argument(
            divisor.invertible(), "divisor not invertible: expected divisor != 0 but actual {}", divisor
        )
        denominator = divisor.abs_pow2()
        real_numerator = EXACT_CONTEXT.add(
            EXACT_CONTEXT.multiply(self.real, divisor.real),
            EXACT_CONTEXT.multiply(self.imaginary, divisor.imaginary),
        )
        imaginary_numerator = EXACT_CONTEXT.subtract(
            EXACT_CONTEXT.multiply(self.imaginary, divisor.real),
            EXACT_CONTEXT.multiply(self.real, divisor.imaginary),
        )
        return real_numerator, imaginary_numerator, denominator

    def pow(self, exponent: int, math_context: MathContext | None = None) -> "RealComplexNumber":
        """
        Степень повторным умножением.

        pow(0) возвращает константу ONE, pow(1): этот же объект.

        Raises:
            InvalidArgument: Если exponent < 0
        """
        require_non_null(exponent, "exponent")
        check_argument(exponent >= 0, "expected exponent >= 0 but actual {}", exponent)
        if exponent == 0:
            return ONE
        result = self
        for _ in range(exponent - 1):
            result = result.multiply(self, math_context)
        return result

    def negate(self, math_context: MathContext | None = None) -> "RealComplexNumber":
        if math_context is None:
            return RealComplexNumber(self.real.copy_negate(), self.imaginary.copy_negate())
        context = math_context.decimal_context()
        return RealComplexNumber(context.minus(self.real), context.minus(self.imaginary))

    def invert(self, math_context: MathContext = DEFAULT_MATH_CONTEXT) -> "RealComplexNumber":
        """
        Обратное число 1 / this.

        Raises:
            InvalidState: Если this == 0
        """
        check_state(self.invertible(), "expected to be invertible but actual {}", self)
        return ONE.divide(self, math_context)

    def invertible(self) -> bool:
        return not (self.real.is_zero() and self.imaginary.is_zero())

    def conjugate(self, math_context: MathContext | None = None) -> "RealComplexNumber":
        if math_context is None:
            return RealComplexNumber(self.real, self.imaginary.copy_negate())
        return RealComplexNumber(self.real, math_context.decimal_context().minus(self.imaginary))

    # -------------------------------------------------------------------------
    # Модуль и угол
    # -------------------------------------------------------------------------

    def abs_pow2(self, math_context: MathContext | None = None) -> Decimal:
        """Квадрат модуля re² + im² (точный, если math_context не задан)."""
        context = _context(math_context)
        return context.add(
            context.multiply(self.real, self.real),
            context.multiply(self.imaginary, self.imaginary),
        )

    def abs(self, square_root_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT) -> Decimal:
        """Модуль √(re² + im²) через решатель Heron's method."""
        require_non_null(square_root_context, "square_root_context")
        return sqrt(self.abs_pow2(), square_root_context)

    def argument(self, math_context: MathContext = DEFAULT_TRIGONOMETRIC_CONTEXT) -> Decimal:
        """
        Угол в радианах в (−π, π].

        Raises:
            InvalidState: Если this == 0
        """
        check_state(self.invertible(), "expected this != 0 but actual {}", self)
        require_non_null(math_context, "math_context")

        working = _guarded(math_context)
        context = working.decimal_context()
        if not self.real.is_zero():
            arctan = atan(context.divide(self.imaginary, self.real), working)
            if self.real > 0:
                return math_context.round(arctan)
            if self.imaginary >= 0:
                return math_context.round(context.add(arctan, pi(working)))
            return math_context.round(context.subtract(arctan, pi(working)))

        half_pi = context.divide(pi(working), 2)
        return math_context.round(half_pi if self.imaginary > 0 else half_pi.copy_negate())

    def polar_form(
        self,
        math_context: MathContext = DEFAULT_TRIGONOMETRIC_CONTEXT,
        square_root_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
    ) -> PolarForm:
        """
        Полярная форма (abs, argument).

        Raises:
            InvalidState: Если this == 0
        """
        check_state(self.invertible(), "expected this != 0 but actual {}", self)
        return PolarForm(self.abs(square_root_context), self.argument(math_context))

    # -------------------------------------------------------------------------
    # Сравнение и представления
    # -------------------------------------------------------------------------

    def is_close_to(
        self, other: "RealComplexNumber", tolerance: Decimal = EPS_DECIMAL_COMPARE
    ) -> bool:
        """Обе части отличаются не более чем на tolerance."""
        require_non_null(other, "other")
        return is_close(self.real, other.real, tolerance) and is_close(
            self.imaginary, other.imaginary, tolerance
        )

    def matrix(self) -> Matrix[Decimal]:
        """Матрица {{re, −im}, {im, re}}, изоморфная умножению на это число."""
        return (
            Matrix.builder(DECIMAL_RING, 2, 2)
            .put(1, 1, self.real)
            .put(1, 2, self.imaginary.copy_negate())
            .put(2, 1, self.imaginary)
            .put(2, 2, self.real)
            .build()
        )

    def __add__(self, other: object) -> "RealComplexNumber":
        if not isinstance(other, RealComplexNumber):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "RealComplexNumber":
        if not isinstance(other, RealComplexNumber):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: object) -> "RealComplexNumber":
        if not isinstance(other, RealComplexNumber):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: object) -> "RealComplexNumber":
        if not isinstance(other, RealComplexNumber):
            return NotImplemented
        return self.divide(other)

    def __pow__(self, exponent: int) -> "RealComplexNumber":
        return self.pow(exponent)

    def __neg__(self) -> "RealComplexNumber":
        return self.negate()

    def __abs__(self) -> Decimal:
        return self.abs()

    def __str__(self) -> str:
        return f"{self.real} + {self.imaginary}i"


def _context(math_context: MathContext | None) -> Context:
    return EXACT_CONTEXT if math_context is None else math_context.decimal_context()


def _divide_to_scale(
    numerator: Decimal, denominator: Decimal, scale: int, rounding: RoundingMode
) -> Decimal:
    exponent = Decimal(1).scaleb(-scale)
    # Целые цифры частного + scale дробных + запас
    precision = max(numerator.adjusted() - denominator.adjusted() + 2, 1) + scale + GUARD_DIGITS
    quotient = Context(prec=precision).divide(numerator, denominator)
    return quotient.quantize(exponent, rounding=rounding.value, context=Context(prec=precision))


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

ZERO: Final[RealComplexNumber] = RealComplexNumber(Decimal(0), Decimal(0))
ONE: Final[RealComplexNumber] = RealComplexNumber(Decimal(1), Decimal(0))
IMAGINARY: Final[RealComplexNumber] = RealComplexNumber(Decimal(0), Decimal(1))

REAL_COMPLEX_RING: Final[Ring[RealComplexNumber]] = Ring(
    name="real complex",
    element_type=RealComplexNumber,
    zero=ZERO,
    one=ONE,
    add=RealComplexNumber.add,
    subtract=RealComplexNumber.subtract,
    multiply=RealComplexNumber.multiply,
    negate=RealComplexNumber.negate,
    abs_pow2=RealComplexNumber.abs_pow2,
    magnitude=RealComplexNumber.abs,
    divide=RealComplexNumber.divide,
)
