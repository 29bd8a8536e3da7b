"""
SimpleComplexNumber: комплексное число с целыми координатами

Immutable value object (real, imaginary) над int. Сложение, вычитание,
умножение и степень замкнуты в целых числах и точны. Деление и обратное
число выводят за пределы целых, поэтому возвращают RealComplexNumber.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Final

from numkernel.contracts import check_argument, check_state, require_non_null
from numkernel.errors import PreconditionViolation
from numkernel.linear.matrix import Matrix
from numkernel.linear.rings import INTEGER_RING, Ring
from numkernel.math.math_context import (
    DEFAULT_MATH_CONTEXT,
    DEFAULT_TRIGONOMETRIC_CONTEXT,
    MathContext,
)
from numkernel.math.square_root import DEFAULT_SQUARE_ROOT_CONTEXT, SquareRootContext, sqrt
from numkernel.number.polar_form import PolarForm
from numkernel.number.real_complex import RealComplexNumber


@dataclass(frozen=True)
class SimpleComplexNumber:
    """Комплексное число real + imaginary·i над int."""

    real: int
    imaginary: int

    def __post_init__(self) -> None:
        for name in ("real", "imaginary"):
            value = getattr(self, name)
            require_non_null(value, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise PreconditionViolation(f"{name} must be int, got {type(value).__name__}")

    @classmethod
    def of(cls, real: int, imaginary: int) -> "SimpleComplexNumber":
        return cls(real, imaginary)

    def add(self, summand: "SimpleComplexNumber") -> "SimpleComplexNumber":
        require_non_null(summand, "summand")
        return SimpleComplexNumber(self.real + summand.real, self.imaginary + summand.imaginary)

    def subtract(self, subtrahend: "SimpleComplexNumber") -> "SimpleComplexNumber":
        require_non_null(subtrahend, "subtrahend")
        return SimpleComplexNumber(
            self.real - subtrahend.real, self.imaginary - subtrahend.imaginary
        )

    def multiply(self, factor: "SimpleComplexNumber") -> "SimpleComplexNumber":
        require_non_null(factor, "factor")
        return SimpleComplexNumber(
            self.real * factor.real - self.imaginary * factor.imaginary,
            self.real * factor.imaginary + self.imaginary * factor.real,
        )

    def divide(
        self, divisor: "SimpleComplexNumber", math_context: MathContext = DEFAULT_MATH_CONTEXT
    ) -> RealComplexNumber:
        """
        Деление, результат над Decimal.

        Raises:
            InvalidArgument: Если divisor == 0 (divisor not invertible)
        """
        require_non_null(divisor, "divisor")
        return self.to_real().divide(divisor.to_real(), math_context)

    def pow(self, exponent: int) -> "SimpleComplexNumber":
        """pow(0) возвращает константу ONE, pow(1): этот же объект."""
        require_non_null(exponent, "exponent")
        check_argument(exponent >= 0, "expected exponent >= 0 but actual {}", exponent)
        if exponent == 0:
            return ONE
        result = self
        for _ in range(exponent - 1):
            result = result.multiply(self)
        return result

    def negate(self) -> "SimpleComplexNumber":
        return SimpleComplexNumber(-self.real, -self.imaginary)

    def invert(self, math_context: MathContext = DEFAULT_MATH_CONTEXT) -> RealComplexNumber:
        check_state(self.invertible(), "expected to be invertible but actual {}", self)
        return ONE.divide(self, math_context)

    def invertible(self) -> bool:
        return self.real != 0 or self.imaginary != 0

    def abs_pow2(self) -> int:
        return self.real * self.real + self.imaginary * self.imaginary

    def abs(self, square_root_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT) -> Decimal:
        require_non_null(square_root_context, "square_root_context")
        return sqrt(self.abs_pow2(), square_root_context)

    def conjugate(self) -> "SimpleComplexNumber":
        return SimpleComplexNumber(self.real, -self.imaginary)

    def argument(self, math_context: MathContext = DEFAULT_TRIGONOMETRIC_CONTEXT) -> Decimal:
        check_state(self.invertible(), "expected this != 0 but actual {}", self)
        return self.to_real().argument(math_context)

    def polar_form(
        self,
        math_context: MathContext = DEFAULT_TRIGONOMETRIC_CONTEXT,
        square_root_context: SquareRootContext = DEFAULT_SQUARE_ROOT_CONTEXT,
    ) -> PolarForm:
        check_state(self.invertible(), "expected this != 0 but actual {}", self)
        return PolarForm(self.abs(square_root_context), self.argument(math_context))

    def to_real(self) -> RealComplexNumber:
        return RealComplexNumber.from_simple(self)

    def matrix(self) -> Matrix[int]:
        return (
            Matrix.builder(INTEGER_RING, 2, 2)
            .put(1, 1, self.real)
            .put(1, 2, -self.imaginary)
            .put(2, 1, self.imaginary)
            .put(2, 2, self.real)
            .build()
        )

    def __add__(self, other: object) -> "SimpleComplexNumber":
        if not isinstance(other, SimpleComplexNumber):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "SimpleComplexNumber":
        if not isinstance(other, SimpleComplexNumber):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other: object) -> "SimpleComplexNumber":
        if not isinstance(other, SimpleComplexNumber):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other: object) -> RealComplexNumber:
        if not isinstance(other, SimpleComplexNumber):
            return NotImplemented
        return self.divide(other)

    def __pow__(self, exponent: int) -> "SimpleComplexNumber":
        return self.pow(exponent)

    def __neg__(self) -> "SimpleComplexNumber":
        return self.negate()

    def __abs__(self) -> Decimal:
        return self.abs()

    def __str__(self) -> str:
        return f"{self.real} + {self.imaginary}i"


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

ZERO: Final[SimpleComplexNumber] = SimpleComplexNumber(0, 0)
ONE: Final[SimpleComplexNumber] = SimpleComplexNumber(1, 0)
IMAGINARY: Final[SimpleComplexNumber] = SimpleComplexNumber(0, 1)

SIMPLE_COMPLEX_RING: Final[Ring[SimpleComplexNumber]] = Ring(
    name="simple complex",
    element_type=SimpleComplexNumber,
    zero=ZERO,
    one=ONE,
    add=SimpleComplexNumber.add,
    subtract=SimpleComplexNumber.subtract,
    multiply=SimpleComplexNumber.multiply,
    negate=SimpleComplexNumber.negate,
    abs_pow2=SimpleComplexNumber.abs_pow2,
    magnitude=SimpleComplexNumber.abs,
    divide=None,
)
