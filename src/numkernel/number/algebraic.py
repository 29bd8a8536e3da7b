"""
AlgebraicValue: общий контракт комплексных чисел

Структурный протокол: SimpleComplexNumber и RealComplexNumber реализуют его
напрямую, без общего базового класса. Кольца (numkernel.linear.rings) строятся
из методов этого протокола.
"""

from decimal import Decimal
from typing import Any, Protocol, runtime_checkable

from numkernel.math.math_context import MathContext
from numkernel.math.square_root import SquareRootContext


@runtime_checkable
class AlgebraicValue(Protocol):
    """Арифметика, модуль и полярное представление комплексного числа."""

    real: Any
    imaginary: Any

    def add(self, summand: Any) -> Any: ...

    def subtract(self, subtrahend: Any) -> Any: ...

    def multiply(self, factor: Any) -> Any: ...

    def divide(self, divisor: Any, math_context: MathContext = ...) -> Any: ...

    def pow(self, exponent: int) -> Any: ...

    def negate(self) -> Any: ...

    def invert(self, math_context: MathContext = ...) -> Any: ...

    def invertible(self) -> bool: ...

    def abs_pow2(self) -> Any: ...

    def abs(self, square_root_context: SquareRootContext = ...) -> Decimal: ...

    def conjugate(self) -> Any: ...

    def argument(self, math_context: MathContext = ...) -> Decimal: ...

    def polar_form(self, math_context: MathContext = ...) -> Any: ...

    def matrix(self) -> Any: ...
