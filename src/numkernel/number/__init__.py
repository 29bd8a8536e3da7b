"""
Комплексные числа для numkernel

Два независимых представления с общим контрактом AlgebraicValue:
SimpleComplexNumber (int) и RealComplexNumber (Decimal).
"""

from numkernel.number.algebraic import AlgebraicValue
from numkernel.number.polar_form import PolarForm
from numkernel.number.real_complex import REAL_COMPLEX_RING, RealComplexNumber
from numkernel.number.simple_complex import SIMPLE_COMPLEX_RING, SimpleComplexNumber

__all__ = [
    "AlgebraicValue",
    "PolarForm",
    "REAL_COMPLEX_RING",
    "RealComplexNumber",
    "SIMPLE_COMPLEX_RING",
    "SimpleComplexNumber",
]
