"""
Core math modules для numkernel

Конфигурация точности, сравнения с толерантностью, тригонометрия
произвольной точности и решатель квадратных корней.
"""

# Math Context
from numkernel.math.math_context import (
    DEFAULT_MATH_CONTEXT,
    DEFAULT_TRIGONOMETRIC_CONTEXT,
    DEFAULT_TRIGONOMETRIC_PRECISION,
    EXACT_CONTEXT,
    MathContext,
    RoundingMode,
)

# Numerical Safeguards
from numkernel.math.numerical_safeguards import (
    EPS_DECIMAL_COMPARE,
    compare_with_tolerance,
    is_close,
)

# Square Root
from numkernel.math.square_root import (
    DEFAULT_ABORT_CRITERION,
    DEFAULT_INITIAL_SCALE,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_SQUARE_ROOT_CONTEXT,
    DEFAULT_SQUARE_ROOT_PRECISION,
    ScientificNotation,
    SquareRootContext,
    perfect_square,
    scientific_notation_for_sqrt,
    sqrt,
    sqrt_of_perfect_square,
)

# Trigonometry
from numkernel.math.trigonometry import GUARD_DIGITS, atan, cos, pi, sin

__all__ = [
    # Math Context
    "DEFAULT_MATH_CONTEXT",
    "DEFAULT_TRIGONOMETRIC_CONTEXT",
    "DEFAULT_TRIGONOMETRIC_PRECISION",
    "EXACT_CONTEXT",
    "MathContext",
    "RoundingMode",
    # Numerical Safeguards
    "EPS_DECIMAL_COMPARE",
    "compare_with_tolerance",
    "is_close",
    # Square Root: Constants
    "DEFAULT_ABORT_CRITERION",
    "DEFAULT_INITIAL_SCALE",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_SQUARE_ROOT_CONTEXT",
    "DEFAULT_SQUARE_ROOT_PRECISION",
    # Square Root: Types
    "ScientificNotation",
    "SquareRootContext",
    # Square Root: Functions
    "perfect_square",
    "scientific_notation_for_sqrt",
    "sqrt",
    "sqrt_of_perfect_square",
    # Trigonometry
    "GUARD_DIGITS",
    "atan",
    "cos",
    "pi",
    "sin",
]
