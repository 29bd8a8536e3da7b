"""
Linear algebra для numkernel

Плотные матрицы и векторы над кольцами (int, Decimal, комплексные числа).
"""

# Rings
from numkernel.linear.rings import DECIMAL_RING, INTEGER_RING, Ring, check_same_ring, exact_sum

# Vector / Matrix
from numkernel.linear.vector import Vector, VectorBuilder
from numkernel.linear.matrix import Matrix, MatrixBuilder

# Factories
from numkernel.linear.factories import (
    identity_matrix,
    matrix_of,
    vector_of,
    zero_matrix,
    zero_vector,
)

__all__ = [
    # Rings
    "DECIMAL_RING",
    "INTEGER_RING",
    "Ring",
    "check_same_ring",
    "exact_sum",
    # Vector / Matrix
    "Matrix",
    "MatrixBuilder",
    "Vector",
    "VectorBuilder",
    # Factories
    "identity_matrix",
    "matrix_of",
    "vector_of",
    "zero_matrix",
    "zero_vector",
]
