"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. Epsilon-сравнения Decimal
2. Симметричность и точность разности
3. Валидацию толерантности
"""

from decimal import Decimal

import pytest

from numkernel.errors import InvalidArgument, PreconditionViolation
from numkernel.math.numerical_safeguards import (
    EPS_DECIMAL_COMPARE,
    compare_with_tolerance,
    is_close,
)

# =============================================================================
# EPSILON-СРАВНЕНИЯ
# =============================================================================


class TestIsClose:
    """Тесты для is_close"""

    def test_equal_values(self) -> None:
        assert is_close(Decimal("1.5"), Decimal("1.5"))

    def test_within_default_tolerance(self) -> None:
        assert is_close(Decimal("1.00000000001"), Decimal("1"))
        assert EPS_DECIMAL_COMPARE == Decimal("1E-10")

    def test_tolerance_boundary_is_inclusive(self) -> None:
        assert is_close(Decimal("1.0000000001"), Decimal("1"))

    def test_outside_tolerance(self) -> None:
        assert not is_close(Decimal("1.1"), Decimal("1"))

    def test_symmetric(self) -> None:
        a, b = Decimal("2.00000000005"), Decimal("2")
        assert is_close(a, b) == is_close(b, a)

    def test_custom_tolerance(self) -> None:
        assert is_close(Decimal("5.0009"), Decimal("5"), Decimal("0.001"))
        assert not is_close(Decimal("5.002"), Decimal("5"), Decimal("0.001"))

    def test_difference_is_not_rounded(self) -> None:
        """Разность вычисляется без округления контекстом потока"""
        big = Decimal("1" + "0" * 40)
        assert not is_close(big + 0, Decimal("1" + "0" * 39 + "1"), Decimal("0.5"))


class TestCompareWithTolerance:
    """Тесты для compare_with_tolerance"""

    def test_equal_within_tolerance(self) -> None:
        assert compare_with_tolerance(Decimal("1"), Decimal("1.00000000001")) == 0

    def test_less(self) -> None:
        assert compare_with_tolerance(Decimal("1"), Decimal("2")) == -1

    def test_greater(self) -> None:
        assert compare_with_tolerance(Decimal("2"), Decimal("1")) == 1

    def test_accepts_int(self) -> None:
        assert compare_with_tolerance(3, Decimal("3.0")) == 0

    @pytest.mark.parametrize("tolerance", [Decimal(0), Decimal("-1E-10")])
    def test_non_positive_tolerance_rejected(self, tolerance: Decimal) -> None:
        with pytest.raises(InvalidArgument, match="expected tolerance > 0"):
            compare_with_tolerance(Decimal(1), Decimal(1), tolerance)

    def test_none_rejected(self) -> None:
        with pytest.raises(PreconditionViolation, match="a must not be None"):
            compare_with_tolerance(None, Decimal(1))
