"""
Preconditions: проверки аргументов и состояния

Единая точка, через которую все модули ядра сообщают о нарушенных контрактах.
Сообщения строятся в формате "expected <условие> but actual <значение>".

- require_non_null → PreconditionViolation
- check_argument, validate_positive, validate_non_negative, validate_in_range → InvalidArgument
- check_state → InvalidState
"""

from typing import Any, TypeVar

from numkernel.errors import InvalidArgument, InvalidState, PreconditionViolation

T = TypeVar("T")


# =============================================================================
# NULL CHECKS
# =============================================================================


def require_non_null(value: T | None, name: str) -> T:
    """
    Проверка, что обязательный аргумент передан.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        PreconditionViolation: Если value is None

    Examples:
        >>> require_non_null(5, "summand")
        5
    """
    if value is None:
        raise PreconditionViolation(f"{name} must not be None")
    return value


# =============================================================================
# ARGUMENT / STATE CHECKS
# =============================================================================


def check_argument(condition: bool, message: str, *args: Any) -> None:
    """
    Проверка условия над аргументом.

    Args:
        condition: Условие, которое должно выполняться
        message: Шаблон сообщения с плейсхолдерами {}
        *args: Значения для шаблона (обычно нарушающее значение)

    Raises:
        InvalidArgument: Если condition ложно
    """
    if not condition:
        raise InvalidArgument(message.format(*args))


def check_state(condition: bool, message: str, *args: Any) -> None:
    """
    Проверка условия над состоянием получателя.

    Raises:
        InvalidState: Если condition ложно
    """
    if not condition:
        raise InvalidState(message.format(*args))


# =============================================================================
# ВАЛИДАЦИЯ ЧИСЛОВЫХ ПАРАМЕТРОВ
# =============================================================================


def validate_positive(value: Any, name: str) -> None:
    """
    Валидация, что значение строго положительное.

    Raises:
        PreconditionViolation: Если value is None
        InvalidArgument: Если value <= 0
    """
    require_non_null(value, name)
    if value <= 0:
        raise InvalidArgument(f"expected {name} > 0 but actual {value}")


def validate_non_negative(value: Any, name: str) -> None:
    """
    Валидация, что значение неотрицательное.

    Raises:
        PreconditionViolation: Если value is None
        InvalidArgument: Если value < 0
    """
    require_non_null(value, name)
    if value < 0:
        raise InvalidArgument(f"expected {name} >= 0 but actual {value}")


def validate_in_range(
    value: Any,
    name: str,
    min_value: Any | None = None,
    max_value: Any | None = None,
) -> None:
    """
    Валидация, что значение в замкнутом диапазоне [min_value, max_value].

    Используется для one-based индексов матриц и векторов.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Raises:
        PreconditionViolation: Если value is None
        InvalidArgument: Если value вне диапазона
    """
    require_non_null(value, name)

    if min_value is not None and value < min_value:
        raise InvalidArgument(f"expected {name} in [{min_value}, {max_value}] but actual {value}")

    if max_value is not None and value > max_value:
        raise InvalidArgument(f"expected {name} in [{min_value}, {max_value}] but actual {value}")
