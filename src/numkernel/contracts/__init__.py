"""
Contract checks

Проверки предусловий, используемые всеми модулями ядра.
"""

from .preconditions import (
    check_argument,
    check_state,
    require_non_null,
    validate_in_range,
    validate_non_negative,
    validate_positive,
)

__all__ = [
    "require_non_null",
    "check_argument",
    "check_state",
    "validate_positive",
    "validate_non_negative",
    "validate_in_range",
]
