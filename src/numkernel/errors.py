"""
Errors: таксономия ошибок numkernel

Три класса отказов, каждый наследует ближайшее встроенное исключение, чтобы
вызывающий код мог ловить привычные TypeError / ValueError / RuntimeError:

- PreconditionViolation: обязательный аргумент отсутствует (None) или имеет не тот тип
- InvalidArgument: значение вне своей области определения
- InvalidState: операция не определена для текущего значения получателя

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все отказы детерминированы и являются чистой функцией входов
2. Исключения никогда не перехватываются внутри ядра
3. Исчерпание max_iterations в sqrt НЕ является ошибкой
"""


class NumericKernelError(Exception):
    """Базовый класс всех ошибок ядра."""


class PreconditionViolation(NumericKernelError, TypeError):
    """
    Обязательный аргумент отсутствует или имеет неподходящий тип.

    Сообщение содержит имя аргумента.
    """


class InvalidArgument(NumericKernelError, ValueError):
    """
    Значение аргумента вне области определения.

    Примеры: отрицательное подкоренное выражение, неположительная размерность,
    ключ builder'а вне объявленной формы, необратимый делитель.
    Сообщение содержит нарушающее значение.
    """


class InvalidState(NumericKernelError, RuntimeError):
    """
    Операция не определена для текущего значения получателя.

    Примеры: argument/polar form нуля, determinant/trace неквадратной матрицы,
    build() незаполненного builder'а.
    """
