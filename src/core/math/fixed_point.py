"""
Fixed-Point Primitives — целочисленная арифметика с масштабом PRECISION

Все цены, slope, intercept, APY и лимиты изменений хранятся как int
в масштабе PRECISION (10**18 = 100%). Float в расчётах не используется.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление всегда целочисленное с усечением (floor для неотрицательных)
2. Результат clamp_int всегда в [min_value, max_value]
3. Отрицательные и нецелые значения распознаются is_non_negative_int
4. Все операции детерминированы и воспроизводимы
"""

from typing import Final

# =============================================================================
# МАСШТАБ И ВРЕМЕННЫЕ КОНСТАНТЫ
# =============================================================================

# Fixed-point масштаб: 10**18 соответствует 100% (или 1.0 единице цены)
PRECISION: Final[int] = 10**18

SECONDS_PER_DAY: Final[int] = 24 * 60 * 60

# Год без учёта високосных дней
SECONDS_PER_YEAR: Final[int] = 365 * SECONDS_PER_DAY


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


def clamp_int(value: int, min_value: int, max_value: int) -> int:
    """
    Ограничение целого значения диапазоном [min_value, max_value].

    Examples:
        >>> clamp_int(5, 0, 10)
        5
        >>> clamp_int(-3, 0, 10)
        0
        >>> clamp_int(10**19, 0, 10**18)
        1000000000000000000
    """
    if min_value > max_value:
        raise ValueError(f"min_value {min_value} > max_value {max_value}")

    return max(min_value, min(value, max_value))


def mul_div(a: int, b: int, denominator: int) -> int:
    """
    Вычисление a * b // denominator без промежуточного округления.

    Python int не переполняется, поэтому произведение считается точно,
    усечение происходит один раз в конце.

    Raises:
        ZeroDivisionError: если denominator == 0
    """
    if denominator == 0:
        raise ZeroDivisionError("mul_div denominator is zero")

    return a * b // denominator


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_non_negative_int(value: object) -> bool:
    """True если value — int (не bool) и value >= 0."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0

