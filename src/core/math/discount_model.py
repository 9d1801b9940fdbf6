"""
Discount Model — линейная модель дисконта principal token (PT)

Чистые функции без состояния и побочных эффектов.

ФОРМУЛЫ:
    years_to_maturity = seconds_to_maturity * PRECISION // SECONDS_PER_YEAR
    discount = clamp(slope * years_to_maturity // PRECISION + intercept, 0, PRECISION)
    price = underlying_price * (PRECISION - discount) // PRECISION

    slope_from_apy(apy) = apy * PRECISION // (PRECISION + apy)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. discount ∈ [0, PRECISION]
2. price ∈ [0, underlying_price]
3. discount монотонно не убывает по seconds_to_maturity при slope >= 0
4. Входы предварительно валидированы вызывающим кодом (ошибок нет)
"""

from src.core.math.fixed_point import (
    PRECISION,
    SECONDS_PER_YEAR,
    clamp_int,
    mul_div,
)


def seconds_to_years(seconds_to_maturity: int) -> int:
    """
    Конверсия секунд до погашения в fixed-point долю года.

    Examples:
        >>> seconds_to_years(365 * 86400)
        1000000000000000000
        >>> seconds_to_years(0)
        0
    """
    return mul_div(max(0, seconds_to_maturity), PRECISION, SECONDS_PER_YEAR)


def compute_discount(slope: int, intercept: int, seconds_to_maturity: int) -> int:
    """
    Дисконт (доля от PRECISION) для заданного времени до погашения.

    Args:
        slope: ставка дисконта за год до погашения (fixed-point)
        intercept: абсолютный сдвиг дисконта (fixed-point)
        seconds_to_maturity: секунды до expiry (отрицательные трактуются как 0)

    Returns:
        clamp(slope * years + intercept, 0, PRECISION)

    Examples:
        >>> compute_discount(5 * 10**17, 0, 365 * 86400)
        500000000000000000
        >>> compute_discount(0, 10**18, 1)
        1000000000000000000
    """
    years = seconds_to_years(seconds_to_maturity)
    raw_discount = mul_div(slope, years, PRECISION) + intercept

    return clamp_int(raw_discount, 0, PRECISION)


def compute_price(underlying_price: int, discount: int) -> int:
    """
    Цена PT после применения дисконта.

    Усечение целочисленного деления всегда в сторону нуля; результат >= 0,
    т.к. discount уже ограничен [0, PRECISION].

    Examples:
        >>> compute_price(10**18, 25 * 10**16)
        750000000000000000
        >>> compute_price(10**18, 10**18)
        0
    """
    return mul_div(underlying_price, PRECISION - discount, PRECISION)


def discounted_price(
    underlying_price: int,
    slope: int,
    intercept: int,
    now: int,
    pt_expiry: int,
) -> int:
    """
    Полный расчёт цены PT на момент now.

    При now >= pt_expiry модель дисконта не применяется:
    возвращается цена underlying без изменений.
    """
    if now >= pt_expiry:
        return underlying_price

    discount = compute_discount(slope, intercept, pt_expiry - now)
    return compute_price(underlying_price, discount)


def slope_from_apy(apy: int) -> int:
    """
    Эквивалентный slope для годовой доходности APY (compounding-aware).

    PT, который через год погашается в 1.0 при доходности apy,
    сегодня стоит 1 / (1 + apy), т.е. дисконт = apy / (1 + apy).

    Examples:
        >>> slope_from_apy(10**17)  # 10% APY -> ~9.09%
        90909090909090909
        >>> slope_from_apy(0)
        0
    """
    return mul_div(apy, PRECISION, PRECISION + apy)
