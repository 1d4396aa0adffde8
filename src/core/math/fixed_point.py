"""
Fixed-Point Arithmetic — целочисленная арифметика с фиксированной точкой

Все денежные величины движка — целые числа в базовых единицах:
- суммы активов: нативные base units актива (1e18 на единицу)
- USD-стоимости: 18 знаков после запятой (1 USD = 1e18)
- цены оракула: приводятся к 18 знакам независимо от точности фида

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Никаких float в денежных расчётах (только int, округление вниз)
2. Деление на ноль никогда не происходит (ValueError до деления)
3. Отрицательные суммы не допускаются на входе конверсий
4. Все операции детерминированы и воспроизводимы
"""

from typing import Final

# =============================================================================
# ПАРАМЕТРЫ ТОЧНОСТИ
# =============================================================================

# Масштаб fixed-point (18 знаков)
PRECISION: Final[int] = 10**18

# Количество знаков, к которому приводятся все цены
PRICE_DECIMALS: Final[int] = 18

# Множитель для типичного фида с 8 знаками (8 + 10 = 18)
ADDITIONAL_FEED_PRECISION: Final[int] = 10**10

# Максимальное значение исходного 256-битного домена
MAX_UINT256: Final[int] = 2**256 - 1


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_uint(value: object) -> bool:
    """
    Проверка, что значение — неотрицательное целое (bool не допускается).

    Args:
        value: Проверяемое значение

    Returns:
        True если value это int >= 0
    """
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def validate_uint(value: object, name: str = "value") -> int:
    """
    Валидация неотрицательного целого.

    Raises:
        ValueError: Если значение не int или отрицательное
    """
    if not is_uint(value):
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    return value  # type: ignore[return-value]


# =============================================================================
# БАЗОВЫЕ ОПЕРАЦИИ
# =============================================================================


def mul_div(a: int, b: int, denominator: int) -> int:
    """
    floor(a * b / denominator) без промежуточной потери точности.

    Python int не переполняется, поэтому произведение считается точно,
    а округление выполняется один раз в конце (вниз).

    Args:
        a: Первый множитель (>= 0)
        b: Второй множитель (>= 0)
        denominator: Делитель (> 0)

    Returns:
        Целая часть a * b / denominator

    Raises:
        ValueError: Если denominator <= 0 или множители отрицательные

    Examples:
        >>> mul_div(10 * 10**18, 2000 * 10**18, 10**18)
        20000000000000000000000
        >>> mul_div(100 * 10**18, 10**18, 18 * 10**18)
        5555555555555555555
    """
    validate_uint(a, "a")
    validate_uint(b, "b")
    if not isinstance(denominator, int) or denominator <= 0:
        raise ValueError(f"denominator must be a positive integer, got {denominator!r}")
    return (a * b) // denominator


def percent_of(amount: int, pct: int, pct_precision: int = 100) -> int:
    """
    Доля amount в процентах: floor(amount * pct / pct_precision).

    Examples:
        >>> percent_of(20_000, 50)
        10000
        >>> percent_of(5_555_555_555_555_555_555, 10)
        555555555555555555
    """
    return mul_div(amount, pct, pct_precision)


# =============================================================================
# НОРМАЛИЗАЦИЯ ЦЕН
# =============================================================================


def normalize_price(price: int, decimals: int, target_decimals: int = PRICE_DECIMALS) -> int:
    """
    Приведение цены фида к target_decimals знакам.

    Фиды отдают цены с разной точностью (8 знаков у USD-фидов, 18 у ETH-пар).
    Для decimals < target цена умножается, для decimals > target делится
    (с округлением вниз).

    Args:
        price: Сырая цена фида (> 0)
        decimals: Точность фида
        target_decimals: Целевая точность (default: 18)

    Returns:
        Цена с target_decimals знаками

    Raises:
        ValueError: Если price <= 0 или decimals отрицательный

    Examples:
        >>> normalize_price(2000 * 10**8, 8)
        2000000000000000000000
        >>> normalize_price(2000 * 10**20, 20)
        2000000000000000000000
    """
    if not isinstance(price, int) or isinstance(price, bool) or price <= 0:
        raise ValueError(f"price must be a positive integer, got {price!r}")
    validate_uint(decimals, "decimals")

    if decimals <= target_decimals:
        return price * 10 ** (target_decimals - decimals)
    return price // 10 ** (decimals - target_decimals)


def usd_value(amount: int, normalized_price: int, precision: int = PRECISION) -> int:
    """
    USD-стоимость amount base units по нормализованной цене.

    usd = amount * price / PRECISION (18 знаков)
    """
    return mul_div(amount, normalized_price, precision)


def asset_amount(usd_amount: int, normalized_price: int, precision: int = PRECISION) -> int:
    """
    Обратная конверсия: USD (18 знаков) → base units актива.

    amount = usd * PRECISION / price
    """
    return mul_div(usd_amount, precision, normalized_price)
