"""
Health Factor — расчёт коэффициента обеспеченности позиции

Health factor = (collateral_usd * LIQUIDATION_THRESHOLD / LIQUIDATION_PRECISION)
                * PRECISION / debt

При LIQUIDATION_THRESHOLD = 50 учитывается только половина номинального
обеспечения, что эквивалентно требованию 200% overcollateralization.

Позиция ликвидируема, если health factor < MIN_HEALTH_FACTOR (1.0 в fixed-point).
Позиция без долга всегда максимально здорова (MAX_HEALTH_FACTOR).
"""

from dataclasses import dataclass
from typing import Final

from src.core.math.fixed_point import MAX_UINT256, PRECISION, mul_div, percent_of, validate_uint

# =============================================================================
# ПАРАМЕТРЫ ПРОТОКОЛА
# =============================================================================

# Доля номинального обеспечения, учитываемая при расчёте (в процентах)
LIQUIDATION_THRESHOLD: Final[int] = 50

# Бонус ликвидатора сверх USD-эквивалента погашенного долга (в процентах)
LIQUIDATION_BONUS: Final[int] = 10

# Делитель для процентных параметров
LIQUIDATION_PRECISION: Final[int] = 100

# Минимально допустимый health factor (1.0)
MIN_HEALTH_FACTOR: Final[int] = 1 * PRECISION

# Health factor позиции без долга
MAX_HEALTH_FACTOR: Final[int] = MAX_UINT256


# =============================================================================
# HEALTH FACTOR
# =============================================================================


def calculate_health_factor(
    total_debt: int,
    collateral_value_usd: int,
    liquidation_threshold: int = LIQUIDATION_THRESHOLD,
    liquidation_precision: int = LIQUIDATION_PRECISION,
    precision: int = PRECISION,
) -> int:
    """
    Чистая функция: (долг, стоимость обеспечения) → health factor.

    Args:
        total_debt: Выпущенный долг (base units, 1e18 = 1 USD)
        collateral_value_usd: Стоимость обеспечения в USD (18 знаков)
        liquidation_threshold: Учитываемая доля обеспечения (%)
        liquidation_precision: Делитель процентов
        precision: Масштаб fixed-point

    Returns:
        Health factor в fixed-point (1e18 = 1.0); MAX_HEALTH_FACTOR при нулевом долге

    Examples:
        >>> calculate_health_factor(100 * 10**18, 20_000 * 10**18)
        100000000000000000000
        >>> calculate_health_factor(100 * 10**18, 180 * 10**18)
        900000000000000000
        >>> calculate_health_factor(0, 0) == MAX_HEALTH_FACTOR
        True
    """
    validate_uint(total_debt, "total_debt")
    validate_uint(collateral_value_usd, "collateral_value_usd")

    if total_debt == 0:
        return MAX_HEALTH_FACTOR

    adjusted = percent_of(collateral_value_usd, liquidation_threshold, liquidation_precision)
    return mul_div(adjusted, precision, total_debt)


def is_health_factor_broken(health_factor: int, min_health_factor: int = MIN_HEALTH_FACTOR) -> bool:
    """True если health factor ниже минимального порога."""
    return health_factor < min_health_factor


# =============================================================================
# ЛИКВИДАЦИОННОЕ ИЗЪЯТИЕ
# =============================================================================


@dataclass(frozen=True)
class SeizureAmounts:
    """Размер изъятия обеспечения при ликвидации (base units актива)."""

    base: int
    bonus: int

    @property
    def total(self) -> int:
        return self.base + self.bonus


def calculate_seizure(
    debt_in_asset: int,
    liquidation_bonus: int = LIQUIDATION_BONUS,
    liquidation_precision: int = LIQUIDATION_PRECISION,
) -> SeizureAmounts:
    """
    Изъятие обеспечения: эквивалент погашаемого долга плюс бонус.

    bonus = debt_in_asset * LIQUIDATION_BONUS / LIQUIDATION_PRECISION

    Делитель бонуса — процентный (100), т.е. бонус составляет ровно 10%.

    Args:
        debt_in_asset: Погашаемый долг, сконвертированный в base units актива
        liquidation_bonus: Бонус ликвидатора (%)
        liquidation_precision: Делитель процентов

    Returns:
        SeizureAmounts(base, bonus)

    Examples:
        >>> calculate_seizure(5_555_555_555_555_555_555).total
        6111111111111111110
    """
    validate_uint(debt_in_asset, "debt_in_asset")
    bonus = percent_of(debt_in_asset, liquidation_bonus, liquidation_precision)
    return SeizureAmounts(base=debt_in_asset, bonus=bonus)
