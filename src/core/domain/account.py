"""
Account — read-модели состояния счёта

Счёт не имеет собственной записи: всё состояние выводится из строк леджеров
(баланс обеспечения по активам и выпущенный долг).

Состояния счёта:
UNUSED → COLLATERALIZED → INDEBTED → LIQUIDATABLE → INDEBTED | COLLATERALIZED
"""

from enum import Enum

from pydantic import BaseModel, Field

from src.core.math.health_factor import MIN_HEALTH_FACTOR


# =============================================================================
# ENUMS
# =============================================================================


class AccountState(str, Enum):
    """Состояние счёта, выведенное из леджеров."""

    UNUSED = "UNUSED"
    COLLATERALIZED = "COLLATERALIZED"
    INDEBTED = "INDEBTED"
    LIQUIDATABLE = "LIQUIDATABLE"


def classify_account(
    has_collateral: bool,
    total_debt: int,
    health_factor: int,
    min_health_factor: int = MIN_HEALTH_FACTOR,
) -> AccountState:
    """
    Классификация счёта по леджерам.

    Args:
        has_collateral: True если хотя бы один баланс обеспечения > 0
        total_debt: Выпущенный долг
        health_factor: Текущий health factor
        min_health_factor: Порог ликвидации

    Returns:
        AccountState
    """
    if total_debt > 0 and health_factor < min_health_factor:
        return AccountState.LIQUIDATABLE
    if total_debt > 0:
        return AccountState.INDEBTED
    if has_collateral:
        return AccountState.COLLATERALIZED
    return AccountState.UNUSED


# =============================================================================
# READ MODELS
# =============================================================================


class AccountInformation(BaseModel):
    """Выпущенный долг и стоимость обеспечения счёта."""

    total_debt_minted: int = Field(..., ge=0, description="Выпущенный долг (base units)")
    collateral_value_usd: int = Field(..., ge=0, description="Стоимость обеспечения (USD, 18 знаков)")

    model_config = {"frozen": True}

    def as_tuple(self) -> tuple[int, int]:
        """(total_debt_minted, collateral_value_usd)"""
        return self.total_debt_minted, self.collateral_value_usd


class LiquidationResult(BaseModel):
    """
    Результат ликвидации.

    Все суммы обеспечения — в base units изъятого актива.
    """

    liquidator: str = Field(..., min_length=1)
    target: str = Field(..., min_length=1)
    asset: str = Field(..., min_length=1)
    debt_covered: int = Field(..., gt=0, description="Погашенный долг")
    collateral_seized_base: int = Field(..., ge=0, description="Эквивалент долга в активе")
    collateral_bonus: int = Field(..., ge=0, description="Бонус ликвидатора")
    collateral_seized_total: int = Field(..., ge=0, description="Итого изъято")
    starting_health_factor: int = Field(..., ge=0)
    ending_health_factor: int = Field(..., ge=0)

    model_config = {"frozen": True}


class SolvencyReport(BaseModel):
    """Системная обеспеченность: суммарное обеспечение против суммарного долга."""

    total_collateral_value_usd: int = Field(..., ge=0)
    total_debt: int = Field(..., ge=0)
    accounts_checked: int = Field(..., ge=0)
    liquidatable_accounts: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def is_solvent(self) -> bool:
        return self.total_collateral_value_usd >= self.total_debt
