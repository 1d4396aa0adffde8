"""
Liquidation Coordinator — частичная ликвидация недообеспеченного счёта

Алгоритм:
1. debt_to_cover > 0, актив зарегистрирован
2. starting = health factor цели; starting >= порога → HealthFactorIsOK
   (ничего не изменено, внешних вызовов не было)
3. debt_to_cover (USD) → base units изымаемого актива по цене оракула
4. bonus = seized * LIQUIDATION_BONUS / LIQUIDATION_PRECISION (10%)
5. redeem(seized + bonus) цель → ликвидатор
6. burn(debt_to_cover) долга цели, платит ликвидатор
7. ending < порога → HealthFactorNotImproved (откат всей операции)
8. health factor самого ликвидатора ниже порога → HealthFactorBroken

Изъятие не ограничивается остатком актива у цели: если seized + bonus
больше баланса, redeem поднимает ArithmeticUnderflow и операция откатывается
целиком (без частичного изъятия). Одна ликвидация — один изымаемый актив.
"""

import logging

from src.core.domain.account import LiquidationResult
from src.core.domain.events import LiquidationExecuted
from src.core.math.health_factor import calculate_seizure
from src.engine.collateral_ledger import CollateralLedger
from src.engine.config import EngineConfig
from src.engine.debt_ledger import DebtLedger
from src.engine.errors import HealthFactorIsOK, HealthFactorNotImproved
from src.engine.health import AccountHealth
from src.engine.oracle_adapter import PriceOracleAdapter
from src.engine.store import LedgerStore
from src.engine.validation import require_positive_amount, require_registered

logger = logging.getLogger(__name__)


class LiquidationCoordinator:
    """Оркестрация ликвидации через леджеры, оракул и расчёт health factor."""

    def __init__(
        self,
        store: LedgerStore,
        collateral: CollateralLedger,
        debt: DebtLedger,
        oracle: PriceOracleAdapter,
        health: AccountHealth,
        config: EngineConfig,
    ):
        self._store = store
        self._collateral = collateral
        self._debt = debt
        self._oracle = oracle
        self._health = health
        self._config = config

    def liquidate(
        self,
        liquidator: str,
        seized_asset: str,
        target: str,
        debt_to_cover: int,
    ) -> LiquidationResult:
        """
        Ликвидация счёта target.

        Args:
            liquidator: Кто погашает долг и получает обеспечение
            seized_asset: Изымаемый актив обеспечения
            target: Ликвидируемый счёт
            debt_to_cover: Погашаемый долг (base units, 1e18 = 1 USD)

        Returns:
            LiquidationResult

        Raises:
            ValidationError: debt_to_cover <= 0, актив не зарегистрирован
            HealthFactorIsOK: цель не ликвидируема
            ArithmeticUnderflow: изъятие больше баланса или долг больше долга цели
            TransferFailed: внешний transfer вернул False
            HealthFactorNotImproved: health factor цели остался ниже порога
            HealthFactorBroken: health factor ликвидатора ниже порога
        """
        require_positive_amount(debt_to_cover, "debt_to_cover")
        require_registered(seized_asset, self._oracle.assets)

        starting = self._health.health_factor(target)
        if starting >= self._config.min_health_factor:
            raise HealthFactorIsOK(target, starting)

        debt_in_asset = self._oracle.to_asset_amount(seized_asset, debt_to_cover)
        seizure = calculate_seizure(
            debt_in_asset,
            liquidation_bonus=self._config.liquidation_bonus,
            liquidation_precision=self._config.liquidation_precision,
        )

        self._collateral.redeem(target, liquidator, seized_asset, seizure.total)
        self._debt.burn(target, liquidator, debt_to_cover)

        ending = self._health.health_factor(target)
        if ending < self._config.min_health_factor:
            raise HealthFactorNotImproved(target, starting, ending)

        self._health.require_healthy(liquidator)

        self._store.record(
            LiquidationExecuted(
                liquidator=liquidator,
                target=target,
                asset=seized_asset,
                debt_covered=debt_to_cover,
                collateral_seized=seizure.total,
            )
        )
        logger.warning(
            "Position liquidated",
            extra={
                "event": "engine.liquidation",
                "liquidator": liquidator,
                "target": target,
                "asset": seized_asset,
                "debt_covered": debt_to_cover,
                "collateral_seized": seizure.total,
            },
        )

        return LiquidationResult(
            liquidator=liquidator,
            target=target,
            asset=seized_asset,
            debt_covered=debt_to_cover,
            collateral_seized_base=seizure.base,
            collateral_bonus=seizure.bonus,
            collateral_seized_total=seizure.total,
            starting_health_factor=starting,
            ending_health_factor=ending,
        )
