"""
Account Health — health factor счёта по текущим леджерам и ценам

Стоимость обеспечения суммируется по всем зарегистрированным активам в
фиксированном порядке регистрации (порядок влияет только на накопление
округлений). Нулевые балансы не запрашивают цену у фида.
"""

from src.core.domain.account import AccountInformation
from src.core.math.health_factor import calculate_health_factor, is_health_factor_broken
from src.engine.config import EngineConfig
from src.engine.errors import HealthFactorBroken
from src.engine.oracle_adapter import PriceOracleAdapter
from src.engine.store import LedgerStore


class AccountHealth:
    """Расчёт стоимости обеспечения и health factor счёта."""

    def __init__(self, store: LedgerStore, oracle: PriceOracleAdapter, config: EngineConfig):
        self._store = store
        self._oracle = oracle
        self._config = config

    def collateral_value_usd(self, account: str) -> int:
        total = 0
        for asset in self._oracle.assets:
            total += self._oracle.to_usd(asset, self._store.collateral_balance(account, asset))
        return total

    def account_information(self, account: str) -> AccountInformation:
        return AccountInformation(
            total_debt_minted=self._store.debt_balance(account),
            collateral_value_usd=self.collateral_value_usd(account),
        )

    def calculate(self, total_debt: int, collateral_value_usd: int) -> int:
        """Health factor по параметрам конфигурации движка."""
        return calculate_health_factor(
            total_debt,
            collateral_value_usd,
            liquidation_threshold=self._config.liquidation_threshold,
            liquidation_precision=self._config.liquidation_precision,
            precision=self._config.precision,
        )

    def health_factor(self, account: str) -> int:
        debt = self._store.debt_balance(account)
        if debt == 0:
            # без долга цены не нужны
            return self.calculate(0, 0)
        return self.calculate(debt, self.collateral_value_usd(account))

    def require_healthy(self, account: str) -> None:
        """
        Raises:
            HealthFactorBroken: health factor счёта ниже min_health_factor
        """
        health_factor = self.health_factor(account)
        if is_health_factor_broken(health_factor, self._config.min_health_factor):
            raise HealthFactorBroken(account, health_factor, self._config.min_health_factor)
