"""
Solvency Monitor — системная обеспеченность

Мониторинговое (не транзакционное) свойство: суммарная USD-стоимость всего
обеспечения должна превышать суммарный выпущенный долг. Проверка не
блокирует операции и сама не падает при нарушении — нарушение отражается
в отчёте.
"""

import logging

from src.core.domain.account import SolvencyReport
from src.engine.engine import CollateralEngine

logger = logging.getLogger(__name__)


class SolvencyMonitor:
    """Read-only отчёт по всем счетам движка."""

    def __init__(self, engine: CollateralEngine):
        self.engine = engine

    def report(self) -> SolvencyReport:
        total_collateral = 0
        liquidatable = []
        accounts = self.engine.get_accounts()

        for account in accounts:
            info = self.engine.get_account_information(account)
            total_collateral += info.collateral_value_usd
            health_factor = self.engine.calculate_health_factor(
                info.total_debt_minted, info.collateral_value_usd
            )
            if health_factor < self.engine.get_min_health_factor():
                liquidatable.append(account)

        report = SolvencyReport(
            total_collateral_value_usd=total_collateral,
            total_debt=self.engine.get_total_debt(),
            accounts_checked=len(accounts),
            liquidatable_accounts=liquidatable,
        )

        if not report.is_solvent:
            logger.warning(
                "Aggregate collateral below aggregate debt",
                extra={
                    "event": "engine.insolvent",
                    "total_collateral_value_usd": report.total_collateral_value_usd,
                    "total_debt": report.total_debt,
                },
            )
        return report
