"""
Domain models and value objects.

Contains ledger events and account read models.
"""

from src.core.domain.account import (
    AccountInformation,
    AccountState,
    LiquidationResult,
    SolvencyReport,
    classify_account,
)
from src.core.domain.events import (
    CollateralDeposited,
    CollateralRedeemed,
    DebtBurned,
    DebtMinted,
    EventType,
    LedgerEvent,
    LiquidationExecuted,
)

__all__ = [
    # Account read models
    "AccountInformation",
    "AccountState",
    "LiquidationResult",
    "SolvencyReport",
    "classify_account",
    # Ledger events
    "EventType",
    "LedgerEvent",
    "CollateralDeposited",
    "CollateralRedeemed",
    "DebtMinted",
    "DebtBurned",
    "LiquidationExecuted",
]
