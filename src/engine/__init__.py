"""Collateral engine — леджеры, оракул, ликвидации, защита от reentrancy.

- CollateralEngine: публичные операции и read-аксессоры
- LiquidationCoordinator: частичная ликвидация
- ReentrancyGuard / Transaction: атомарность и защита от вложенного входа
- SolvencyMonitor: системная обеспеченность
"""

from .config import EngineConfig, EngineDeployment, parse_engine_deployment
from .engine import CollateralEngine
from .errors import (
    ArithmeticUnderflow,
    EngineError,
    HealthFactorBroken,
    HealthFactorIsOK,
    HealthFactorNotImproved,
    InvalidPrice,
    InvariantViolation,
    LengthMismatch,
    MintFailed,
    ReentrancyError,
    StalePrice,
    TransferFailed,
    UnsupportedAsset,
    ValidationError,
)
from .guard import ReentrancyGuard, nonreentrant
from .interfaces import CollateralAsset, DebtToken, Journaled, PriceFeed
from .liquidation import LiquidationCoordinator
from .solvency import SolvencyMonitor
from .store import LedgerStore
from .transaction import Transaction

__all__ = [
    # Engine
    "CollateralEngine",
    "LiquidationCoordinator",
    "SolvencyMonitor",
    "LedgerStore",
    # Configuration
    "EngineConfig",
    "EngineDeployment",
    "parse_engine_deployment",
    # Concurrency
    "ReentrancyGuard",
    "Transaction",
    "nonreentrant",
    # Collaborators
    "CollateralAsset",
    "DebtToken",
    "Journaled",
    "PriceFeed",
    # Errors
    "EngineError",
    "ValidationError",
    "LengthMismatch",
    "UnsupportedAsset",
    "InvalidPrice",
    "ArithmeticUnderflow",
    "TransferFailed",
    "MintFailed",
    "StalePrice",
    "InvariantViolation",
    "HealthFactorBroken",
    "HealthFactorIsOK",
    "HealthFactorNotImproved",
    "ReentrancyError",
]
