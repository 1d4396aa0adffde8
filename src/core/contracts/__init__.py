"""
Contract Validation Module

Модуль для валидации JSON контрактов collateral engine.
"""

from .validators import (
    AccountSnapshotValidator,
    ContractValidator,
    EngineConfigValidator,
    SchemaLoader,
    validate_account_snapshot,
    validate_engine_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "EngineConfigValidator",
    "AccountSnapshotValidator",
    # Functions
    "validate_engine_config",
    "validate_account_snapshot",
]
