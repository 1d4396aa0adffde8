"""
Ledger Events — уведомления об изменении леджеров

Immutable Pydantic модели. Событие записывается в журнал стора ДО любого
внешнего вызова (checks-effects-interactions), поэтому reentrant-вызов видит
уже обновлённое состояние. При откате операции события откатываются вместе
с балансами; подписчики получают их только после commit.
"""

from enum import Enum

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Тип события леджера"""

    COLLATERAL_DEPOSITED = "collateral_deposited"
    COLLATERAL_REDEEMED = "collateral_redeemed"
    DEBT_MINTED = "debt_minted"
    DEBT_BURNED = "debt_burned"
    LIQUIDATION_EXECUTED = "liquidation_executed"


class LedgerEvent(BaseModel):
    """Базовое событие леджера."""

    event_type: EventType = Field(..., description="Тип события")

    model_config = {"frozen": True}


class CollateralDeposited(LedgerEvent):
    """Обеспечение зачислено на счёт."""

    event_type: EventType = EventType.COLLATERAL_DEPOSITED
    account: str = Field(..., min_length=1, description="Счёт владельца обеспечения")
    asset: str = Field(..., min_length=1, description="Адрес актива")
    amount: int = Field(..., gt=0, description="Сумма (base units)")


class CollateralRedeemed(LedgerEvent):
    """Обеспечение списано со счёта и отправлено получателю."""

    event_type: EventType = EventType.COLLATERAL_REDEEMED
    redeemed_from: str = Field(..., min_length=1, description="Счёт, с которого списано")
    redeemed_to: str = Field(..., min_length=1, description="Получатель актива")
    asset: str = Field(..., min_length=1, description="Адрес актива")
    amount: int = Field(..., gt=0, description="Сумма (base units)")


class DebtMinted(LedgerEvent):
    """Долг выпущен на счёт."""

    event_type: EventType = EventType.DEBT_MINTED
    account: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0)


class DebtBurned(LedgerEvent):
    """Долг погашен (payer может отличаться от владельца долга)."""

    event_type: EventType = EventType.DEBT_BURNED
    on_behalf_of: str = Field(..., min_length=1, description="Чей долг погашается")
    payer: str = Field(..., min_length=1, description="Кто предоставляет debt-токены")
    amount: int = Field(..., gt=0)


class LiquidationExecuted(LedgerEvent):
    """Ликвидация выполнена."""

    event_type: EventType = EventType.LIQUIDATION_EXECUTED
    liquidator: str = Field(..., min_length=1)
    target: str = Field(..., min_length=1)
    asset: str = Field(..., min_length=1)
    debt_covered: int = Field(..., gt=0)
    collateral_seized: int = Field(..., ge=0)
