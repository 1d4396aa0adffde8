"""
Engine Errors — таксономия ошибок collateral engine

Все ошибки пропагируют к непосредственному вызывающему без повторов.
Любая ошибка внутри публичной операции откатывает все изменения леджеров
(и журналируемых участников) до состояния перед операцией.

Иерархия:
    EngineError
    ├── ValidationError          — отклонено до любых изменений
    │   ├── LengthMismatch
    │   ├── UnsupportedAsset
    │   └── InvalidPrice
    ├── ArithmeticUnderflow      — списание больше баланса
    ├── TransferFailed           — внешний transfer вернул False
    ├── MintFailed               — внешний mint вернул False
    ├── InvariantViolation
    │   └── HealthFactorBroken   — health factor ниже порога после операции
    ├── HealthFactorIsOK         — ликвидация здорового счёта
    ├── HealthFactorNotImproved  — ликвидация не восстановила health factor
    ├── ReentrancyError          — вложенный вход в защищённую операцию
    └── StalePrice               — устаревшая цена фида
"""

from typing import Optional


class EngineError(Exception):
    """Базовая ошибка collateral engine."""

    pass


# =============================================================================
# VALIDATION
# =============================================================================


class ValidationError(EngineError, ValueError):
    """Невалидный вход: неположительная сумма, незарегистрированный актив и т.п."""

    pass


class LengthMismatch(ValidationError):
    """Списки активов и price feeds разной длины."""

    def __init__(self, assets_length: int, feeds_length: int):
        self.assets_length = assets_length
        self.feeds_length = feeds_length
        super().__init__(
            f"Collateral assets and price feeds must have equal length: "
            f"{assets_length} != {feeds_length}"
        )


class UnsupportedAsset(ValidationError):
    """Актив не зарегистрирован как обеспечение."""

    def __init__(self, asset: str):
        self.asset = asset
        super().__init__(f"Asset not supported as collateral: {asset!r}")


class InvalidPrice(ValidationError):
    """Фид вернул неположительную цену или некорректную точность."""

    def __init__(self, asset: str, price: object, decimals: object):
        self.asset = asset
        self.price = price
        self.decimals = decimals
        super().__init__(f"Invalid price for {asset!r}: price={price!r}, decimals={decimals!r}")


# =============================================================================
# LEDGER ARITHMETIC
# =============================================================================


class ArithmeticUnderflow(EngineError):
    """Списание превышает баланс леджера (баланс не может стать отрицательным)."""

    def __init__(self, ledger: str, key: object, balance: int, amount: int):
        self.ledger = ledger
        self.key = key
        self.balance = balance
        self.amount = amount
        super().__init__(
            f"{ledger} underflow for {key!r}: balance={balance}, requested={amount}"
        )


# =============================================================================
# EXTERNAL CALLS
# =============================================================================


class TransferFailed(EngineError):
    """Внешний transfer/transfer_from сообщил о неудаче."""

    def __init__(self, asset: str, sender: str, recipient: str, amount: int):
        self.asset = asset
        self.sender = sender
        self.recipient = recipient
        self.amount = amount
        super().__init__(
            f"Transfer of {amount} {asset} from {sender!r} to {recipient!r} failed"
        )


class MintFailed(EngineError):
    """Внешний mint debt-токена сообщил о неудаче."""

    def __init__(self, account: str, amount: int):
        self.account = account
        self.amount = amount
        super().__init__(f"Mint of {amount} debt to {account!r} failed")


class StalePrice(EngineError):
    """
    Цена фида устарела.

    Поднимается реализацией PriceFeed; движок пропагирует её без изменений.
    """

    def __init__(self, asset: str, detail: Optional[str] = None):
        self.asset = asset
        message = f"Stale price for {asset!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


# =============================================================================
# HEALTH FACTOR
# =============================================================================


class InvariantViolation(EngineError):
    """Нарушение инварианта после применения операции."""

    pass


class HealthFactorBroken(InvariantViolation):
    """Health factor счёта ниже минимального порога."""

    def __init__(self, account: str, health_factor: int, min_health_factor: int):
        self.account = account
        self.health_factor = health_factor
        self.min_health_factor = min_health_factor
        super().__init__(
            f"Health factor broken for {account!r}: {health_factor} < {min_health_factor}"
        )


class HealthFactorIsOK(EngineError):
    """Попытка ликвидировать здоровый счёт."""

    def __init__(self, account: str, health_factor: int):
        self.account = account
        self.health_factor = health_factor
        super().__init__(f"Health factor is OK for {account!r}: {health_factor}")


class HealthFactorNotImproved(EngineError):
    """Ликвидация не подняла health factor цели до порога."""

    def __init__(self, account: str, starting: int, ending: int):
        self.account = account
        self.starting = starting
        self.ending = ending
        super().__init__(
            f"Health factor not improved for {account!r}: {starting} -> {ending}"
        )


# =============================================================================
# CONCURRENCY
# =============================================================================


class ReentrancyError(EngineError):
    """Вложенный вход в защищённую операцию, пока другая в процессе."""

    def __init__(self, operation: str, in_flight: Optional[str] = None):
        self.operation = operation
        self.in_flight = in_flight
        super().__init__(
            f"Reentrant call to {operation!r} rejected (in flight: {in_flight!r})"
        )
