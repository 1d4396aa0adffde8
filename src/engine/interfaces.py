"""
External Collaborators — интерфейсы внешних участников

Движок не реализует собственный учёт токенов и оракула, а работает через
эти протоколы. Любой внешний вызов потенциально враждебен: он может
повторно войти в движок (reentrancy) или вернуть False.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CollateralAsset(Protocol):
    """Актив обеспечения (один на зарегистрированный актив)."""

    address: str

    def transfer_from(self, sender: str, recipient: str, amount: int) -> bool: ...

    def transfer(self, recipient: str, amount: int) -> bool: ...

    def balance_of(self, account: str) -> int: ...


@runtime_checkable
class DebtToken(Protocol):
    """
    Debt-токен, привязанный 1:1 к USD.

    Движок — единственный авторизованный minter/burner. burn() сжигает
    токены, находящиеся на хранении у движка.
    """

    address: str

    def mint(self, to: str, amount: int) -> bool: ...

    def burn(self, amount: int) -> None: ...

    def transfer_from(self, sender: str, recipient: str, amount: int) -> bool: ...

    def balance_of(self, account: str) -> int: ...


@runtime_checkable
class PriceFeed(Protocol):
    """
    Ценовой фид.

    latest_price возвращает (price, decimals); проверка устаревания — на
    стороне фида (поднимает StalePrice).
    """

    def latest_price(self, asset: str) -> tuple[int, int]: ...


@runtime_checkable
class Journaled(Protocol):
    """
    Участник атомарной операции: состояние можно снять и восстановить.

    snapshot() должен возвращать независимую копию состояния.
    """

    def snapshot(self) -> Any: ...

    def restore(self, state: Any) -> None: ...
