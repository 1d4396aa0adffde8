"""Проверки входов публичных операций (до любых изменений состояния)."""

from typing import Container

from src.core.math.fixed_point import is_uint
from src.engine.errors import UnsupportedAsset, ValidationError


def require_positive_amount(amount: object, name: str = "amount") -> int:
    """
    Сумма должна быть целым > 0.

    Raises:
        ValidationError: Если сумма не int, bool, ноль или отрицательная
    """
    if not is_uint(amount) or amount == 0:
        raise ValidationError(f"{name} must be a positive integer, got {amount!r}")
    return amount  # type: ignore[return-value]


def require_account(account: object, name: str = "account") -> str:
    """Идентификатор счёта — непустая строка."""
    if not isinstance(account, str) or not account:
        raise ValidationError(f"{name} must be a non-empty string, got {account!r}")
    return account


def require_registered(asset: str, registry: Container[str]) -> str:
    """
    Актив должен быть зарегистрирован как обеспечение.

    Raises:
        UnsupportedAsset: Если актив не зарегистрирован
    """
    if asset not in registry:
        raise UnsupportedAsset(asset)
    return asset
