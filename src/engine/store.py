"""
Ledger Store — единственное изменяемое состояние движка

Таблицы:
- collateral[(account, asset)] → int ≥ 0
- debt[account] → int ≥ 0
- pending events (журнал уведомлений текущей операции)
- committed events (история уведомлений завершённых операций)

Строка создаётся неявно нулевой при первом зачислении и никогда не удаляется:
обнулённый баланс остаётся строкой с нулём.

Стор принадлежит одному экземпляру движка и передаётся леджерам по ссылке,
поэтому несколько независимых движков не делят состояние.
"""

from typing import Any, Dict, Iterator, List, Tuple

from src.core.domain.events import LedgerEvent
from src.engine.errors import ArithmeticUnderflow


class LedgerStore:
    """Таблицы балансов обеспечения и долга с поддержкой snapshot/restore."""

    def __init__(self):
        self._collateral: Dict[Tuple[str, str], int] = {}
        self._debt: Dict[str, int] = {}
        self._pending_events: List[LedgerEvent] = []
        self._committed_events: List[LedgerEvent] = []

    # -------------------------------------------------------------------------
    # Collateral
    # -------------------------------------------------------------------------

    def collateral_balance(self, account: str, asset: str) -> int:
        return self._collateral.get((account, asset), 0)

    def credit_collateral(self, account: str, asset: str, amount: int) -> int:
        """Зачисление обеспечения. Возвращает новый баланс."""
        key = (account, asset)
        balance = self._collateral.get(key, 0) + amount
        self._collateral[key] = balance
        return balance

    def debit_collateral(self, account: str, asset: str, amount: int) -> int:
        """
        Списание обеспечения.

        Raises:
            ArithmeticUnderflow: Если amount больше баланса (баланс не меняется)
        """
        key = (account, asset)
        balance = self._collateral.get(key, 0)
        if amount > balance:
            raise ArithmeticUnderflow("collateral", key, balance, amount)
        self._collateral[key] = balance - amount
        return balance - amount

    def collateral_rows(self) -> Iterator[Tuple[str, str, int]]:
        """Все строки обеспечения (account, asset, balance), включая нулевые."""
        for (account, asset), balance in self._collateral.items():
            yield account, asset, balance

    # -------------------------------------------------------------------------
    # Debt
    # -------------------------------------------------------------------------

    def debt_balance(self, account: str) -> int:
        return self._debt.get(account, 0)

    def credit_debt(self, account: str, amount: int) -> int:
        balance = self._debt.get(account, 0) + amount
        self._debt[account] = balance
        return balance

    def debit_debt(self, account: str, amount: int) -> int:
        """
        Погашение долга.

        Raises:
            ArithmeticUnderflow: Если amount больше долга (долг не меняется)
        """
        balance = self._debt.get(account, 0)
        if amount > balance:
            raise ArithmeticUnderflow("debt", account, balance, amount)
        self._debt[account] = balance - amount
        return balance - amount

    def total_debt(self) -> int:
        return sum(self._debt.values())

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    def accounts(self) -> List[str]:
        """Счета, у которых есть хотя бы одна строка леджера, в порядке появления."""
        seen: Dict[str, None] = {}
        for account, _asset in self._collateral:
            seen.setdefault(account, None)
        for account in self._debt:
            seen.setdefault(account, None)
        return list(seen)

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def record(self, event: LedgerEvent) -> None:
        """Запись уведомления текущей операции."""
        self._pending_events.append(event)

    def commit_events(self) -> List[LedgerEvent]:
        """Перенос уведомлений текущей операции в историю. Возвращает перенесённые."""
        committed = self._pending_events
        self._pending_events = []
        self._committed_events.extend(committed)
        return committed

    @property
    def pending_events(self) -> List[LedgerEvent]:
        return list(self._pending_events)

    @property
    def events(self) -> List[LedgerEvent]:
        return list(self._committed_events)

    # -------------------------------------------------------------------------
    # Journaled
    # -------------------------------------------------------------------------

    def snapshot(self) -> Any:
        # события immutable, достаточно поверхностных копий списков
        return (
            dict(self._collateral),
            dict(self._debt),
            list(self._pending_events),
            list(self._committed_events),
        )

    def restore(self, state: Any) -> None:
        collateral, debt, pending, committed = state
        self._collateral = dict(collateral)
        self._debt = dict(debt)
        self._pending_events = list(pending)
        self._committed_events = list(committed)
