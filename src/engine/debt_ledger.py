"""
Debt Ledger — учёт выпущенного долга по счетам

mint: увеличение долга → проверка health factor (callback) → внешний mint.
Счёт со сломанным health factor отклоняется до того, как токены появятся.

burn: уменьшение долга → забор debt-токенов у payer на хранение движка →
сжигание забранных токенов.
"""

import logging
from typing import Callable

from src.core.domain.events import DebtBurned, DebtMinted
from src.engine.errors import MintFailed, TransferFailed
from src.engine.interfaces import DebtToken
from src.engine.store import LedgerStore
from src.engine.validation import require_positive_amount

logger = logging.getLogger(__name__)


class DebtLedger:
    """Выпуск и погашение долга."""

    def __init__(self, store: LedgerStore, debt_token: DebtToken, custodian: str):
        self._store = store
        self._debt_token = debt_token
        self._custodian = custodian

    def balance_of(self, account: str) -> int:
        return self._store.debt_balance(account)

    def mint(self, account: str, amount: int, verify: Callable[[str], None]) -> int:
        """
        Выпуск долга.

        Args:
            account: Получатель долга и токенов
            amount: Сумма (base units)
            verify: Проверка health factor после увеличения долга;
                должна поднять исключение, если health factor сломан

        Returns:
            Новый долг счёта

        Raises:
            ValidationError: amount <= 0
            HealthFactorBroken: из verify
            MintFailed: внешний mint вернул False
        """
        require_positive_amount(amount)

        balance = self._store.credit_debt(account, amount)
        self._store.record(DebtMinted(account=account, amount=amount))
        verify(account)

        if not self._debt_token.mint(account, amount):
            raise MintFailed(account, amount)

        logger.info(
            "Debt minted",
            extra={"event": "engine.debt_minted", "account": account, "amount": amount},
        )
        return balance

    def burn(self, on_behalf_of: str, payer: str, amount: int) -> int:
        """
        Погашение долга on_behalf_of токенами payer.

        Returns:
            Новый долг on_behalf_of

        Raises:
            ValidationError: amount <= 0
            ArithmeticUnderflow: amount больше долга
            TransferFailed: transfer_from debt-токена вернул False
        """
        require_positive_amount(amount)

        balance = self._store.debit_debt(on_behalf_of, amount)
        self._store.record(DebtBurned(on_behalf_of=on_behalf_of, payer=payer, amount=amount))

        if not self._debt_token.transfer_from(payer, self._custodian, amount):
            raise TransferFailed(self._debt_token.address, payer, self._custodian, amount)
        self._debt_token.burn(amount)

        logger.info(
            "Debt burned",
            extra={
                "event": "engine.debt_burned",
                "on_behalf_of": on_behalf_of,
                "payer": payer,
                "amount": amount,
            },
        )
        return balance
