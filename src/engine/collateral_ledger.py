"""
Collateral Ledger — учёт обеспечения по счетам и активам

Порядок checks-effects-interactions для каждой операции:
1. Проверки (сумма > 0, актив зарегистрирован, достаточный баланс)
2. Изменение баланса + запись уведомления
3. Внешний вызов актива (transfer_from / transfer)

Ledger не проверяет health factor: redeem используется и как самостоятельная
операция (с проверкой в движке), и внутри ликвидации (с отложенной проверкой).
"""

import logging
from typing import Mapping

from src.core.domain.events import CollateralDeposited, CollateralRedeemed
from src.engine.errors import TransferFailed
from src.engine.interfaces import CollateralAsset
from src.engine.store import LedgerStore
from src.engine.validation import require_positive_amount, require_registered

logger = logging.getLogger(__name__)


class CollateralLedger:
    """Зачисление и списание обеспечения."""

    def __init__(
        self,
        store: LedgerStore,
        assets: Mapping[str, CollateralAsset],
        custodian: str,
    ):
        """
        Args:
            store: Стор движка (общий с DebtLedger)
            assets: Коллабораторы активов по адресу
            custodian: Адрес движка, на хранении которого находится обеспечение
        """
        self._store = store
        self._assets = assets
        self._custodian = custodian

    def balance_of(self, account: str, asset: str) -> int:
        return self._store.collateral_balance(account, asset)

    def deposit(self, account: str, asset: str, amount: int) -> int:
        """
        Зачисление обеспечения и забор актива со счёта account.

        Returns:
            Новый баланс обеспечения

        Raises:
            ValidationError: amount <= 0 или актив не зарегистрирован
            TransferFailed: transfer_from вернул False
        """
        require_positive_amount(amount)
        require_registered(asset, self._assets)

        balance = self._store.credit_collateral(account, asset, amount)
        self._store.record(CollateralDeposited(account=account, asset=asset, amount=amount))

        if not self._assets[asset].transfer_from(account, self._custodian, amount):
            raise TransferFailed(asset, account, self._custodian, amount)

        logger.info(
            "Collateral deposited",
            extra={"event": "engine.collateral_deposited", "account": account, "asset": asset, "amount": amount},
        )
        return balance

    def redeem(self, redeemed_from: str, redeemed_to: str, asset: str, amount: int) -> int:
        """
        Списание обеспечения со счёта redeemed_from и отправка актива redeemed_to.

        Returns:
            Новый баланс обеспечения redeemed_from

        Raises:
            ValidationError: amount <= 0 или актив не зарегистрирован
            ArithmeticUnderflow: amount больше баланса
            TransferFailed: transfer вернул False
        """
        require_positive_amount(amount)
        require_registered(asset, self._assets)

        balance = self._store.debit_collateral(redeemed_from, asset, amount)
        self._store.record(
            CollateralRedeemed(
                redeemed_from=redeemed_from,
                redeemed_to=redeemed_to,
                asset=asset,
                amount=amount,
            )
        )

        if not self._assets[asset].transfer(redeemed_to, amount):
            raise TransferFailed(asset, self._custodian, redeemed_to, amount)

        logger.info(
            "Collateral redeemed",
            extra={
                "event": "engine.collateral_redeemed",
                "from": redeemed_from,
                "to": redeemed_to,
                "asset": asset,
                "amount": amount,
            },
        )
        return balance
