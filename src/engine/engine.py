"""
Collateral Engine — публичные операции и read-аксессоры

Каждая изменяющая операция:
1. входит в ReentrancyGuard (вложенный вход → ReentrancyError)
2. открывает Transaction над стором и журналируемыми участниками
3. изменяет леджеры и записывает уведомления
4. проверяет health factor через оракул
5. вызывает внешние transfer / mint / burn
6. при успехе фиксирует уведомления; при любом исключении восстанавливает
   состояние и пропагирует ошибку
7. после выхода из guard доставляет зафиксированные уведомления подписчикам
   (ошибка подписчика логируется и не отменяет операцию)

Read-аксессоры не захватывают guard и не падают для счетов без строк.
"""

import functools
import logging
from collections import deque
from typing import Any, Callable, Deque, Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar

from src.core.domain.account import AccountInformation, AccountState, LiquidationResult, classify_account
from src.core.domain.events import LedgerEvent
from src.engine.collateral_ledger import CollateralLedger
from src.engine.config import DEFAULT_ENGINE_ADDRESS, EngineConfig, parse_engine_deployment
from src.engine.debt_ledger import DebtLedger
from src.engine.errors import LengthMismatch, ValidationError
from src.engine.guard import ReentrancyGuard, nonreentrant
from src.engine.health import AccountHealth
from src.engine.interfaces import CollateralAsset, DebtToken, Journaled, PriceFeed
from src.engine.liquidation import LiquidationCoordinator
from src.engine.oracle_adapter import PriceOracleAdapter
from src.engine.store import LedgerStore
from src.engine.transaction import Transaction
from src.engine.validation import require_account, require_positive_amount, require_registered

logger = logging.getLogger(__name__)

SNAPSHOT_SCHEMA_VERSION = "1"

F = TypeVar("F", bound=Callable)


def publishes_events(method: F) -> F:
    """
    Декоратор операции: доставка уведомлений после освобождения guard.

    Применяется поверх nonreentrant, поэтому подписчик может вызывать
    изменяющие операции движка.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        finally:
            self._publish()

    return wrapper  # type: ignore[return-value]


class CollateralEngine:
    """
    Движок обеспечения и ликвидаций overcollateralized synthetic debt.

    Владеет единственным LedgerStore; леджеры, расчёт health factor и
    координатор ликвидаций получают его по ссылке.
    """

    def __init__(
        self,
        collateral_assets: Sequence[CollateralAsset],
        price_feeds: Sequence[PriceFeed],
        debt_token: DebtToken,
        *,
        address: str = DEFAULT_ENGINE_ADDRESS,
        config: Optional[EngineConfig] = None,
        participants: Iterable[Journaled] = (),
    ):
        """
        Args:
            collateral_assets: Активы обеспечения в порядке регистрации
            price_feeds: Price feed для каждого актива (та же длина и порядок)
            debt_token: Debt-токен, которым управляет движок
            address: Адрес движка (хранитель обеспечения и сжигаемых токенов)
            config: Параметры протокола (по умолчанию — константы протокола)
            participants: Внешние объекты, чьё состояние откатывается вместе
                со стором при abort операции

        Raises:
            LengthMismatch: len(collateral_assets) != len(price_feeds)
            ValidationError: повторяющийся адрес актива
        """
        if len(collateral_assets) != len(price_feeds):
            raise LengthMismatch(len(collateral_assets), len(price_feeds))

        addresses = [asset.address for asset in collateral_assets]
        if len(set(addresses)) != len(addresses):
            raise ValidationError(f"Duplicate collateral asset in {addresses!r}")

        self.address = require_account(address, "address")
        self.config = config or EngineConfig()

        self._assets: Dict[str, CollateralAsset] = dict(zip(addresses, collateral_assets))
        self._debt_token = debt_token
        self._store = LedgerStore()
        self._guard = ReentrancyGuard()
        self._participants: List[Journaled] = [self._store, *participants]
        self._subscribers: List[Callable[[LedgerEvent], None]] = []
        # зафиксированные, но ещё не доставленные подписчикам события
        self._outbox: Deque[LedgerEvent] = deque()

        self._oracle = PriceOracleAdapter(zip(addresses, price_feeds), precision=self.config.precision)
        self._health = AccountHealth(self._store, self._oracle, self.config)
        self._collateral = CollateralLedger(self._store, self._assets, custodian=self.address)
        self._debt = DebtLedger(self._store, debt_token, custodian=self.address)
        self._liquidation = LiquidationCoordinator(
            self._store, self._collateral, self._debt, self._oracle, self._health, self.config
        )

        logger.info(
            "Collateral engine created",
            extra={"event": "engine.created", "engine": self.address, "assets": addresses},
        )

    @classmethod
    def from_config(
        cls,
        data: Dict[str, Any],
        assets: Mapping[str, CollateralAsset],
        price_feeds: Mapping[str, PriceFeed],
        debt_token: DebtToken,
        participants: Iterable[Journaled] = (),
    ) -> "CollateralEngine":
        """
        Создание движка из JSON-payload (контракт engine_config.json).

        Args:
            data: Payload с адресами активов, идентификаторами фидов и параметрами
            assets: Коллабораторы активов по адресу
            price_feeds: Фиды по идентификатору
            debt_token: Debt-токен

        Raises:
            jsonschema.ValidationError: Нарушение контракта
            ValidationError: Идентификатор из payload не найден среди коллабораторов
            LengthMismatch: Разная длина списков активов и фидов
        """
        deployment = parse_engine_deployment(data)

        missing = [a for a in deployment.collateral_assets if a not in assets]
        missing += [f for f in deployment.price_feeds if f not in price_feeds]
        if missing:
            raise ValidationError(f"Unknown collaborators in engine config: {missing!r}")

        return cls(
            [assets[a] for a in deployment.collateral_assets],
            [price_feeds[f] for f in deployment.price_feeds],
            debt_token,
            address=deployment.engine_address,
            config=deployment.parameters,
            participants=participants,
        )

    # =========================================================================
    # NOTIFICATIONS
    # =========================================================================

    def subscribe(self, callback: Callable[[LedgerEvent], None]) -> None:
        """Подписка на уведомления зафиксированных операций."""
        self._subscribers.append(callback)

    @property
    def events(self) -> List[LedgerEvent]:
        """История уведомлений зафиксированных операций."""
        return self._store.events

    def _atomic(self, operation: str) -> Transaction:
        return Transaction(self._participants, name=operation, on_commit=self._queue_committed)

    def _queue_committed(self) -> None:
        self._outbox.extend(self._store.commit_events())

    def _publish(self) -> None:
        """
        Доставка зафиксированных уведомлений подписчикам.

        Вызывается после выхода из guard: операция уже зафиксирована, поэтому
        ошибка подписчика логируется и не влияет ни на результат операции,
        ни на доставку остальным подписчикам.
        """
        while self._outbox:
            try:
                event = self._outbox.popleft()
            except IndexError:
                # очередь опустошил другой поток
                return
            for callback in list(self._subscribers):
                try:
                    callback(event)
                except Exception as e:
                    logger.error(
                        "Subscriber failed",
                        exc_info=True,
                        extra={
                            "event": "engine.subscriber_failed",
                            "event_type": event.event_type.value,
                            "error": type(e).__name__,
                        },
                    )

    # =========================================================================
    # MUTATING OPERATIONS
    # =========================================================================

    @publishes_events
    @nonreentrant
    def deposit_collateral(self, caller: str, asset: str, amount: int) -> None:
        """Зачисление обеспечения caller."""
        require_account(caller, "caller")
        with self._atomic("deposit_collateral"):
            self._collateral.deposit(caller, asset, amount)

    @publishes_events
    @nonreentrant
    def mint_debt(self, caller: str, amount: int) -> None:
        """
        Выпуск долга caller.

        Raises:
            HealthFactorBroken: долг сломал бы health factor (ничего не изменено)
            MintFailed: внешний mint вернул False
        """
        require_account(caller, "caller")
        with self._atomic("mint_debt"):
            self._debt.mint(caller, amount, verify=self._health.require_healthy)

    @publishes_events
    @nonreentrant
    def deposit_collateral_and_mint_debt(
        self, caller: str, asset: str, collateral_amount: int, debt_amount: int
    ) -> None:
        """Зачисление обеспечения и выпуск долга одной атомарной операцией."""
        require_account(caller, "caller")
        require_positive_amount(collateral_amount, "collateral_amount")
        require_positive_amount(debt_amount, "debt_amount")
        require_registered(asset, self._assets)
        with self._atomic("deposit_collateral_and_mint_debt"):
            self._collateral.deposit(caller, asset, collateral_amount)
            self._debt.mint(caller, debt_amount, verify=self._health.require_healthy)

    @publishes_events
    @nonreentrant
    def redeem_collateral(self, caller: str, asset: str, amount: int) -> None:
        """
        Вывод обеспечения caller себе.

        Raises:
            ArithmeticUnderflow: amount больше баланса
            HealthFactorBroken: вывод сломал бы health factor
        """
        require_account(caller, "caller")
        with self._atomic("redeem_collateral"):
            self._collateral.redeem(caller, caller, asset, amount)
            self._health.require_healthy(caller)

    @publishes_events
    @nonreentrant
    def burn_debt(self, caller: str, amount: int) -> None:
        """Погашение собственного долга caller."""
        require_account(caller, "caller")
        with self._atomic("burn_debt"):
            self._debt.burn(caller, caller, amount)
            self._health.require_healthy(caller)

    @publishes_events
    @nonreentrant
    def redeem_collateral_for_debt(
        self, caller: str, asset: str, collateral_amount: int, debt_amount: int
    ) -> None:
        """Погашение долга и вывод обеспечения одной атомарной операцией."""
        require_account(caller, "caller")
        require_positive_amount(collateral_amount, "collateral_amount")
        require_positive_amount(debt_amount, "debt_amount")
        require_registered(asset, self._assets)
        with self._atomic("redeem_collateral_for_debt"):
            self._debt.burn(caller, caller, debt_amount)
            self._collateral.redeem(caller, caller, asset, collateral_amount)
            self._health.require_healthy(caller)

    @publishes_events
    @nonreentrant
    def liquidate(self, caller: str, seized_asset: str, target: str, debt_to_cover: int) -> LiquidationResult:
        """
        Ликвидация счёта target ликвидатором caller.

        См. LiquidationCoordinator.liquidate.
        """
        require_account(caller, "caller")
        require_account(target, "target")
        with self._atomic("liquidate"):
            return self._liquidation.liquidate(caller, seized_asset, target, debt_to_cover)

    # =========================================================================
    # READ ACCESSORS
    # =========================================================================

    def get_account_information(self, account: str) -> AccountInformation:
        return self._health.account_information(account)

    def get_health_factor(self, account: str) -> int:
        return self._health.health_factor(account)

    def calculate_health_factor(self, total_debt: int, collateral_value_usd: int) -> int:
        return self._health.calculate(total_debt, collateral_value_usd)

    def get_account_collateral_value(self, account: str) -> int:
        return self._health.collateral_value_usd(account)

    def get_collateral_balance_of_user(self, account: str, asset: str) -> int:
        return self._store.collateral_balance(account, asset)

    def get_minted_debt(self, account: str) -> int:
        return self._store.debt_balance(account)

    def get_usd_value(self, asset: str, amount: int) -> int:
        return self._oracle.to_usd(asset, amount)

    def get_token_amount_from_usd(self, asset: str, usd_amount: int) -> int:
        return self._oracle.to_asset_amount(asset, usd_amount)

    def get_collateral_tokens(self) -> List[str]:
        return self._oracle.assets

    def get_collateral_token_price_feed(self, asset: str) -> Optional[PriceFeed]:
        return self._oracle.price_feed(asset)

    def get_debt_token(self) -> DebtToken:
        return self._debt_token

    def get_accounts(self) -> List[str]:
        """Счета, у которых есть строки леджеров."""
        return self._store.accounts()

    def get_total_debt(self) -> int:
        return self._store.total_debt()

    def get_precision(self) -> int:
        return self.config.precision

    def get_additional_feed_precision(self) -> int:
        return self.config.additional_feed_precision

    def get_liquidation_threshold(self) -> int:
        return self.config.liquidation_threshold

    def get_liquidation_bonus(self) -> int:
        return self.config.liquidation_bonus

    def get_liquidation_precision(self) -> int:
        return self.config.liquidation_precision

    def get_min_health_factor(self) -> int:
        return self.config.min_health_factor

    def get_account_state(self, account: str) -> AccountState:
        has_collateral = any(
            self._store.collateral_balance(account, asset) > 0 for asset in self._oracle.assets
        )
        return classify_account(
            has_collateral,
            self._store.debt_balance(account),
            self._health.health_factor(account),
            self.config.min_health_factor,
        )

    def snapshot_account(self, account: str) -> Dict[str, Any]:
        """Снапшот счёта (контракт account_snapshot.json)."""
        info = self._health.account_information(account)
        return {
            "schema_version": SNAPSHOT_SCHEMA_VERSION,
            "account": account,
            "state": self.get_account_state(account).value,
            "collateral": {
                asset: self._store.collateral_balance(account, asset) for asset in self._oracle.assets
            },
            "total_debt_minted": info.total_debt_minted,
            "collateral_value_usd": info.collateral_value_usd,
            "health_factor": self.calculate_health_factor(
                info.total_debt_minted, info.collateral_value_usd
            ),
        }
