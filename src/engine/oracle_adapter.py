"""
Price Oracle Adapter — конверсия сумм активов в USD и обратно

Цена запрашивается у фида при каждом вызове (независимое чтение): два вызова
внутри одной операции могут вернуть разные цены, если фид обновился между
ними. Ошибки фида (StalePrice) пропагируют без изменений.

Все цены приводятся к 18 знакам независимо от точности фида.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from src.core.math.fixed_point import PRECISION, asset_amount, normalize_price, usd_value
from src.engine.errors import InvalidPrice, UnsupportedAsset
from src.engine.interfaces import PriceFeed


class PriceOracleAdapter:
    """Реестр price feeds по активам в порядке регистрации."""

    def __init__(self, feeds: Iterable[Tuple[str, PriceFeed]], precision: int = PRECISION):
        self._feeds: Dict[str, PriceFeed] = dict(feeds)
        self.precision = precision

    @property
    def assets(self) -> List[str]:
        """Активы в порядке регистрации."""
        return list(self._feeds)

    def price_feed(self, asset: str) -> Optional[PriceFeed]:
        """Фид актива или None для незарегистрированного актива."""
        return self._feeds.get(asset)

    def normalized_price(self, asset: str) -> int:
        """
        Текущая цена актива с 18 знаками.

        Raises:
            UnsupportedAsset: Актив не зарегистрирован
            InvalidPrice: Фид вернул неположительную цену или некорректную точность
            StalePrice: Пропагирует из фида
        """
        feed = self._feeds.get(asset)
        if feed is None:
            raise UnsupportedAsset(asset)

        price, decimals = feed.latest_price(asset)
        try:
            normalized = normalize_price(price, decimals)
        except ValueError as e:
            raise InvalidPrice(asset, price, decimals) from e
        # цена ниже 1e-18 USD обнуляется при нормализации
        if normalized == 0:
            raise InvalidPrice(asset, price, decimals)
        return normalized

    def to_usd(self, asset: str, amount: int) -> int:
        """
        USD-стоимость amount base units актива (18 знаков).

        Examples:
            10 * 1e18 единиц по 2000 USD → 20_000 * 1e18
        """
        if amount == 0:
            return 0
        return usd_value(amount, self.normalized_price(asset), self.precision)

    def to_asset_amount(self, asset: str, usd_amount: int) -> int:
        """
        Количество base units актива на usd_amount (18 знаков), округление вниз.

        Используется для расчёта изъятия при ликвидации.
        """
        return asset_amount(usd_amount, self.normalized_price(asset), self.precision)
