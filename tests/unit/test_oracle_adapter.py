"""
Тесты для Price Oracle Adapter

Проверяет:
1. Конверсии to_usd / to_asset_amount для фидов разной точности
2. Обратимость конверсий в пределах округления
3. Пропагацию StalePrice и отклонение неположительных цен
4. Независимость чтений (каждый вызов — новый запрос цены)
"""

import pytest

from src.core.math.fixed_point import PRECISION
from src.engine.errors import InvalidPrice, StalePrice, UnsupportedAsset
from src.engine.oracle_adapter import PriceOracleAdapter
from tests.fakes import StaticPriceFeed


@pytest.fixture
def feeds():
    return {
        "weth": StaticPriceFeed(2000 * 10**8, 8),
        "wbtc": StaticPriceFeed(30_000 * 10**18, 18),
        "usdc": StaticPriceFeed(1 * 10**6, 6),
    }


@pytest.fixture
def oracle(feeds) -> PriceOracleAdapter:
    return PriceOracleAdapter(feeds.items())


class TestToUsd:
    """Тесты для to_usd"""

    def test_get_usd_value(self, oracle) -> None:
        """15 ETH по 2000 USD = 30_000 USD"""
        assert oracle.to_usd("weth", 15 * PRECISION) == 30_000 * PRECISION

    def test_18_decimal_feed(self, oracle) -> None:
        assert oracle.to_usd("wbtc", 2 * PRECISION) == 60_000 * PRECISION

    def test_6_decimal_feed(self, oracle) -> None:
        assert oracle.to_usd("usdc", 5 * PRECISION) == 5 * PRECISION

    def test_zero_amount_skips_feed(self, oracle, feeds) -> None:
        """Нулевая сумма не запрашивает цену"""
        feeds["weth"].stale = True
        assert oracle.to_usd("weth", 0) == 0
        assert feeds["weth"].reads == 0

    def test_unregistered_asset(self, oracle) -> None:
        with pytest.raises(UnsupportedAsset):
            oracle.to_usd("doge", PRECISION)


class TestToAssetAmount:
    """Тесты для to_asset_amount"""

    def test_get_token_amount_from_usd(self, oracle) -> None:
        """100 USD при 2000 USD/ETH = 0.05 ETH"""
        assert oracle.to_asset_amount("weth", 100 * PRECISION) == PRECISION // 20

    def test_rounds_down(self, oracle, feeds) -> None:
        feeds["weth"].set_price(18 * 10**8)
        assert oracle.to_asset_amount("weth", 100 * PRECISION) == 5_555_555_555_555_555_555

    @pytest.mark.parametrize("price", [1, 18 * 10**8, 2000 * 10**8, 99_999 * 10**8])
    def test_roundtrip(self, oracle, feeds, price: int) -> None:
        """Инвариант: to_asset_amount(to_usd(amount)) ≈ amount"""
        feeds["weth"].set_price(price)
        amount = 3 * PRECISION + 17
        back = oracle.to_asset_amount("weth", oracle.to_usd("weth", amount))
        normalized = price * 10**10
        assert back <= amount
        assert amount - back <= PRECISION // normalized + 1


class TestFeedFailures:
    """Тесты ошибок фида"""

    def test_stale_price_propagates_unchanged(self, oracle, feeds) -> None:
        feeds["weth"].stale = True
        with pytest.raises(StalePrice) as exc_info:
            oracle.to_usd("weth", PRECISION)
        assert exc_info.value.asset == "weth"

    @pytest.mark.parametrize("price", [0, -2000 * 10**8])
    def test_non_positive_price_rejected(self, oracle, feeds, price: int) -> None:
        feeds["weth"].set_price(price)
        with pytest.raises(InvalidPrice):
            oracle.to_usd("weth", PRECISION)

    def test_each_call_reads_feed(self, oracle, feeds) -> None:
        """Каждый вызов — независимое чтение; обновление фида видно сразу"""
        first = oracle.to_usd("weth", PRECISION)
        feeds["weth"].set_price(1000 * 10**8)
        second = oracle.to_usd("weth", PRECISION)
        assert first == 2000 * PRECISION
        assert second == 1000 * PRECISION
        assert feeds["weth"].reads == 2


class TestRegistry:
    """Тесты реестра фидов"""

    def test_registration_order_preserved(self, oracle) -> None:
        assert oracle.assets == ["weth", "wbtc", "usdc"]

    def test_unregistered_feed_is_none(self, oracle) -> None:
        assert oracle.price_feed("doge") is None
