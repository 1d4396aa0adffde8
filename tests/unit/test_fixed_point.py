"""
Тесты для модуля Fixed-Point Arithmetic

Проверяет:
1. mul_div: точность и округление вниз
2. Нормализацию цен фидов разной точности
3. Конверсии USD ↔ base units и их обратимость
4. Валидацию входов
"""

import pytest

from src.core.math.fixed_point import (
    ADDITIONAL_FEED_PRECISION,
    MAX_UINT256,
    PRECISION,
    asset_amount,
    is_uint,
    mul_div,
    normalize_price,
    percent_of,
    usd_value,
    validate_uint,
)

# =============================================================================
# ТЕСТЫ КОНСТАНТ
# =============================================================================


class TestConstants:
    """Тесты параметров точности"""

    def test_precision_is_18_decimals(self) -> None:
        """PRECISION = 1e18"""
        assert PRECISION == 10**18

    def test_feed_precision_bridges_8_to_18(self) -> None:
        """8-значный фид * ADDITIONAL_FEED_PRECISION = 18 знаков"""
        assert 10**8 * ADDITIONAL_FEED_PRECISION == PRECISION

    def test_max_uint256(self) -> None:
        assert MAX_UINT256 == 2**256 - 1


# =============================================================================
# ТЕСТЫ mul_div
# =============================================================================


class TestMulDiv:
    """Тесты для mul_div"""

    def test_exact_division(self) -> None:
        """Точное деление без остатка"""
        assert mul_div(10 * PRECISION, 2000 * PRECISION, PRECISION) == 20_000 * PRECISION

    def test_rounds_down(self) -> None:
        """Остаток отбрасывается (округление вниз)"""
        assert mul_div(100 * PRECISION, PRECISION, 18 * PRECISION) == 5_555_555_555_555_555_555
        assert mul_div(1, 1, 2) == 0

    def test_no_intermediate_overflow(self) -> None:
        """Произведение больше 2**256 не теряет точность"""
        big = MAX_UINT256
        assert mul_div(big, big, big) == big

    def test_zero_denominator_rejected(self) -> None:
        """Деление на ноль запрещено"""
        with pytest.raises(ValueError, match="denominator"):
            mul_div(1, 1, 0)

    def test_negative_operand_rejected(self) -> None:
        with pytest.raises(ValueError):
            mul_div(-1, 1, 1)

    def test_percent_of(self) -> None:
        """Процентная доля"""
        assert percent_of(20_000 * PRECISION, 50) == 10_000 * PRECISION
        assert percent_of(5_555_555_555_555_555_555, 10) == 555_555_555_555_555_555


# =============================================================================
# ТЕСТЫ НОРМАЛИЗАЦИИ ЦЕН
# =============================================================================


class TestNormalizePrice:
    """Тесты для normalize_price"""

    @pytest.mark.parametrize(
        "price,decimals",
        [
            (2000 * 10**8, 8),
            (2000 * 10**6, 6),
            (2000 * 10**18, 18),
            (2000 * 10**20, 20),
            (2000, 0),
        ],
    )
    def test_all_precisions_normalize_to_18(self, price: int, decimals: int) -> None:
        """Цена 2000 USD при любой точности фида → 2000e18"""
        assert normalize_price(price, decimals) == 2000 * PRECISION

    def test_higher_precision_rounds_down(self) -> None:
        """Лишние знаки отбрасываются"""
        assert normalize_price(123_456_789, 20) == 1_234_567

    def test_non_positive_price_rejected(self) -> None:
        with pytest.raises(ValueError, match="price"):
            normalize_price(0, 8)
        with pytest.raises(ValueError, match="price"):
            normalize_price(-1, 8)

    def test_negative_decimals_rejected(self) -> None:
        with pytest.raises(ValueError, match="decimals"):
            normalize_price(100, -1)


# =============================================================================
# ТЕСТЫ КОНВЕРСИЙ
# =============================================================================


class TestConversions:
    """Тесты usd_value / asset_amount"""

    def test_usd_value(self) -> None:
        """15 ETH по 2000 USD = 30_000 USD"""
        assert usd_value(15 * PRECISION, 2000 * PRECISION) == 30_000 * PRECISION

    def test_asset_amount(self) -> None:
        """100 USD по 2000 USD/ETH = 0.05 ETH"""
        assert asset_amount(100 * PRECISION, 2000 * PRECISION) == PRECISION // 20

    @pytest.mark.parametrize("price", [1, 18 * PRECISION, 2000 * PRECISION, 123_456_789_012 * PRECISION])
    def test_roundtrip_within_rounding(self, price: int) -> None:
        """Инвариант: amount → USD → amount теряет не больше одного шага округления"""
        amount = 7 * PRECISION + 123
        back = asset_amount(usd_value(amount, price), price)
        assert back <= amount
        # потеря ограничена одним шагом цены в base units
        assert amount - back <= PRECISION // price + 1


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ
# =============================================================================


class TestValidation:
    """Тесты is_uint / validate_uint"""

    def test_accepts_non_negative_int(self) -> None:
        assert is_uint(0)
        assert is_uint(MAX_UINT256)
        assert validate_uint(5) == 5

    def test_rejects_bool_float_negative(self) -> None:
        """bool, float и отрицательные не являются uint"""
        assert not is_uint(True)
        assert not is_uint(1.0)
        assert not is_uint(-1)
        with pytest.raises(ValueError, match="amount"):
            validate_uint(-5, "amount")
