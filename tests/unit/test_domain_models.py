"""
Unit tests for domain models (events, account read models, solvency)
"""

import logging

import pytest
from pydantic import ValidationError

from src.core.domain import (
    AccountInformation,
    AccountState,
    CollateralDeposited,
    DebtBurned,
    EventType,
    LiquidationResult,
    SolvencyReport,
    classify_account,
)
from src.core.math.fixed_point import MAX_UINT256, PRECISION
from src.engine import SolvencyMonitor
from tests.conftest import FEED_DECIMALS, LIQUIDATOR, USER


class TestLedgerEvents:
    """Тесты событий леджера"""

    def test_event_type_default(self) -> None:
        event = CollateralDeposited(account=USER, asset="weth", amount=1)
        assert event.event_type == EventType.COLLATERAL_DEPOSITED

    def test_frozen(self) -> None:
        event = DebtBurned(on_behalf_of=USER, payer=LIQUIDATOR, amount=1)
        with pytest.raises(ValidationError):
            event.amount = 2

    def test_non_positive_amount_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CollateralDeposited(account=USER, asset="weth", amount=0)

    def test_empty_account_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CollateralDeposited(account="", asset="weth", amount=1)


class TestClassifyAccount:
    """Тесты classify_account"""

    @pytest.mark.parametrize(
        "has_collateral,debt,health_factor,expected",
        [
            (False, 0, MAX_UINT256, AccountState.UNUSED),
            (True, 0, MAX_UINT256, AccountState.COLLATERALIZED),
            (True, 100, 100 * PRECISION, AccountState.INDEBTED),
            (True, 100, PRECISION, AccountState.INDEBTED),
            (True, 100, PRECISION - 1, AccountState.LIQUIDATABLE),
            (False, 100, 0, AccountState.LIQUIDATABLE),
        ],
    )
    def test_states(self, has_collateral: bool, debt: int, health_factor: int, expected) -> None:
        assert classify_account(has_collateral, debt, health_factor) == expected


class TestReadModels:
    """Тесты read-моделей"""

    def test_account_information_tuple(self) -> None:
        info = AccountInformation(total_debt_minted=5, collateral_value_usd=7)
        assert info.as_tuple() == (5, 7)

    def test_account_information_non_negative(self) -> None:
        with pytest.raises(ValidationError):
            AccountInformation(total_debt_minted=-1, collateral_value_usd=0)

    def test_liquidation_result_total(self) -> None:
        result = LiquidationResult(
            liquidator=LIQUIDATOR,
            target=USER,
            asset="weth",
            debt_covered=100,
            collateral_seized_base=50,
            collateral_bonus=5,
            collateral_seized_total=55,
            starting_health_factor=0,
            ending_health_factor=MAX_UINT256,
        )
        assert result.collateral_seized_base + result.collateral_bonus == result.collateral_seized_total

    def test_solvency_report(self) -> None:
        assert SolvencyReport(total_collateral_value_usd=10, total_debt=10, accounts_checked=1).is_solvent
        assert not SolvencyReport(total_collateral_value_usd=9, total_debt=10, accounts_checked=1).is_solvent


class TestSolvencyMonitor:
    """Тесты SolvencyMonitor"""

    def test_empty_engine(self, engine) -> None:
        report = SolvencyMonitor(engine).report()
        assert report.accounts_checked == 0
        assert report.is_solvent

    def test_solvent_with_liquidatable_account(self, engine_liquidatable) -> None:
        """30 ETH по 18 USD = 540 USD против 200 долга"""
        report = SolvencyMonitor(engine_liquidatable).report()

        assert report.total_collateral_value_usd == 540 * PRECISION
        assert report.total_debt == 200 * PRECISION
        assert report.accounts_checked == 2
        assert report.liquidatable_accounts == [USER]
        assert report.is_solvent

    def test_insolvent(self, engine_liquidatable, eth_usd, caplog) -> None:
        """ETH = 5 USD: 150 USD обеспечения против 200 долга"""
        eth_usd.set_price(5 * 10**FEED_DECIMALS)

        with caplog.at_level(logging.WARNING, logger="src.engine.solvency"):
            report = SolvencyMonitor(engine_liquidatable).report()

        assert not report.is_solvent
        assert report.liquidatable_accounts == [USER, LIQUIDATOR]
        assert any(getattr(r, "event", None) == "engine.insolvent" for r in caplog.records)
