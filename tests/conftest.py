"""Shared test fixtures."""

import pytest

from src.engine import CollateralEngine
from tests.fakes import InMemoryDebtToken, InMemoryToken, StaticPriceFeed

ETHER = 10**18
FEED_DECIMALS = 8

USER = "user"
LIQUIDATOR = "liquidator"

COLLATERAL_AMOUNT = 10 * ETHER
AMOUNT_TO_MINT = 100 * ETHER
LIQUIDATOR_COLLATERAL = 20 * ETHER

ETH_USD_PRICE = 2000 * 10**FEED_DECIMALS
BTC_USD_PRICE = 1000 * 10**FEED_DECIMALS


@pytest.fixture
def weth() -> InMemoryToken:
    return InMemoryToken("weth")


@pytest.fixture
def wbtc() -> InMemoryToken:
    return InMemoryToken("wbtc")


@pytest.fixture
def dsc() -> InMemoryDebtToken:
    return InMemoryDebtToken("dsc")


@pytest.fixture
def eth_usd() -> StaticPriceFeed:
    return StaticPriceFeed(ETH_USD_PRICE, FEED_DECIMALS)


@pytest.fixture
def btc_usd() -> StaticPriceFeed:
    return StaticPriceFeed(BTC_USD_PRICE, FEED_DECIMALS)


@pytest.fixture
def engine(weth, wbtc, dsc, eth_usd, btc_usd) -> CollateralEngine:
    """Движок с weth/wbtc; балансы токенов откатываются вместе с леджерами."""
    weth.mint_to(USER, COLLATERAL_AMOUNT)
    weth.mint_to(LIQUIDATOR, LIQUIDATOR_COLLATERAL)
    wbtc.mint_to(USER, COLLATERAL_AMOUNT)
    return CollateralEngine(
        [weth, wbtc],
        [eth_usd, btc_usd],
        dsc,
        participants=[weth, wbtc, dsc],
    )


@pytest.fixture
def engine_deposited(engine) -> CollateralEngine:
    engine.deposit_collateral(USER, "weth", COLLATERAL_AMOUNT)
    return engine


@pytest.fixture
def engine_minted(engine) -> CollateralEngine:
    engine.deposit_collateral_and_mint_debt(USER, "weth", COLLATERAL_AMOUNT, AMOUNT_TO_MINT)
    return engine


@pytest.fixture
def engine_liquidatable(engine_minted, eth_usd) -> CollateralEngine:
    """USER: 10 weth / 100 debt; ликвидатор: 20 weth / 100 debt; ETH падает до 18 USD."""
    engine_minted.deposit_collateral_and_mint_debt(
        LIQUIDATOR, "weth", LIQUIDATOR_COLLATERAL, AMOUNT_TO_MINT
    )
    eth_usd.set_price(18 * 10**FEED_DECIMALS)
    return engine_minted
