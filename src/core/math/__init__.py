"""
Core math modules для collateral engine

Целочисленные fixed-point примитивы и расчёт health factor.
"""

# Fixed-point arithmetic
from src.core.math.fixed_point import (
    # Precision constants
    ADDITIONAL_FEED_PRECISION,
    MAX_UINT256,
    PRECISION,
    PRICE_DECIMALS,
    # Conversions
    asset_amount,
    normalize_price,
    usd_value,
    # Primitives
    mul_div,
    percent_of,
    # Validation
    is_uint,
    validate_uint,
)

# Health factor
from src.core.math.health_factor import (
    LIQUIDATION_BONUS,
    LIQUIDATION_PRECISION,
    LIQUIDATION_THRESHOLD,
    MAX_HEALTH_FACTOR,
    MIN_HEALTH_FACTOR,
    SeizureAmounts,
    calculate_health_factor,
    calculate_seizure,
    is_health_factor_broken,
)

__all__ = [
    # Fixed-point: Precision constants
    "ADDITIONAL_FEED_PRECISION",
    "MAX_UINT256",
    "PRECISION",
    "PRICE_DECIMALS",
    # Fixed-point: Conversions
    "asset_amount",
    "normalize_price",
    "usd_value",
    # Fixed-point: Primitives
    "mul_div",
    "percent_of",
    # Fixed-point: Validation
    "is_uint",
    "validate_uint",
    # Health factor: Constants
    "LIQUIDATION_BONUS",
    "LIQUIDATION_PRECISION",
    "LIQUIDATION_THRESHOLD",
    "MAX_HEALTH_FACTOR",
    "MIN_HEALTH_FACTOR",
    # Health factor: Types
    "SeizureAmounts",
    # Health factor: Functions
    "calculate_health_factor",
    "calculate_seizure",
    "is_health_factor_broken",
]
