"""Core numeric types, pool snapshot and validation."""

from lp_engine.core.errors import (
    BelowMinimumLiquidity,
    DivisionByZero,
    EmptyPool,
    EmptyPoolInconsistentState,
    InsufficientShares,
    InvalidAmount,
    InvalidFee,
    InvalidPoolIdentifier,
    InvalidPoolState,
    InvalidPrice,
    InvalidSlippage,
    PoolEngineError,
    SharesExceedSupply,
    ZeroReserve,
)
from lp_engine.core.fixed_point import Rounding, to_decimal, to_fixed
from lp_engine.core.params import DepositParams, WithdrawParams
from lp_engine.core.pool import (
    DepositEstimate,
    MinimumAmounts,
    OptimalDeposit,
    PoolAnalytics,
    PoolState,
    PriceBounds,
    PriceImpact,
    ShareValue,
    SwapQuote,
    WithdrawEstimate,
    constant_product,
    spot_price,
)

__all__ = [
    "BelowMinimumLiquidity",
    "DivisionByZero",
    "EmptyPool",
    "EmptyPoolInconsistentState",
    "InsufficientShares",
    "InvalidAmount",
    "InvalidFee",
    "InvalidPoolIdentifier",
    "InvalidPoolState",
    "InvalidPrice",
    "InvalidSlippage",
    "PoolEngineError",
    "SharesExceedSupply",
    "ZeroReserve",
    "Rounding",
    "to_decimal",
    "to_fixed",
    "DepositParams",
    "WithdrawParams",
    "DepositEstimate",
    "MinimumAmounts",
    "OptimalDeposit",
    "PoolAnalytics",
    "PoolState",
    "PriceBounds",
    "PriceImpact",
    "ShareValue",
    "SwapQuote",
    "WithdrawEstimate",
    "constant_product",
    "spot_price",
]
