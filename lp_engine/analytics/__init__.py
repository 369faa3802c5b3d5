"""Slippage helpers and position analytics."""

from lp_engine.analytics.position import (
    apr_from_fees,
    break_even_price,
    has_sufficient_liquidity,
    impermanent_loss,
    pool_analytics,
    share_value,
    would_impact_price,
)
from lp_engine.analytics.slippage import minimum_amounts, optimal_deposit, price_bounds

__all__ = [
    "apr_from_fees",
    "break_even_price",
    "has_sufficient_liquidity",
    "impermanent_loss",
    "pool_analytics",
    "share_value",
    "would_impact_price",
    "minimum_amounts",
    "optimal_deposit",
    "price_bounds",
]
