"""Liquidity pool accounting engine."""

from lp_engine.calculators import (
    compute_deposit,
    compute_price_impact,
    compute_swap_output,
    compute_withdraw,
    quote_swap,
)
from lp_engine.config import DEFAULT_SETTINGS, EngineSettings, load_settings
from lp_engine.core import PoolEngineError, PoolState, Rounding

__all__ = [
    "compute_deposit",
    "compute_price_impact",
    "compute_swap_output",
    "compute_withdraw",
    "quote_swap",
    "DEFAULT_SETTINGS",
    "EngineSettings",
    "load_settings",
    "PoolEngineError",
    "PoolState",
    "Rounding",
]
