"""Deposit, withdraw and swap calculators."""

from lp_engine.calculators.deposit import compute_deposit, compute_deposit_shares
from lp_engine.calculators.swap import (
    compute_price_impact,
    compute_swap_output,
    fee_multiplier,
    quote_swap,
)
from lp_engine.calculators.withdraw import compute_withdraw, compute_withdraw_amounts

__all__ = [
    "compute_deposit",
    "compute_deposit_shares",
    "compute_price_impact",
    "compute_swap_output",
    "fee_multiplier",
    "quote_swap",
    "compute_withdraw",
    "compute_withdraw_amounts",
]
