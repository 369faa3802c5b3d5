"""Deposit and withdraw request records handed over by the transaction layer."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DepositParams:
    """Parameters of a liquidity deposit, as strings from the caller.

    Prices bound the pool's B-per-A price at execution time. ``fee`` is the
    network fee in stroops, not the pool fee.
    """
    pool_id: str
    max_amount_a: str
    max_amount_b: str
    min_price: Optional[str] = None
    max_price: Optional[str] = None
    slippage_tolerance: Optional[str] = None
    fee: Optional[int] = None


@dataclass(frozen=True)
class WithdrawParams:
    """Parameters of a liquidity withdrawal."""
    pool_id: str
    shares: str
    min_amount_a: Optional[str] = None
    min_amount_b: Optional[str] = None
    slippage_tolerance: Optional[str] = None
    fee: Optional[int] = None
